"""
AWS Lambda entry point for the Door Skill

Alexa invokes this function directly with the custom skill request envelope.
Settings, logging and the AWS clients are set up once per container at cold
start and reused across invocations.
"""

import json
import logging

from config_module import SkillSettings, configure_logging
from skill_module import build_skill

SETTINGS = SkillSettings.from_env()
configure_logging(SETTINGS)

logger = logging.getLogger(__name__)

SKILL = build_skill(SETTINGS)


def lambda_handler(event, context):
    """AWS Lambda handler: route the Alexa request and return the response envelope"""
    invocation_id = getattr(context, 'aws_request_id', 'unknown')
    logger.info(f"[{invocation_id}] Received Alexa request")
    logger.debug(f"[{invocation_id}] Request envelope: {json.dumps(event, indent=2, default=str)}")

    response = SKILL.handle_event(event)

    logger.debug(f"[{invocation_id}] Returning response to Alexa: {json.dumps(response, indent=2)}")
    return response
