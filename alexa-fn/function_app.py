"""
Azure Function App for the Door Skill

Serves the same Alexa custom skill as the Lambda entry point over an HTTP
trigger, for deployments that front the skill with an HTTPS endpoint.
"""

import azure.functions as func
import json
import logging
import uuid

from config_module import SkillSettings, configure_logging
from skill_module import build_skill
from speech_module import create_alexa_response, get_phrases

SETTINGS = SkillSettings.from_env()
configure_logging(SETTINGS)

logger = logging.getLogger(__name__)

SKILL = build_skill(SETTINGS)

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


def json_response(body, status_code=200):
    return func.HttpResponse(
        json.dumps(body),
        status_code=status_code,
        headers={'Content-Type': 'application/json'}
    )


@app.route(route="alexa_skill", methods=["POST"])
def alexa_skill(req: func.HttpRequest) -> func.HttpResponse:
    """Main Alexa skill endpoint"""
    request_id = str(uuid.uuid4())
    logger.info(f"[{request_id}] Alexa skill request received")

    try:
        req_body = req.get_json()
    except ValueError:
        req_body = None

    if not isinstance(req_body, dict) or not req_body:
        logger.error(f"[{request_id}] No JSON body in request")
        phrases = get_phrases(None, SETTINGS.default_locale)
        return json_response(
            create_alexa_response(phrases.say('error'), phrases.say('error_reprompt')),
            status_code=400
        )

    response = SKILL.handle_event(req_body)

    logger.info(f"[{request_id}] Sending response")
    return json_response(response)


@app.route(route="health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint"""
    status = {"status": "healthy"}
    status.update(SETTINGS.describe())
    return json_response(status)
