"""
Device Directory Module

Maps an Alexa user id to the name of the AWS IoT thing that user controls.
The mapping lives in a DynamoDB table keyed by ``user_id`` whose items carry a
``thing_name`` attribute. A missing mapping or a failed lookup never blocks the
user: the configured default thing is returned instead.
"""

import logging

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)

# One attempt per lookup, a failure falls back to the default thing
CLIENT_CONFIG = Config(retries={'total_max_attempts': 1, 'mode': 'standard'})


def create_user_thing_table(settings):
    """Create the DynamoDB Table resource for the user -> thing mapping"""
    dynamodb = boto3.resource('dynamodb', region_name=settings.region, config=CLIENT_CONFIG)
    return dynamodb.Table(settings.table_name)


class DeviceDirectory:
    """Resolves the thing name associated with an Alexa user"""

    def __init__(self, table, default_thing_name):
        self.table = table
        self.default_thing_name = default_thing_name

    def resolve_thing_name(self, user_id, request_id=""):
        """
        Look up the thing mapped to ``user_id``.
        Returns the stored thing_name, or the default thing name when there is
        no usable mapping or the lookup fails.
        """
        logger.info(f"[{request_id}] Looking up thing for user: {user_id}")

        try:
            response = self.table.get_item(Key={'user_id': user_id})
            item = response.get('Item')
            thing_name = item.get('thing_name') if isinstance(item, dict) else None

            if isinstance(thing_name, str) and thing_name:
                logger.info(f"[{request_id}] Thing found: {thing_name}")
                return thing_name

            logger.info(f"[{request_id}] No thing mapped for this user, using default {self.default_thing_name}")
            return self.default_thing_name

        except Exception as e:
            logger.error(f"[{request_id}] Error reading user thing mapping: {str(e)}")
            return self.default_thing_name
