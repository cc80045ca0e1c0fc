"""
Configuration Module for the Door Skill

Reads the skill settings from environment variables and sets up logging.
Both entry points (AWS Lambda and Azure Functions) load settings once at
cold start and pass them to the clients they build.

Environment Variables:
- AWS_REGION: region of the DynamoDB table and the IoT endpoint (default us-east-2)
- IOT_ENDPOINT: AWS IoT data endpoint host, e.g. xxxx-ats.iot.us-east-2.amazonaws.com
- USER_THING_TABLE: DynamoDB table mapping Alexa user ids to thing names (default user_thing)
- DEFAULT_THING_NAME: thing used when a user has no mapping (default iot_thing)
- CONFIRM_FAILED_WRITES: answer the door confirmation even if the shadow update failed (default true)
- DEFAULT_LOCALE: locale used when a request carries none we can speak (default en-US)
- LOG_LEVEL: root logging level (default INFO)
"""

import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'

DEFAULT_REGION = 'us-east-2'
DEFAULT_TABLE_NAME = 'user_thing'
DEFAULT_THING_NAME = 'iot_thing'
DEFAULT_LOCALE = 'en-US'


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _log_level(value):
    """Known logging level name, INFO otherwise"""
    name = (value or '').strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return 'INFO'


def normalize_endpoint_url(endpoint):
    """Turn a bare IoT endpoint host into the URL boto3 expects"""
    if not endpoint:
        return None
    endpoint = endpoint.strip()
    if not endpoint.startswith(('https://', 'http://')):
        endpoint = f"https://{endpoint}"
    return endpoint


class SkillSettings:
    """Settings shared by the directory resolver, the shadow gateway and the router"""

    def __init__(self, region=DEFAULT_REGION, iot_endpoint=None, table_name=DEFAULT_TABLE_NAME,
                 default_thing_name=DEFAULT_THING_NAME, confirm_failed_writes=True,
                 default_locale=DEFAULT_LOCALE, log_level='INFO'):
        self.region = region
        self.iot_endpoint = normalize_endpoint_url(iot_endpoint)
        self.table_name = table_name
        self.default_thing_name = default_thing_name
        self.confirm_failed_writes = confirm_failed_writes
        self.default_locale = default_locale
        self.log_level = log_level

    @classmethod
    def from_env(cls):
        return cls(
            region=os.environ.get('AWS_REGION') or DEFAULT_REGION,
            iot_endpoint=os.environ.get('IOT_ENDPOINT', ''),
            table_name=os.environ.get('USER_THING_TABLE') or DEFAULT_TABLE_NAME,
            default_thing_name=os.environ.get('DEFAULT_THING_NAME') or DEFAULT_THING_NAME,
            confirm_failed_writes=_env_flag('CONFIRM_FAILED_WRITES', True),
            default_locale=os.environ.get('DEFAULT_LOCALE') or DEFAULT_LOCALE,
            log_level=_log_level(os.environ.get('LOG_LEVEL')),
        )

    def describe(self):
        """Settings summary safe to log or return from the health endpoint"""
        return {
            "region": self.region,
            "iot_endpoint_configured": bool(self.iot_endpoint),
            "user_thing_table": self.table_name,
            "default_thing_name": self.default_thing_name,
            "confirm_failed_writes": self.confirm_failed_writes,
            "default_locale": self.default_locale,
        }


def configure_logging(settings):
    """Configure root logging with the detailed format used by every module"""
    level = _log_level(settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Lambda installs its own root handler before our code runs
    logging.getLogger().setLevel(level)
    # botocore is chatty at DEBUG
    logging.getLogger('botocore').setLevel(logging.WARNING)
