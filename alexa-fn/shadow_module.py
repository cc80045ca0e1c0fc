"""
AWS IoT Device Shadow Module

Reads and writes the door state document of a thing through the AWS IoT
device shadow service. The shadow holds two sections:

- desired:  the state the skill asked for (written here)
- reported: the last state the device confirmed (written by the device)

Each section may carry ``interiorDoor`` and ``exteriorDoor`` string fields.
Only the interior door can be driven from the skill; the exterior door is
read-only. Failures are logged and absorbed so the skill always has
something to say.
"""

import json
import logging
from typing import Dict, Optional

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)

INTERIOR = 'interior'
EXTERIOR = 'exterior'

# Door -> shadow field
DOOR_FIELDS = {
    INTERIOR: 'interiorDoor',
    EXTERIOR: 'exteriorDoor',
}

WRITABLE_DOORS = (INTERIOR,)
DESIRED_VALUES = ('OPEN', 'CLOSE')

CLIENT_CONFIG = Config(retries={'total_max_attempts': 1, 'mode': 'standard'})


def create_iot_data_client(settings):
    """Create the iot-data client, pointed at the account endpoint when one is configured"""
    kwargs = {'region_name': settings.region, 'config': CLIENT_CONFIG}
    if settings.iot_endpoint:
        kwargs['endpoint_url'] = settings.iot_endpoint
    return boto3.client('iot-data', **kwargs)


def _section(state, name):
    section = state.get(name)
    return section if isinstance(section, dict) else {}


class DoorState:
    """The desired/reported door fields of one shadow document"""

    def __init__(self, desired: Optional[Dict] = None, reported: Optional[Dict] = None):
        self.desired = desired or {}
        self.reported = reported or {}

    @classmethod
    def from_shadow_state(cls, state: Dict) -> 'DoorState':
        return cls(desired=_section(state, 'desired'), reported=_section(state, 'reported'))

    def door_value(self, door: str) -> Optional[str]:
        """Reported state wins over desired; None when neither section has the door"""
        field = DOOR_FIELDS[door]
        return self.reported.get(field) or self.desired.get(field) or None

    def __repr__(self):
        return f"DoorState(desired={self.desired!r}, reported={self.reported!r})"


class ShadowGateway:
    """Door state access for a thing's device shadow"""

    def __init__(self, iot_client):
        self.iot_client = iot_client

    def get_door_state(self, thing_name: str, request_id: str = "") -> Optional[DoorState]:
        """
        Fetch the shadow of ``thing_name`` and return its door state.
        Returns None when the shadow cannot be read or has no state object,
        including when the thing has never reported anything.
        """
        logger.info(f"[{request_id}] Getting shadow for thing: {thing_name}")

        try:
            response = self.iot_client.get_thing_shadow(thingName=thing_name)
            payload = json.loads(response['payload'].read())
            logger.debug(f"[{request_id}] Full shadow: {json.dumps(payload, indent=2)}")

            state = payload.get('state') if isinstance(payload, dict) else None
            if not isinstance(state, dict):
                logger.warning(f"[{request_id}] Shadow for {thing_name} has no state section")
                return None

            door_state = DoorState.from_shadow_state(state)
            for door, field in DOOR_FIELDS.items():
                logger.info(f"[{request_id}] {field} desired={door_state.desired.get(field)} "
                            f"reported={door_state.reported.get(field)}")
            return door_state

        except Exception as e:
            logger.error(f"[{request_id}] Error getting shadow for {thing_name}: {str(e)}")
            return None

    def set_door_desired(self, thing_name: str, door: str, value: str, request_id: str = "") -> bool:
        """
        Ask for ``door`` to move to ``value`` by updating the desired section.
        This only records the request in the shadow; it does not wait for the
        device to move. Returns True if the update was accepted.
        """
        if door not in WRITABLE_DOORS:
            raise ValueError(f"The {door} door cannot be controlled")
        if value not in DESIRED_VALUES:
            raise ValueError(f"Unsupported door value: {value}")

        payload = {
            "state": {
                "desired": {
                    DOOR_FIELDS[door]: value
                }
            }
        }

        logger.info(f"[{request_id}] Updating shadow of {thing_name}: {DOOR_FIELDS[door]}={value}")

        try:
            self.iot_client.update_thing_shadow(
                thingName=thing_name,
                payload=json.dumps(payload).encode('utf-8')
            )
            logger.info(f"[{request_id}] update_thing_shadow accepted for {thing_name}")
            return True
        except Exception as e:
            logger.error(f"[{request_id}] Error updating shadow for {thing_name}: {str(e)}")
            return False
