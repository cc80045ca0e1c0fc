"""
Shared fixtures for the door skill tests.

The router is exercised with in-memory stand-ins for the device directory and
the shadow gateway; the AWS-facing modules are tested against botocore stubs.
"""

import pytest

from shadow_module import DoorState
from skill_module import DoorSkill

TEST_USER_ID = "amzn1.ask.account.TESTUSER"


class FakeTable:
    """DynamoDB Table stand-in answering get_item with a fixed response"""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {}
        self.error = error
        self.keys = []

    def get_item(self, Key):
        self.keys.append(Key)
        if self.error:
            raise self.error
        return self.response


class FakeDirectory:
    """Device directory that always resolves to one thing name"""

    def __init__(self, thing_name="iot_thing"):
        self.thing_name = thing_name
        self.lookups = []

    def resolve_thing_name(self, user_id, request_id=""):
        self.lookups.append(user_id)
        return self.thing_name


class FakeGateway:
    """Shadow gateway holding one door state and recording desired-state writes"""

    def __init__(self, door_state=None, accepted=True, error=None):
        self.door_state = door_state
        self.accepted = accepted
        self.error = error
        self.reads = []
        self.writes = []

    def get_door_state(self, thing_name, request_id=""):
        self.reads.append(thing_name)
        if self.error:
            raise self.error
        return self.door_state

    def set_door_desired(self, thing_name, door, value, request_id=""):
        self.writes.append((thing_name, door, value))
        if self.error:
            raise self.error
        return self.accepted


def make_event(request_type, intent_name=None, user_id=TEST_USER_ID, locale="en-US",
               request_id="amzn1.echo-api.request.TEST"):
    """Build a minimal Alexa custom skill request envelope"""
    request = {
        "type": request_type,
        "requestId": request_id,
        "locale": locale,
        "timestamp": "2026-10-19T07:00:00Z",
    }
    if intent_name is not None:
        request["intent"] = {"name": intent_name, "confirmationStatus": "NONE"}
    return {
        "version": "1.0",
        "session": {
            "new": request_type == "LaunchRequest",
            "sessionId": "amzn1.echo-api.session.TEST",
            "application": {"applicationId": "amzn1.ask.skill.TEST"},
            "user": {"userId": user_id},
        },
        "context": {
            "System": {
                "application": {"applicationId": "amzn1.ask.skill.TEST"},
                "user": {"userId": user_id},
            }
        },
        "request": request,
    }


def speech_of(envelope):
    return envelope["response"]["outputSpeech"]["text"]


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def gateway():
    return FakeGateway(door_state=DoorState())


@pytest.fixture
def skill(directory, gateway):
    return DoorSkill(directory, gateway)
