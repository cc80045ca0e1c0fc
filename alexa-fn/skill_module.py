"""
Door Skill Request Router

Routes one Alexa custom skill request to exactly one handler and returns the
Alexa response envelope. The skill keeps nothing between turns: each handler
resolves the user's thing, reads or writes its shadow, and picks a phrase.

Dispatch order (first match wins):
1.  LaunchRequest
2.  StateExteriorDoorIntent
3.  StateInteriorDoorIntent
4.  OpenInteriorDoorIntent
5.  CloseInteriorDoorIntent
6.  AMAZON.HelpIntent
7.  AMAZON.CancelIntent / AMAZON.StopIntent
8.  AMAZON.FallbackIntent
9.  SessionEndedRequest
10. any other IntentRequest (intent reflector)
Anything else, and any handler failure, goes to the error handler.
"""

import logging
import uuid

from directory_module import DeviceDirectory, create_user_thing_table
from shadow_module import EXTERIOR, INTERIOR, ShadowGateway, create_iot_data_client
from speech_module import Phrases, SpeechResponse, get_phrases

logger = logging.getLogger(__name__)

LAUNCH_REQUEST = 'LaunchRequest'
INTENT_REQUEST = 'IntentRequest'
SESSION_ENDED_REQUEST = 'SessionEndedRequest'

STATE_EXTERIOR_DOOR_INTENT = 'StateExteriorDoorIntent'
STATE_INTERIOR_DOOR_INTENT = 'StateInteriorDoorIntent'
OPEN_INTERIOR_DOOR_INTENT = 'OpenInteriorDoorIntent'
CLOSE_INTERIOR_DOOR_INTENT = 'CloseInteriorDoorIntent'
HELP_INTENT = 'AMAZON.HelpIntent'
CANCEL_INTENT = 'AMAZON.CancelIntent'
STOP_INTENT = 'AMAZON.StopIntent'
FALLBACK_INTENT = 'AMAZON.FallbackIntent'

OPEN = 'OPEN'
CLOSED_VALUES = ('CLOSE', 'CLOSED')


class UnhandledRequestError(ValueError):
    """Raised when no handler accepts a request"""


def _mapping(value):
    return value if isinstance(value, dict) else {}


def _text(value):
    return value if isinstance(value, str) and value else None


def extract_user_id(req_body):
    """User id from the session, or from the context for requests without one"""
    envelope = _mapping(req_body)
    session_user = _mapping(_mapping(envelope.get('session')).get('user'))
    context_user = _mapping(_mapping(_mapping(envelope.get('context')).get('System')).get('user'))
    return _text(session_user.get('userId')) or _text(context_user.get('userId'))


class SkillRequest:
    """The parts of an Alexa request envelope the router needs"""

    def __init__(self, request_type, intent_name=None, user_id=None, locale=None,
                 request_id=None, reason=None, error=None):
        self.request_type = request_type
        self.intent_name = intent_name
        self.user_id = user_id
        self.locale = locale
        self.request_id = request_id or str(uuid.uuid4())
        self.reason = reason
        self.error = error

    @classmethod
    def from_event(cls, req_body):
        if not isinstance(req_body, dict) or not isinstance(req_body.get('request'), dict):
            raise UnhandledRequestError("Request envelope has no request object")

        request = req_body['request']
        request_type = request.get('type')
        intent_name = None
        if request_type == INTENT_REQUEST:
            intent_name = _text(_mapping(request.get('intent')).get('name'))

        return cls(
            request_type=request_type,
            intent_name=intent_name,
            user_id=extract_user_id(req_body),
            locale=_text(request.get('locale')),
            request_id=_text(request.get('requestId')),
            reason=request.get('reason'),
            error=request.get('error'),
        )

    def is_intent(self, *intent_names):
        return self.request_type == INTENT_REQUEST and self.intent_name in intent_names


class DoorSkill:
    """Intent router and handlers for the interior/exterior door skill"""

    def __init__(self, directory, gateway, confirm_failed_writes=True, default_locale='en-US'):
        self.directory = directory
        self.gateway = gateway
        self.confirm_failed_writes = confirm_failed_writes
        self.default_locale = default_locale

    def handle_event(self, req_body):
        """Handle one request envelope. Always returns a response envelope."""
        skill_request = None
        try:
            skill_request = SkillRequest.from_event(req_body)
            logger.info(f"[{skill_request.request_id}] Request type: {skill_request.request_type}, "
                        f"intent: {skill_request.intent_name}, user: {skill_request.user_id}")
            response = self.dispatch(skill_request)
        except Exception as e:
            response = self.handle_error(req_body, skill_request, e)
        return response.to_envelope()

    def dispatch(self, request):
        phrases = get_phrases(request.locale, self.default_locale)

        if request.request_type == LAUNCH_REQUEST:
            return SpeechResponse(phrases.say('welcome'), phrases.say('welcome'))

        elif request.is_intent(STATE_EXTERIOR_DOOR_INTENT):
            return self.handle_door_query(request, phrases, EXTERIOR)

        elif request.is_intent(STATE_INTERIOR_DOOR_INTENT):
            return self.handle_door_query(request, phrases, INTERIOR)

        elif request.is_intent(OPEN_INTERIOR_DOOR_INTENT):
            return self.handle_door_request(request, phrases, OPEN, 'open_requested')

        elif request.is_intent(CLOSE_INTERIOR_DOOR_INTENT):
            return self.handle_door_request(request, phrases, 'CLOSE', 'close_requested')

        elif request.is_intent(HELP_INTENT):
            return SpeechResponse(phrases.say('help'), phrases.say('help_reprompt'))

        elif request.is_intent(CANCEL_INTENT, STOP_INTENT):
            return SpeechResponse(phrases.say('goodbye'))

        elif request.is_intent(FALLBACK_INTENT):
            return SpeechResponse(phrases.say('fallback'), phrases.say('help_reprompt'))

        elif request.request_type == SESSION_ENDED_REQUEST:
            logger.info(f"[{request.request_id}] Session ended: reason={request.reason}, error={request.error}")
            return SpeechResponse()

        elif request.request_type == INTENT_REQUEST and request.intent_name:
            logger.warning(f"[{request.request_id}] No handler for intent {request.intent_name}, reflecting it")
            return SpeechResponse(phrases.say('reflector', intent_name=request.intent_name))

        raise UnhandledRequestError(f"No handler for {request.request_type} (intent: {request.intent_name})")

    def handle_door_query(self, request, phrases, door):
        thing_name = self.directory.resolve_thing_name(request.user_id, request.request_id)
        door_state = self.gateway.get_door_state(thing_name, request.request_id)

        if door_state is None:
            speech = phrases.say('state_unavailable', door=door)
        else:
            value = door_state.door_value(door)
            logger.info(f"[{request.request_id}] {door} door state from shadow: {value}")

            if value == OPEN:
                speech = phrases.say('door_open', door=door)
            elif value in CLOSED_VALUES:
                speech = phrases.say('door_closed', door=door)
            else:
                speech = phrases.say('door_unknown', door=door)

        return SpeechResponse(speech, phrases.say('query_reprompt'))

    def handle_door_request(self, request, phrases, value, confirmation):
        thing_name = self.directory.resolve_thing_name(request.user_id, request.request_id)
        accepted = self.gateway.set_door_desired(thing_name, INTERIOR, value, request.request_id)

        if accepted or self.confirm_failed_writes:
            if not accepted:
                logger.warning(f"[{request.request_id}] Shadow update failed, confirming {value} anyway")
            speech = phrases.say(confirmation)
        else:
            speech = phrases.say('write_failed', door=INTERIOR)

        return SpeechResponse(speech, phrases.say('write_reprompt'))

    def handle_error(self, req_body, request, error):
        if request is not None:
            request_id, user_id, locale = request.request_id, request.user_id, request.locale
        else:
            request_id, user_id, locale = 'unknown', extract_user_id(req_body), None

        logger.exception(f"[{request_id}] Error handling request for user {user_id}: {str(error)}")

        try:
            phrases = get_phrases(locale, self.default_locale)
        except Exception as e:
            logger.error(f"[{request_id}] Error picking phrases, answering in English: {str(e)}")
            phrases = Phrases('en')
        return SpeechResponse(phrases.say('error'), phrases.say('error_reprompt'))


def build_skill(settings):
    """Create the AWS clients and the skill. Called once per process by the entry points."""
    directory = DeviceDirectory(create_user_thing_table(settings), settings.default_thing_name)
    gateway = ShadowGateway(create_iot_data_client(settings))
    return DoorSkill(
        directory,
        gateway,
        confirm_failed_writes=settings.confirm_failed_writes,
        default_locale=settings.default_locale,
    )
