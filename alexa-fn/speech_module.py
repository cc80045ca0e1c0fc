"""
Speech Module

Phrase catalogue for the door skill and the helpers that wrap a chosen phrase
into the Alexa custom skill response envelope.
"""

PHRASES = {
    'en': {
        'door_names': {
            'interior': 'interior door',
            'exterior': 'exterior door',
        },
        'welcome': ("Welcome to your smart device. You can open the interior door, close it, "
                    "or ask for its state. What would you like to do?"),
        'open_requested': "You asked to open the interior door.",
        'close_requested': "You asked to close the interior door.",
        'write_failed': "Sorry, I couldn't send the request to the {door}. Please try again later.",
        'write_reprompt': "Would you like to do anything else?",
        'door_open': "The {door} is open.",
        'door_closed': "The {door} is closed.",
        'door_unknown': "The {door} has an unknown state on the device.",
        'state_unavailable': "I couldn't get the state of the {door}. Please try again later.",
        'query_reprompt': "Would you like to check anything else?",
        'help': ("You can say: open the interior door, close the interior door, "
                 "or ask for the state of the interior or exterior door. What would you like to do?"),
        'help_reprompt': "What would you like to do?",
        'goodbye': "Goodbye!",
        'fallback': ("Sorry, I didn't understand. You can ask to open or close the interior door, "
                     "or ask for the state of the interior or exterior door."),
        'reflector': "You just triggered {intent_name}.",
        'error': "Sorry, there was a problem. Please try again.",
        'error_reprompt': "Could you repeat what you would like to do?",
    },
    'es': {
        'door_names': {
            'interior': 'puerta interior',
            'exterior': 'puerta exterior',
        },
        'welcome': ("Bienvenido a tu objeto inteligente. Puedes abrir la puerta interior, cerrarla "
                    "o consultar su estado. ¿Qué deseas hacer?"),
        'open_requested': "Solicitaste abrir la puerta interior.",
        'close_requested': "Solicitaste cerrar la puerta interior.",
        'write_failed': "No pude enviar la solicitud a la {door}. Intenta de nuevo más tarde.",
        'write_reprompt': "¿Quieres hacer algo más?",
        'door_open': "La {door} está abierta.",
        'door_closed': "La {door} está cerrada.",
        'door_unknown': "La {door} tiene un estado desconocido en el dispositivo.",
        'state_unavailable': "No pude obtener el estado de la {door}. Intenta de nuevo más tarde.",
        'query_reprompt': "¿Quieres consultar algo más?",
        'help': ("Puedes decir: abre la puerta interior, cierra la puerta interior, "
                 "o pregunta por el estado de la puerta interior o exterior. ¿Qué deseas hacer?"),
        'help_reprompt': "¿Qué deseas hacer?",
        'goodbye': "Hasta pronto.",
        'fallback': ("Lo siento, no entendí. Puedes pedir abrir o cerrar la puerta interior, "
                     "o preguntar por el estado de la puerta interior o exterior."),
        'reflector': "Intentaste ejecutar {intent_name}.",
        'error': "Disculpa, hubo un problema. Intenta de nuevo.",
        'error_reprompt': "¿Puedes repetir lo que deseas hacer?",
    },
}


def _language(locale):
    if not isinstance(locale, str) or not locale:
        return None
    return locale.replace('_', '-').split('-')[0].lower()


class Phrases:
    """Phrases for one language"""

    def __init__(self, language):
        self.language = language
        self.catalogue = PHRASES[language]

    def door_name(self, door):
        return self.catalogue['door_names'][door]

    def say(self, key, door=None, **values):
        if door is not None:
            values['door'] = self.door_name(door)
        return self.catalogue[key].format(**values)


def get_phrases(locale, default_locale='en-US'):
    """Pick the catalogue for the request locale, then the default locale, then English"""
    for candidate in (_language(locale), _language(default_locale)):
        if candidate in PHRASES:
            return Phrases(candidate)
    return Phrases('en')


class SpeechResponse:
    """What a handler wants said. The session stays open while a reprompt is pending."""

    def __init__(self, speech_text=None, reprompt_text=None):
        self.speech_text = speech_text
        self.reprompt_text = reprompt_text

    @property
    def keeps_session_open(self):
        return self.reprompt_text is not None

    def to_envelope(self):
        if self.speech_text is None:
            return create_empty_response()
        return create_alexa_response(self.speech_text, self.reprompt_text)

    def __repr__(self):
        return f"SpeechResponse(speech_text={self.speech_text!r}, reprompt_text={self.reprompt_text!r})"


def create_alexa_response(speech_text, reprompt_text=None):
    """Create a properly formatted Alexa response"""
    response = {
        "outputSpeech": {
            "type": "PlainText",
            "text": speech_text
        },
        "shouldEndSession": reprompt_text is None
    }
    if reprompt_text is not None:
        response["reprompt"] = {
            "outputSpeech": {
                "type": "PlainText",
                "text": reprompt_text
            }
        }
    return {
        "version": "1.0",
        "response": response
    }


def create_empty_response():
    """Response for requests that need no speech, such as SessionEndedRequest"""
    return {
        "version": "1.0",
        "response": {}
    }
