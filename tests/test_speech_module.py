"""
Tests for the phrase catalogue and the Alexa response envelope.
"""

import pytest

from speech_module import PHRASES, SpeechResponse, create_alexa_response, create_empty_response, get_phrases


def test_response_with_reprompt_keeps_session_open():
    assert create_alexa_response("Hello", "Anything else?") == {
        "version": "1.0",
        "response": {
            "outputSpeech": {"type": "PlainText", "text": "Hello"},
            "reprompt": {"outputSpeech": {"type": "PlainText", "text": "Anything else?"}},
            "shouldEndSession": False,
        },
    }


def test_response_without_reprompt_ends_session():
    envelope = create_alexa_response("Goodbye!")

    assert envelope["response"]["shouldEndSession"] is True
    assert "reprompt" not in envelope["response"]


def test_empty_response():
    assert create_empty_response() == {"version": "1.0", "response": {}}
    assert SpeechResponse().to_envelope() == create_empty_response()


def test_speech_response_session_flag():
    assert SpeechResponse("Hi", "Well?").keeps_session_open is True
    assert SpeechResponse("Bye").keeps_session_open is False


@pytest.mark.parametrize("locale, language", [
    ("en-US", "en"), ("en-GB", "en"), ("es-ES", "es"), ("es_MX", "es"), ("ES-US", "es"),
])
def test_locale_selection(locale, language):
    assert get_phrases(locale).language == language


def test_unknown_locale_falls_back():
    assert get_phrases("fr-FR", "es-ES").language == "es"
    assert get_phrases(None, "ja-JP").language == "en"


def test_door_phrases():
    phrases = get_phrases("en-US")

    assert phrases.say("door_open", door="exterior") == "The exterior door is open."
    assert phrases.say("reflector", intent_name="FooIntent") == "You just triggered FooIntent."


def test_catalogues_have_the_same_keys():
    assert set(PHRASES["en"]) == set(PHRASES["es"])
    assert set(PHRASES["en"]["door_names"]) == set(PHRASES["es"]["door_names"])


@pytest.mark.parametrize("locale", [5, ["es-ES"], {"locale": "es-ES"}, ""])
def test_non_string_locale_uses_default(locale):
    assert get_phrases(locale, "es-ES").language == "es"
