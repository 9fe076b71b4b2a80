import pytest
from pydantic import ValidationError

from services.relay_service.app.config import DEFAULT_MODELS, load_settings


def test_load_settings_from_mapping():
    s = load_settings({
        "GEMINI_API_KEY": "g",
        "OPENAI_API_KEY": "  ",
        "PORT": "8080",
        "APP_PIN": "1947",
        "OPENAI_MODEL": "gpt-4o",
        "CORS_ORIGINS": "http://a.test, http://b.test",
    })
    assert s.is_configured("gemini")
    assert not s.is_configured("anthropic")
    assert not s.is_configured("openai")
    assert s.port == 8080
    assert s.app_pin == "1947"
    assert s.model_for("openai") == "gpt-4o"
    assert s.model_for("gemini") == DEFAULT_MODELS["gemini"]
    assert s.cors_origins == ("http://a.test", "http://b.test")


def test_defaults_for_empty_environment():
    s = load_settings({})
    assert s.port == 3000
    assert s.http_timeout_seconds is None
    assert s.app_pin is None
    assert s.cors_origins == ("*",)
    assert not any(s.is_configured(p) for p in ("gemini", "anthropic", "openai"))


def test_settings_are_immutable():
    s = load_settings({})
    with pytest.raises(ValidationError):
        s.port = 1


@pytest.mark.parametrize("key, value", [("PORT", "abc"), ("HTTP_TIMEOUT_SECONDS", "soon")])
def test_invalid_numbers_fail_at_startup(key, value):
    with pytest.raises(ValueError):
        load_settings({key: value})
