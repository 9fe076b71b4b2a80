from services.relay_service.app.logic.providers import (
    ANTHROPIC,
    GEMINI,
    OPENAI,
    PROVIDERS,
    extract_error,
)
from services.relay_service.app.logic.types import GenerationRequest

REQ = GenerationRequest(system_prompt="Be terse.", user_message="Say hi.", max_tokens=50)


def test_fallback_order_is_fixed():
    assert [p.name for p in PROVIDERS] == ["gemini", "anthropic", "openai"]


def test_gemini_combines_prompts_into_one_part():
    url, headers, payload = GEMINI.build_request(REQ, "g-key", "gemini-1.5-flash")
    assert url.endswith("/models/gemini-1.5-flash:generateContent")
    assert "g-key" not in url
    assert headers["x-goog-api-key"] == "g-key"
    parts = payload["contents"][0]["parts"]
    assert len(parts) == 1
    assert parts[0]["text"] == "Be terse.\n\nSay hi."
    assert payload["generationConfig"]["maxOutputTokens"] == 50


def test_anthropic_separates_system_and_user():
    url, headers, payload = ANTHROPIC.build_request(REQ, "a-key", "claude")
    assert headers["x-api-key"] == "a-key"
    assert headers["anthropic-version"]
    assert payload["system"] == "Be terse."
    assert payload["messages"] == [{"role": "user", "content": "Say hi."}]
    assert payload["max_tokens"] == 50


def test_openai_uses_role_messages():
    url, headers, payload = OPENAI.build_request(REQ, "o-key", "gpt-4o-mini")
    assert headers["Authorization"] == "Bearer o-key"
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert payload["model"] == "gpt-4o-mini"


def test_text_extraction_paths():
    assert GEMINI.extract_text({"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}) == "ab"
    assert GEMINI.extract_text({"candidates": []}) is None
    assert ANTHROPIC.extract_text({"content": [{"type": "text", "text": "hi"}]}) == "hi"
    assert ANTHROPIC.extract_text({}) is None
    assert OPENAI.extract_text({"choices": [{"message": {"content": "yo"}}]}) == "yo"
    assert OPENAI.extract_text({"choices": [{"message": {"content": None}}]}) is None


def test_extract_error_shapes():
    assert extract_error({"error": {"message": "bad key"}}) == "bad key"
    assert extract_error({"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}) == "Overloaded"
    assert extract_error({"error": "plain"}) == "plain"
    assert extract_error({"choices": []}) is None


def test_empty_error_values_still_count_as_errors():
    assert extract_error({"error": {}}) == "unspecified error"
    assert extract_error({"error": ""}) == "unspecified error"
    assert extract_error({"error": None}) is None
