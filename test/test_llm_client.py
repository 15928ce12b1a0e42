import json

import httpx
import pytest

from llm.llm_client import LLMClient, build_provider
from llm.providers.gemini_provider import GeminiProvider, first_candidate_text
from llm.providers.mock_provider import MockProvider
from meeting_calendar.errors import ConfigurationError, TransportError

def _gemini(monkeypatch, handler):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    return GeminiProvider(transport=httpx.MockTransport(handler))

def test_gemini_request_shape_and_response(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "A short summary."}]}}]}
        )

    provider = _gemini(monkeypatch, handler)
    out = provider.generate(user="hello")

    assert out == "A short summary."
    assert seen["url"].path.endswith("/models/gemini-test:generateContent")
    assert seen["url"].params["key"] == "test-key"
    assert seen["body"] == {"contents": [{"role": "user", "parts": [{"text": "hello"}]}]}

def test_gemini_no_candidates_is_empty_text(monkeypatch):
    provider = _gemini(monkeypatch, lambda request: httpx.Response(200, json={"candidates": []}))
    assert provider.generate(user="hello") == ""

def test_first_candidate_text_tolerates_missing_parts():
    assert first_candidate_text({}) == ""
    assert first_candidate_text({"candidates": [{"content": {}}]}) == ""

def test_gemini_missing_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        GeminiProvider()

def test_client_wraps_http_status_errors(monkeypatch):
    provider = _gemini(monkeypatch, lambda request: httpx.Response(503, json={}))
    with pytest.raises(TransportError):
        LLMClient(provider=provider).summarize("text")

def test_client_wraps_network_errors(failing_provider_factory):
    provider = failing_provider_factory(httpx.ConnectError("connection refused"))
    with pytest.raises(TransportError):
        LLMClient(provider=provider).complete("anything")

def test_client_prompts(fake_provider_factory):
    provider = fake_provider_factory("ok")
    client = LLMClient(provider=provider)
    client.summarize("we meet friday")
    client.extract_dates("we meet friday")
    assert provider.prompts[0] == 'Summarize this text concisely: "we meet friday"'
    assert "YYYY-MM-DD" in provider.prompts[1]
    assert "we meet friday" in provider.prompts[1]

def test_client_builds_provider_lazily(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "gemini")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    client = LLMClient()
    with pytest.raises(ConfigurationError):
        client.complete("hello")

def test_build_provider_by_name():
    assert isinstance(build_provider("mock"), MockProvider)
    with pytest.raises(ConfigurationError):
        build_provider("nope")

def test_mock_provider_answers_both_prompts():
    client = LLMClient(provider=MockProvider())
    summary = client.summarize("Kickoff on 2024-06-10. Review on 2024-06-15. Then lunch.")
    assert summary == "Kickoff on 2024-06-10. Review on 2024-06-15."
    raw = client.extract_dates(summary)
    assert "2024-06-10" in raw and "2024-06-15" in raw

def test_openai_provider_single_user_message(monkeypatch):
    from llm.providers.openai_provider import OpenAIProvider

    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "2024-06-10"}}]})

    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    provider = OpenAIProvider(transport=httpx.MockTransport(handler))
    assert provider.generate(user="dates please") == "2024-06-10"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["messages"] == [{"role": "user", "content": "dates please"}]

def test_ollama_provider(monkeypatch):
    from llm.providers.ollama_provider import OllamaProvider

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/chat"
        assert request.extensions["timeout"]["read"] == 7.5
        return httpx.Response(200, json={"message": {"content": "Summary."}})

    monkeypatch.setenv("OLLAMA_BASE_URL", "http://ollama.test")
    monkeypatch.setattr("llm.providers.ollama_provider.LLM_TIMEOUT_S", 7.5)
    provider = OllamaProvider(transport=httpx.MockTransport(handler))
    assert provider.generate(user="hi") == "Summary."
