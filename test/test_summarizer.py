import httpx
import pytest

from llm.llm_client import LLMClient
from meeting_calendar.errors import EmptyInputError
from summarization.summarizer import (
    API_KEY_MISSING,
    NO_SUMMARY,
    SUMMARY_FAILED,
    Summarizer,
    is_sentinel,
)

def test_summary_text_is_returned(fake_provider_factory):
    provider = fake_provider_factory("  Team agreed to ship on 2024-06-10.\n")
    s = Summarizer(LLMClient(provider=provider))
    assert s.summarize("long transcript") == "Team agreed to ship on 2024-06-10."

def test_empty_response_degrades_to_placeholder(fake_provider_factory):
    reasons = []
    s = Summarizer(LLMClient(provider=fake_provider_factory("")), on_fallback=reasons.append)
    assert s.summarize("text") == NO_SUMMARY
    assert reasons == ["empty_response"]

def test_transport_failure_masked(failing_provider_factory):
    reasons = []
    provider = failing_provider_factory(httpx.ReadTimeout("timed out"))
    s = Summarizer(LLMClient(provider=provider), on_fallback=reasons.append)
    assert s.summarize("text") == SUMMARY_FAILED
    assert provider.calls == 1  # no retry
    assert reasons == ["transport_error"]

def test_missing_credential_masked(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "gemini")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert Summarizer(LLMClient()).summarize("text") == API_KEY_MISSING

def test_failures_are_logged(failing_provider_factory, caplog):
    provider = failing_provider_factory(httpx.ConnectError("refused"))
    with caplog.at_level("ERROR"):
        Summarizer(LLMClient(provider=provider)).summarize("text")
    assert "Error generating summary" in caplog.text

@pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
def test_blank_input_rejected_before_network(blank, fake_provider_factory):
    provider = fake_provider_factory("unused")
    with pytest.raises(EmptyInputError):
        Summarizer(LLMClient(provider=provider)).summarize(blank)
    assert provider.prompts == []

def test_is_sentinel():
    for text in (NO_SUMMARY, API_KEY_MISSING, SUMMARY_FAILED):
        assert is_sentinel(text)
    assert not is_sentinel("We meet on 2024-06-10.")
