import re

import httpx
import pytest

from extraction.date_extractor import DateExtractor, ServiceDateExtractor
from llm.llm_client import LLMClient
from meeting_calendar.errors import EmptyInputError, ProcessingFailed
from pipeline.orchestrator import PipelineOrchestrator
from summarization.summarizer import SUMMARY_FAILED, Summarizer

SUMMARY = "We will meet on 2024-06-10 and follow up on 2024-06-15."

def _orchestrator(summary_provider, dates_provider):
    return PipelineOrchestrator(
        summarizer=Summarizer(LLMClient(provider=summary_provider)),
        extractor=ServiceDateExtractor(LLMClient(provider=dates_provider)),
    )

def test_process_builds_one_event_per_date(fake_provider_factory):
    dates_provider = fake_provider_factory("Sure! The dates are 2024-06-10 and 2024-06-15.")
    pipeline = _orchestrator(fake_provider_factory(SUMMARY), dates_provider)

    result = pipeline.process("raw meeting transcript ...")

    assert result.summary == SUMMARY
    assert result.dates == ["2024-06-10", "2024-06-15"]
    assert all(e.summary == SUMMARY and e.task is None for e in result.events)
    assert all(re.match(r"^\d{4}-\d{2}-\d{2}$", e.date) for e in result.events)

def test_extraction_runs_on_summary_not_input(fake_provider_factory):
    dates_provider = fake_provider_factory("")
    pipeline = _orchestrator(fake_provider_factory(SUMMARY), dates_provider)
    pipeline.process("RAW INPUT TEXT")
    assert SUMMARY in dates_provider.prompts[0]
    assert "RAW INPUT TEXT" not in dates_provider.prompts[0]

def test_summary_failure_gives_empty_result(failing_provider_factory, fake_provider_factory):
    dates_provider = fake_provider_factory("2024-06-10")
    pipeline = _orchestrator(failing_provider_factory(httpx.ConnectError("down")), dates_provider)

    result = pipeline.process("some text")

    assert result.summary == SUMMARY_FAILED
    assert result.events == []
    assert dates_provider.prompts == []

def test_unexpected_fault_becomes_processing_failed(fake_provider_factory):
    class BrokenExtractor(DateExtractor):
        name = "broken"

        def _extract(self, text):
            raise RuntimeError("boom")

    pipeline = PipelineOrchestrator(
        summarizer=Summarizer(LLMClient(provider=fake_provider_factory(SUMMARY))),
        extractor=BrokenExtractor(),
    )
    with pytest.raises(ProcessingFailed) as exc_info:
        pipeline.process("text")
    assert isinstance(exc_info.value.__cause__, RuntimeError)

def test_empty_input_rejected(fake_provider_factory):
    provider = fake_provider_factory(SUMMARY)
    pipeline = _orchestrator(provider, fake_provider_factory(""))
    with pytest.raises(EmptyInputError):
        pipeline.process("   ")
    assert provider.prompts == []
