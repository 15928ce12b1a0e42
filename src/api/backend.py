import logging
from pathlib import Path
from typing import Dict, List, Optional

from api.metrics import EVENTS_MERGED_TOTAL, MARKED_DATES, SUMMARY_FALLBACKS_TOTAL
from extraction.date_extractor import ServiceDateExtractor, get_date_extractor
from ingestion.adapters import DirectTextAdapter, SpeechTranscriptAdapter, UploadedAudioAdapter
from ingestion.transcription import WhisperTranscriber
from llm.llm_client import LLMClient
from meeting_calendar import config
from meeting_calendar.models import PipelineResult, SpeechUtterance
from pipeline.orchestrator import PipelineOrchestrator
from storage.calendar_store import CalendarStore
from summarization.summarizer import Summarizer

logger = logging.getLogger(__name__)


def _count_fallback(reason: str) -> None:
    try:
        SUMMARY_FALLBACKS_TOTAL.labels(reason=reason).inc()
    except Exception:
        pass


class BackendAPI:
    """Central orchestration component: owns the session calendar and one
    pipeline per entry point (direct text, live speech, uploaded audio)."""

    def __init__(
        self,
        store: Optional[CalendarStore] = None,
        llm_client: Optional[LLMClient] = None,
        transcriber: Optional[WhisperTranscriber] = None,
        strategies: Optional[Dict[str, str]] = None,
    ):
        self.store = store or CalendarStore()
        llm = llm_client or LLMClient()
        summarizer = Summarizer(llm, on_fallback=_count_fallback)

        strategies = {
            "text": config.TEXT_DATE_STRATEGY,
            "speech": config.SPEECH_DATE_STRATEGY,
            "upload": config.UPLOAD_DATE_STRATEGY,
            **(strategies or {}),
        }
        self.pipelines: Dict[str, PipelineOrchestrator] = {
            source: PipelineOrchestrator(summarizer, get_date_extractor(name, llm_client=llm))
            for source, name in strategies.items()
        }
        self.date_extractor = ServiceDateExtractor(llm)

        self.text_adapter = DirectTextAdapter()
        self.speech_adapter = SpeechTranscriptAdapter()
        self.audio_adapter = UploadedAudioAdapter(transcriber)

    def submit_text(self, text: str) -> PipelineResult:
        return self._run("text", self.text_adapter.to_text(text))

    def submit_utterance(self, utterance: SpeechUtterance) -> Optional[PipelineResult]:
        """Returns None for interim utterances, which are not processed."""
        text = self.speech_adapter.to_text(utterance)
        if text is None:
            return None
        return self._run("speech", text)

    def submit_audio(self, audio_path: Path) -> PipelineResult:
        return self._run("upload", self.audio_adapter.to_text(audio_path))

    def extract_dates(self, text: str) -> List[str]:
        return self.date_extractor.extract_dates(self.text_adapter.to_text(text))

    def _run(self, source: str, text: str) -> PipelineResult:
        result = self.pipelines[source].process(text)

        # 4. Merge into the session calendar
        added = self.store.merge(result.events)
        logger.info(f"[{source}] merged {added} event(s) for dates {result.dates}")

        try:
            EVENTS_MERGED_TOTAL.inc(added)
            MARKED_DATES.set(len(self.store.marked_dates))
        except Exception:
            pass

        return result
