"""Turn each input source into the text payload the pipeline consumes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ingestion.transcription import WhisperTranscriber
from meeting_calendar.errors import EmptyInputError
from meeting_calendar.models import SpeechUtterance

logger = logging.getLogger(__name__)


def _require_text(text: Optional[str]) -> str:
    if text is None or not text.strip():
        raise EmptyInputError("No text provided")
    return text


class DirectTextAdapter:
    def to_text(self, text: Optional[str]) -> str:
        return _require_text(text)


class SpeechTranscriptAdapter:
    """Browser speech capture: only finalized utterances become a pipeline run."""

    def to_text(self, utterance: SpeechUtterance) -> Optional[str]:
        if not utterance.is_final:
            return None
        return _require_text(utterance.transcript).strip()


class UploadedAudioAdapter:
    def __init__(self, transcriber: Optional[WhisperTranscriber] = None):
        self.transcriber = transcriber or WhisperTranscriber()

    def to_text(self, audio_path: Path) -> str:
        """Transcribe an uploaded file, deleting it whether or not that worked."""
        audio_path = Path(audio_path)
        try:
            transcript = self.transcriber.transcribe(audio_path)
        finally:
            try:
                audio_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not delete uploaded audio {audio_path}: {e}")

        return _require_text(transcript)
