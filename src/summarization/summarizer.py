import logging
from typing import Optional

from llm.llm_client import LLMClient
from meeting_calendar.errors import ConfigurationError, EmptyInputError, TransportError

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary available."
API_KEY_MISSING = "Error: API key not set."
SUMMARY_FAILED = "Failed to generate summary."

# Placeholders returned instead of raising; never worth extracting dates from.
SENTINEL_SUMMARIES = frozenset({NO_SUMMARY, API_KEY_MISSING, SUMMARY_FAILED})


def is_sentinel(text: str) -> bool:
    return (text or "").strip() in SENTINEL_SUMMARIES


class Summarizer:
    """Condenses meeting text through the generation service.

    Service faults are masked: the caller always gets a string back, and
    the real cause is logged here.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None, on_fallback=None):
        self.llm = llm_client or LLMClient()
        # called with a reason label whenever a sentinel is returned
        self._on_fallback = on_fallback

    def summarize(self, text: str) -> str:
        if not text or not text.strip():
            raise EmptyInputError("No text provided")

        try:
            summary = self.llm.summarize(text)
        except ConfigurationError as e:
            logger.error(f"Summarization skipped, service not configured: {e}")
            self._fallback("missing_credential")
            return API_KEY_MISSING
        except TransportError:
            logger.exception("Error generating summary")
            self._fallback("transport_error")
            return SUMMARY_FAILED

        summary = (summary or "").strip()
        if not summary:
            logger.warning("Generation service returned no summary content")
            self._fallback("empty_response")
            return NO_SUMMARY
        return summary

    def _fallback(self, reason: str) -> None:
        if self._on_fallback is not None:
            self._on_fallback(reason)
