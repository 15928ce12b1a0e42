import logging
from typing import Optional

from extraction.date_extractor import DateExtractor, LocalDateExtractor
from meeting_calendar.errors import EmptyInputError, ProcessingFailed
from meeting_calendar.models import Event, PipelineResult
from summarization.summarizer import Summarizer

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Runs summarize -> extract dates -> build events for one submission.

    Does not touch the calendar; merging the result is up to the caller.
    """

    def __init__(
        self,
        summarizer: Optional[Summarizer] = None,
        extractor: Optional[DateExtractor] = None,
    ):
        self.summarizer = summarizer or Summarizer()
        self.extractor = extractor or LocalDateExtractor()

    def process(self, text: str) -> PipelineResult:
        if not text or not text.strip():
            raise EmptyInputError("No text provided")

        try:
            # 1. Summarize
            summary = self.summarizer.summarize(text)

            # 2. Extract dates from the summary, never the raw input
            dates = self.extractor.extract_dates(summary)

            # 3. One event per date, all sharing the summary
            events = [Event(date=d, summary=summary) for d in dates]
        except Exception as e:
            logger.exception(f"Error processing text ({self.extractor.name} strategy)")
            raise ProcessingFailed("Failed to process text.") from e

        logger.info(f"Pipeline run produced {len(events)} event(s)")
        return PipelineResult(summary=summary, events=events)
