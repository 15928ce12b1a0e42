"""Date extraction strategies.

Both strategies take text and return the calendar dates found in it as
``YYYY-MM-DD`` strings, in the order they appear, duplicates kept.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional

import dateparser.search

from llm.llm_client import LLMClient
from meeting_calendar.errors import ConfigurationError, TransportError
from meeting_calendar.models import is_canonical_date
from summarization.summarizer import is_sentinel

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class DateExtractor(ABC):
    name: str = ""

    def extract_dates(self, text: str) -> List[str]:
        if not text or not text.strip() or is_sentinel(text):
            return []
        return self._extract(text)

    @abstractmethod
    def _extract(self, text: str) -> List[str]:
        raise NotImplementedError


class LocalDateExtractor(DateExtractor):
    """Natural-language date parsing with dateparser; no network involved.

    Matches made only of ordinary words ("We", "may", "sat") are dropped.
    A match is kept when it holds a digit or a whole weekday, month or
    relative-date word.
    """

    name = "local"

    def __init__(self, relative_base: Optional[Callable[[], datetime]] = None):
        # evaluated on every call
        self._relative_base = relative_base or datetime.now

    def _extract(self, text: str) -> List[str]:
        settings = {
            "RELATIVE_BASE": self._relative_base(),
            "RETURN_AS_TIMEZONE_AWARE": False,
        }
        results = dateparser.search.search_dates(text, languages=["en"], settings=settings)
        if not results:
            return []

        kept = [(matched, dt) for matched, dt in results if looks_like_date(matched)]
        if len(kept) != len(results):
            dropped = [m for m, _ in results if not looks_like_date(m)]
            logger.debug(f"Ignoring non-date matches: {dropped}")

        dates = [dt.date().isoformat() for _matched, dt in kept]
        logger.debug(f"Local parse found {len(dates)} date(s): {[m for m, _ in kept]}")
        return dates


_WEEKDAYS = {"monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"}
_MONTHS = {
    "january", "february", "march", "april", "may", "june", "july",
    "august", "september", "october", "november", "december",
}
# also ordinary English words; only count when capitalised
_AMBIGUOUS_MONTHS = {"may", "march"}
_RELATIVE_WORDS = {
    "today", "tonight", "tomorrow", "yesterday", "fortnight",
    "day", "days", "week", "weeks", "weekend", "month", "months", "year", "years",
}
_WORD = re.compile(r"[A-Za-z]+")


def looks_like_date(matched: str) -> bool:
    """Whether a dateparser match is a real date expression."""
    if any(ch.isdigit() for ch in matched):
        return True

    for word in _WORD.findall(matched):
        low = word.lower()
        if low in _WEEKDAYS or low in _RELATIVE_WORDS:
            return True
        if low in _MONTHS and (low not in _AMBIGUOUS_MONTHS or word[0].isupper()):
            return True
    return False


class ServiceDateExtractor(DateExtractor):
    """Asks the generation service for dates and keeps only strict YYYY-MM-DD matches."""

    name = "service"

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client or LLMClient()

    def _extract(self, text: str) -> List[str]:
        try:
            raw = self.llm.extract_dates(text)
        except ConfigurationError as e:
            logger.warning(f"Service date extraction skipped, service not configured: {e}")
            return []
        except TransportError as e:
            logger.warning(f"Service date extraction failed: {e}")
            return []

        return filter_canonical_dates(raw)


def filter_canonical_dates(raw: str) -> List[str]:
    """Return the ``YYYY-MM-DD`` substrings of ``raw`` that are real calendar days."""
    out = []
    for candidate in DATE_PATTERN.findall(raw or ""):
        if is_canonical_date(candidate):
            out.append(candidate)
        else:
            logger.debug(f"Dropping impossible date from service response: {candidate}")
    return out


_STRATEGIES = {
    LocalDateExtractor.name: LocalDateExtractor,
    ServiceDateExtractor.name: ServiceDateExtractor,
}


def get_date_extractor(name: str, llm_client: Optional[LLMClient] = None) -> DateExtractor:
    key = (name or "").strip().lower()
    if key not in _STRATEGIES:
        raise ValueError(f"Unknown date extraction strategy: {name!r}")
    if key == ServiceDateExtractor.name:
        return ServiceDateExtractor(llm_client=llm_client)
    return LocalDateExtractor()
