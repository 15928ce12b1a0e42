from __future__ import annotations

import re
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CANONICAL_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def to_canonical_date(value) -> str:
    """Return ``value`` as ``YYYY-MM-DD``; raises ValueError if it is not a real day.

    Time-of-day components are dropped.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValueError(f"unsupported date value: {value!r}")

    v = value.strip()
    if not CANONICAL_DATE_RE.match(v):
        raise ValueError(f"date must be YYYY-MM-DD, got {value!r}")
    # rejects 2024-02-30 and friends
    date.fromisoformat(v)
    return v


def is_canonical_date(value: str) -> bool:
    try:
        to_canonical_date(value)
    except ValueError:
        return False
    return True


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    summary: Optional[str] = None
    task: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def date_canonical(cls, v) -> str:
        return to_canonical_date(v)

    @model_validator(mode="after")
    def has_description(self) -> "Event":
        if self.summary is None and self.task is None:
            raise ValueError("event needs a summary or a task")
        return self

    @property
    def description(self) -> str:
        return self.task if self.task is not None else (self.summary or "")


class PipelineResult(BaseModel):
    summary: str
    events: List[Event] = Field(default_factory=list)

    @property
    def dates(self) -> List[str]:
        return [e.date for e in self.events]


class SpeechUtterance(BaseModel):
    """One recognised utterance from the browser speech capture."""

    transcript: str = ""
    is_final: bool = True
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
