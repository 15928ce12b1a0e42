from __future__ import annotations

from typing import Optional


class MeetingCalendarError(Exception):
    """Base class for all errors raised by the meeting calendar service."""


class ConfigurationError(MeetingCalendarError):
    """A required service credential or setting is missing."""


class TransportError(MeetingCalendarError):
    """The call to the generation service failed."""


class ProcessingFailed(MeetingCalendarError):
    """An unexpected fault while sequencing a pipeline run."""


class EmptyInputError(MeetingCalendarError, ValueError):
    """Blank text or a blank task was submitted."""


class EmptyTaskError(EmptyInputError):
    """A task annotation was blank or whitespace only."""


class TranscriptionError(MeetingCalendarError):
    """The external transcription process failed.

    ``output`` carries whatever diagnostics the process printed.
    """

    def __init__(self, message: str, output: Optional[str] = None):
        super().__init__(message)
        self.output = output or ""

    def __str__(self) -> str:
        base = super().__str__()
        if self.output:
            return f"{base}: {self.output.strip()}"
        return base
