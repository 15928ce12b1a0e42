"""
Speech-to-text through an external command-line transcriber (whisper by default).

The command is expected to write ``<stem>.txt`` into the given output directory.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from meeting_calendar.config import TRANSCRIBE_COMMAND
from meeting_calendar.errors import TranscriptionError

logger = logging.getLogger(__name__)


class WhisperTranscriber:
    def __init__(self, command: Optional[Sequence[str] | str] = None):
        if command is None:
            command = TRANSCRIBE_COMMAND
        if isinstance(command, str):
            command = shlex.split(command)
        self.command: List[str] = list(command)

    def transcribe(self, audio_path: Path) -> str:
        audio_path = Path(audio_path)
        out_dir = audio_path.parent
        transcript_path = out_dir / f"{audio_path.stem}.txt"

        cmd = [
            *self.command,
            str(audio_path),
            "--output_format", "txt",
            "--output_dir", str(out_dir),
        ]
        logger.info(f"Transcribing {audio_path.name}")

        try:
            r = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except FileNotFoundError as e:
            logger.error(f"Transcriber not found: {self.command[:1]}")
            raise TranscriptionError("Transcription failed", output=str(e)) from e

        if r.returncode != 0:
            logger.error(f"Transcription exited with {r.returncode}: {r.stderr.strip()}")
            raise TranscriptionError("Transcription failed", output=r.stderr or r.stdout)

        if not transcript_path.exists():
            logger.error(f"Transcriber wrote no transcript for {audio_path.name}")
            raise TranscriptionError(
                "Transcription failed",
                output=r.stderr or f"no transcript at {transcript_path}",
            )

        try:
            return transcript_path.read_text(encoding="utf-8").strip()
        finally:
            transcript_path.unlink(missing_ok=True)
