import asyncio
import logging
import os
import time
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from api import state
from api.backend import BackendAPI
from api.dependencies import get_backend
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from meeting_calendar.config import UPLOAD_DIR
from meeting_calendar.errors import EmptyInputError, ProcessingFailed, TranscriptionError
from meeting_calendar.models import PipelineResult, SpeechUtterance

router = APIRouter()
logger = logging.getLogger(__name__)


class TextIn(BaseModel):
    text: Optional[str] = None


def _record(endpoint: str, status: str, start: float) -> None:
    # best-effort
    try:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)
    except Exception:
        pass


def _serialize_result(result: PipelineResult) -> dict:
    return {
        "summary": result.summary,
        "dates": result.dates,
        "events": [e.model_dump() for e in result.events],
    }


async def _run_pipeline(endpoint: str, fn, *args):
    """Run a blocking backend call off the event loop, mapping errors to HTTP."""
    start = time.time()
    async with state.pipeline_slots:
        try:
            result = await asyncio.to_thread(fn, *args)
        except EmptyInputError as e:
            _record(endpoint, "rejected", start)
            raise HTTPException(status_code=400, detail=str(e))
        except TranscriptionError as e:
            _record(endpoint, "transcription_failed", start)
            raise HTTPException(
                status_code=502,
                detail={"error": "Transcription failed", "output": e.output},
            )
        except ProcessingFailed as e:
            _record(endpoint, "failed", start)
            raise HTTPException(status_code=500, detail=str(e))

    _record(endpoint, "processed", start)
    return result


@router.post("/process-text")
async def process_text(payload: TextIn, backend: BackendAPI = Depends(get_backend)) -> dict:
    logger.info(f"Received text submission: {(payload.text or '')[:50]}...")
    result = await _run_pipeline("/process-text", backend.submit_text, payload.text)
    return _serialize_result(result)


@router.post("/transcribe")
async def transcribe_utterance(
    payload: SpeechUtterance, backend: BackendAPI = Depends(get_backend)
) -> dict:
    """One utterance from the browser's speech recognition."""
    result = await _run_pipeline("/transcribe", backend.submit_utterance, payload)
    if result is None:
        return {"status": "partial", "transcript": payload.transcript}
    return {"status": "processed", "transcript": payload.transcript, **_serialize_result(result)}


@router.post("/extract-dates")
async def extract_dates(payload: TextIn, backend: BackendAPI = Depends(get_backend)) -> dict:
    dates = await _run_pipeline("/extract-dates", backend.extract_dates, payload.text)
    return {"dates": dates}


@router.post("/upload-audio")
async def upload_audio(
    file: UploadFile = File(...), backend: BackendAPI = Depends(get_backend)
) -> dict:
    upload_dir = Path(UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(file.filename or "").suffix or ".wav"
    dest_path = upload_dir / f"{uuid.uuid4().hex}{suffix}"

    try:
        with open(dest_path, "wb") as out:
            while True:
                chunk = await file.read(1024 * 1024)
                if not chunk:
                    break
                out.write(chunk)

        logger.info(f"Stored upload {file.filename!r} as {dest_path.name}")
        result = await _run_pipeline("/upload-audio", backend.submit_audio, dest_path)
    finally:
        if dest_path.exists():
            os.remove(dest_path)

    return _serialize_result(result)
