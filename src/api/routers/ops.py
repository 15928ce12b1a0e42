import os
import logging

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_calendar_store
from api.metrics import MARKED_DATES
from storage.calendar_store import CalendarStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(store: CalendarStore = Depends(get_calendar_store)) -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "llm_provider": os.getenv("LLM_PROVIDER", "gemini"),
        "events": len(store.events),
        "marked_dates": len(store.marked_dates),
    }


@router.get("/metrics")
async def metrics(store: CalendarStore = Depends(get_calendar_store)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    try:
        MARKED_DATES.set(len(store.marked_dates))
    except Exception:
        pass

    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
