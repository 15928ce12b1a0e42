import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from api.dependencies import get_calendar_store
from api.metrics import EVENTS_MERGED_TOTAL, MARKED_DATES
from meeting_calendar.errors import EmptyTaskError
from storage.calendar_store import CalendarStore

router = APIRouter()
logger = logging.getLogger(__name__)


class TaskIn(BaseModel):
    task: Optional[str] = None


class SelectionIn(BaseModel):
    date: Optional[str] = None


def _invalid_date(date: str) -> HTTPException:
    return HTTPException(status_code=400, detail=f"Invalid date {date!r}. Use YYYY-MM-DD")


@router.get("")
async def get_calendar(store: CalendarStore = Depends(get_calendar_store)) -> dict:
    """All events plus the highlighted dates."""
    return store.snapshot()


@router.put("/selection")
async def select_date(
    payload: SelectionIn, store: CalendarStore = Depends(get_calendar_store)
) -> dict:
    try:
        selected = store.select(payload.date)
    except ValueError:
        raise _invalid_date(payload.date)

    events = store.events_on(selected) if selected else []
    return {
        "selected_date": selected,
        "events": [e.model_dump() for e in events],
    }


@router.get("/{date}")
async def get_events_on(date: str, store: CalendarStore = Depends(get_calendar_store)) -> dict:
    try:
        events = store.events_on(date)
    except ValueError:
        raise _invalid_date(date)
    return {"date": date, "events": [e.model_dump() for e in events]}


@router.post("/{date}/tasks")
async def add_task(
    date: str, payload: TaskIn, store: CalendarStore = Depends(get_calendar_store)
) -> dict:
    try:
        event = store.add_task(date, payload.task)
    except EmptyTaskError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (ValidationError, ValueError):
        raise _invalid_date(date)

    logger.info(f"Added task on {event.date}")
    try:
        EVENTS_MERGED_TOTAL.inc()
        MARKED_DATES.set(len(store.marked_dates))
    except Exception:
        pass

    return {"event": event.model_dump(), "marked_dates": sorted(store.marked_dates)}
