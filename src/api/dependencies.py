from api import state
from api.backend import BackendAPI
from storage.calendar_store import CalendarStore


def get_backend() -> BackendAPI:
    return state.backend


def get_calendar_store() -> CalendarStore:
    return state.backend.store
