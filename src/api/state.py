import asyncio

from api.backend import BackendAPI
from meeting_calendar.config import MAX_CONCURRENT_PIPELINES

# The one session-wide backend; it owns the CalendarStore
backend = BackendAPI()

# Caps in-flight pipeline runs (and so outbound generation-service calls)
pipeline_slots = asyncio.Semaphore(MAX_CONCURRENT_PIPELINES)
