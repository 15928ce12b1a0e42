from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # Counters register under their base name; look up both spellings
        existing = REGISTRY._names_to_collectors
        return existing.get(name) or existing[f"{name}_total"]


REQUESTS_TOTAL = get_or_create_metric(
    "meeting_calendar_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "meeting_calendar_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

EVENTS_MERGED_TOTAL = get_or_create_metric(
    "meeting_calendar_events_merged_total",
    "Events merged into the calendar",
    Counter,
)

SUMMARY_FALLBACKS_TOTAL = get_or_create_metric(
    "meeting_calendar_summary_fallbacks_total",
    "Summaries replaced by a placeholder because the generation service failed",
    Counter,
    labelnames=["reason"],
)

MARKED_DATES = get_or_create_metric(
    "meeting_calendar_marked_dates", "Dates with at least one event", Gauge
)
