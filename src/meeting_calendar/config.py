"""Service-wide settings.

Provider credentials are read by each provider when it is built; this module
only holds the knobs shared by the HTTP layer and the pipeline wiring.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Date extraction strategy per entry point ("local" or "service")
TEXT_DATE_STRATEGY = os.getenv("TEXT_DATE_STRATEGY", "local").strip().lower()
SPEECH_DATE_STRATEGY = os.getenv("SPEECH_DATE_STRATEGY", "service").strip().lower()
UPLOAD_DATE_STRATEGY = os.getenv("UPLOAD_DATE_STRATEGY", "local").strip().lower()

MAX_CONCURRENT_PIPELINES = int(os.getenv("MAX_CONCURRENT_PIPELINES", "4"))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
TRANSCRIBE_COMMAND = os.getenv("TRANSCRIBE_COMMAND", "whisper --model base")

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]

LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))
