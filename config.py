# config.py — environment-driven settings
from __future__ import annotations
import os

API_URL = (os.getenv("RECORDS_API_URL") or "http://localhost:5050").strip().rstrip("/")

try:
    REQUEST_TIMEOUT = float(os.getenv("RECORDS_API_TIMEOUT", "30"))
except ValueError:
    REQUEST_TIMEOUT = 30.0

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()
DEBUG = os.getenv("DASH_DEBUG", "1") in ("1", "true", "yes", "on")

# Rows kept from an uploaded workbook for the import preview
PREVIEW_LIMIT = 10
