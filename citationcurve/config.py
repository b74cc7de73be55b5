"""Environment-driven settings for citationcurve."""

from __future__ import annotations

import os

from citationcurve.logging import configure_logging

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# OpenAlex citation source
OPENALEX_API_BASE = os.environ.get("OPENALEX_API_BASE", "https://api.openalex.org")
OPENALEX_EMAIL = os.environ.get("OPENALEX_EMAIL", "")  # Optional: for polite pool
OPENALEX_MAX_CONCURRENT = int(os.environ.get("OPENALEX_MAX_CONCURRENT", "10"))
OPENALEX_TIMEOUT_SECONDS = float(os.environ.get("OPENALEX_TIMEOUT_SECONDS", "30"))
OPENALEX_RATE_LIMIT_DELAY = float(os.environ.get("OPENALEX_RATE_LIMIT_DELAY", "0.1"))

DEBUG = os.environ.get("DEBUG", "").lower() == "true"

# Ensure structlog-backed modules emit consistent logs when served.
configure_logging(cli_mode=False, log_level=LOG_LEVEL)
