"""Application settings."""

import os
from pathlib import Path


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Storage: a directory for CSV sheets, or "memory"
STORE_LOCATION = os.getenv("VOTES_STORE", "data")

# Remote backend used by the HTTP client
BACKEND_URL = os.getenv("VOTES_BACKEND_URL", "")
HTTP_TIMEOUT = float(os.getenv("VOTES_HTTP_TIMEOUT", "30"))

# Ballot policy on the server side
REQUIRE_COMPLETE = _env_flag("VOTES_REQUIRE_COMPLETE")
ENFORCE_ROSTER = _env_flag("VOTES_ENFORCE_ROSTER")

# Logging
LOG_LEVEL = os.getenv("VOTES_LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("VOTES_LOG_DIR", "logs"))
