from __future__ import annotations

import os

_TRUE_VALUES = {"1", "true", "yes", "on"}


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def database_echo() -> bool:
    """Log every SQL statement (DATABASE_ECHO=true), off by default."""
    return os.getenv("DATABASE_ECHO", "false").strip().lower() in _TRUE_VALUES
