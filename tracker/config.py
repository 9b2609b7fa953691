"""Configuration helpers for environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from tracker.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_DATA_FILE = "data/expenses.json"
DEFAULT_CURRENCY = "₹"


def _should_load_dotenv() -> bool:
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def data_file() -> Path:
    """Return the path of the JSON file backing the transaction store."""
    raw = (get_env("TRACKER_DATA_FILE", "") or "").strip()
    return Path(raw or DEFAULT_DATA_FILE)


def currency_symbol() -> str:
    return get_env("TRACKER_CURRENCY", DEFAULT_CURRENCY) or DEFAULT_CURRENCY


def log_level() -> int:
    """Return the numeric log level named by LOG_LEVEL."""
    name = (get_env("LOG_LEVEL", "INFO") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {name}")
    return level


def configure_logging(level: int | None = None) -> None:
    """Attach a single stream handler to the root logger."""
    root = logging.getLogger()
    root.setLevel(log_level() if level is None else level)
    if any(getattr(h, "_tracker_handler", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._tracker_handler = True
    root.addHandler(handler)
