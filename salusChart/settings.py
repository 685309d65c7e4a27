"""Django settings for SalusChart.

Configuration is driven by environment variables so deployments can tune
chart defaults, the calendar time zone and logging without code changes.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_int(name: str, *, default: int) -> int:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed integer value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


def _env_float(name: str, *, default: float) -> float:
    """Parse a float environment variable."""

    raw = os.getenv(name)
    if raw is None:
        return default
    return float(raw.strip())


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

INSTALLED_APPS = [
    "core.apps.CoreConfig",
]

DATABASES: dict[str, dict[str, str]] = {}

LANGUAGE_CODE = os.getenv("SALUSCHART_LANGUAGE_CODE", "ko")
TIME_ZONE = os.getenv("SALUSCHART_TIME_ZONE", "Asia/Seoul")
USE_I18N = True
USE_TZ = True

SALUSCHART = {
    "TICK_COUNT": _env_int("SALUSCHART_TICK_COUNT", default=5),
    "PADDING_X": _env_float("SALUSCHART_PADDING_X", default=60.0),
    "PADDING_Y": _env_float("SALUSCHART_PADDING_Y", default=40.0),
    "MINIMAL_PADDING": _env_float("SALUSCHART_MINIMAL_PADDING", default=4.0),
    "LABEL_OFFSET": _env_float("SALUSCHART_LABEL_OFFSET", default=25.0),
    "BAR_WIDTH_RATIO": _env_float("SALUSCHART_BAR_WIDTH_RATIO", default=0.8),
    "PIE_PADDING": _env_float("SALUSCHART_PIE_PADDING", default=32.0),
}

_LOG_LEVEL = os.getenv("SALUSCHART_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "core": {"handlers": ["console"], "level": _LOG_LEVEL},
        "transform": {"handlers": ["console"], "level": _LOG_LEVEL},
    },
}
