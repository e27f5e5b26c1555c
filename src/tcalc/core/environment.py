"""
Environment configuration for tcalc.

Two variables are recognised:

    TCALC_NOW        ISO-8601 instant that pins the clock used for
                     today/tomorrow/yesterday/now. Naive values are UTC.
    TCALC_LOG_LEVEL  Logging level name for the command line tool
                     (DEBUG, INFO, WARNING, ERROR, CRITICAL).

Usage:
    from tcalc.core.environment import get_clock, get_log_level

    clock = get_clock()        # FixedClock if TCALC_NOW is set, else SystemClock
    level = get_log_level()    # logging.WARNING by default

Invalid values are never fatal: they log a warning and fall back to the
default.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from tcalc.core.clock import Clock, FixedClock, SystemClock

NOW_ENV_VAR = "TCALC_NOW"
LOG_LEVEL_ENV_VAR = "TCALC_LOG_LEVEL"

_DEFAULT_LOG_LEVEL = logging.WARNING

_LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

logger = logging.getLogger(__name__)


def get_clock() -> Clock:
    """Get the clock selected by TCALC_NOW.

    Returns:
        A FixedClock at the configured instant, or a SystemClock if
        TCALC_NOW is unset, empty or not a valid ISO-8601 datetime.

    Examples:
        >>> import os
        >>> os.environ["TCALC_NOW"] = "2025-09-27T12:00:00"
        >>> get_clock()
        FixedClock(2025-09-27T12:00:00+00:00)
    """
    raw = os.environ.get(NOW_ENV_VAR, "").strip()
    if not raw:
        return SystemClock()

    try:
        instant = datetime.fromisoformat(raw)
    except ValueError:
        logger.warning(
            "Invalid %s value '%s'. Expected an ISO-8601 datetime; using the system clock.",
            NOW_ENV_VAR,
            raw,
        )
        return SystemClock()

    return FixedClock(instant)


def get_log_level() -> int:
    """Get the logging level named by TCALC_LOG_LEVEL (default WARNING)."""
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").lower().strip()
    if not raw:
        return _DEFAULT_LOG_LEVEL

    level = _LOG_LEVELS.get(raw)
    if level is None:
        logger.warning(
            "Unknown %s value '%s'. Valid values: %s. Defaulting to warning.",
            LOG_LEVEL_ENV_VAR,
            raw,
            ", ".join(sorted(_LOG_LEVELS)),
        )
        return _DEFAULT_LOG_LEVEL
    return level
