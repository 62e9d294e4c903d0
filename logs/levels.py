"""Severity levels understood by the daily file writer."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

NOTICE = 25
ALERT = 55
EMERGENCY = 60

logging.addLevelName(NOTICE, "NOTICE")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(EMERGENCY, "EMERGENCY")

# Ordered from least to most severe.
LEVELS: Dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": NOTICE,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": ALERT,
    "emergency": EMERGENCY,
}

LEVEL_NAMES: Tuple[str, ...] = tuple(LEVELS)
LOWEST_LEVEL = min(LEVELS.values())
DEFAULT_LEVEL = "info"


class UnknownLevelError(ValueError):
    """Raised when a log call names a level outside :data:`LEVELS`."""

    def __init__(self, level: object) -> None:
        self.level = level
        super().__init__(
            f"Unknown log level {level!r}; expected one of: {', '.join(LEVEL_NAMES)}"
        )


def level_number(level: str) -> int:
    """Return the numeric :mod:`logging` level for *level*.

    Only the exact lowercase names are accepted. Callers that want
    case-insensitive matching use :func:`match_level` first.
    """

    if not isinstance(level, str) or level not in LEVELS:
        raise UnknownLevelError(level)
    return LEVELS[level]


def match_level(candidate: object) -> Optional[str]:
    """Return the level named by *candidate* (any case), or ``None``."""

    if not isinstance(candidate, str):
        return None
    lowered = candidate.lower()
    return lowered if lowered in LEVELS else None


__all__ = [
    "ALERT",
    "DEFAULT_LEVEL",
    "EMERGENCY",
    "LEVELS",
    "LEVEL_NAMES",
    "LOWEST_LEVEL",
    "NOTICE",
    "UnknownLevelError",
    "level_number",
    "match_level",
]
