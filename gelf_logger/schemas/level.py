"""
Severity Levels
===============

Bounded Context: GELF Severity

Syslog severities as used by the GELF ``level`` field (0 = most severe).
"""

import logging
from enum import IntEnum


class Level(IntEnum):
    """Syslog severity levels, bound to their numeric GELF code."""
    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    @classmethod
    def default(cls) -> 'Level':
        """Severity used when a message does not specify one."""
        return cls.INFORMATIONAL

    @classmethod
    def from_logging_level(cls, levelno: int) -> 'Level':
        """Map a stdlib ``logging`` level number to a syslog severity.

        Levels between the stdlib constants round down to the closest one
        below them; anything under INFO (DEBUG, NOTSET, trace levels) is DEBUG.
        """
        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFORMATIONAL
        return cls.DEBUG

    @classmethod
    def from_name(cls, name: str) -> 'Level':
        """Parse a level name such as ``"debug"`` or ``"info"``.

        Raises:
            ValueError: If name is not a known severity
        """
        key = name.strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(level.name.lower() for level in cls)
            raise ValueError(f"Unknown level '{name}'. Must be one of: {valid}")


_ALIASES = {
    "EMERG": "EMERGENCY",
    "CRIT": "CRITICAL",
    "ERR": "ERROR",
    "WARN": "WARNING",
    "INFO": "INFORMATIONAL",
}
