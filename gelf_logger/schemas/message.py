"""
Log Message Schema
==================

Bounded Context: Log Event Data Structures

The caller-facing log event. A Message is built once per event, never
mutated, and consumed by Logger.log_message.

Message Flow:
    Caller → Message → Logger → WireMessage → Backend
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .common import Timestamp
from .level import Level


@dataclass(frozen=True)
class Message:
    """
    Single log event.

    Attributes:
        short_message: Short descriptive text (required, non-empty)
        level: Syslog severity (default: INFORMATIONAL)
        full_message: Optional long text, e.g. a traceback
        timestamp: Time of the event (default: creation time)
        metadata: Additional fields, written as ``_<key>`` on the wire

    The ``with_*`` methods return modified copies:

        >>> msg = (
        ...     Message("Disk almost full", Level.WARNING)
        ...     .with_full_message("/var is at 97%")
        ...     .with_metadata("mount", "/var")
        ... )
    """
    short_message: str
    level: Level = Level.INFORMATIONAL
    full_message: Optional[str] = None
    timestamp: Timestamp = field(default_factory=Timestamp.now)
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate and normalize fields."""
        if not isinstance(self.short_message, str) or not self.short_message:
            raise ValueError("short_message must be a non-empty string")
        if self.full_message is not None and not isinstance(self.full_message, str):
            raise ValueError(
                f"full_message must be a string, got {type(self.full_message).__name__}"
            )

        level = Level.default() if self.level is None else Level(self.level)
        object.__setattr__(self, 'level', level)
        object.__setattr__(self, 'timestamp', Timestamp.coerce(self.timestamp))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    def with_full_message(self, full_message: Optional[str]) -> 'Message':
        """Return a copy with the long message text set."""
        return replace(self, full_message=full_message)

    def with_timestamp(self, timestamp: Union[Timestamp, datetime, float]) -> 'Message':
        """Return a copy with an explicit event time."""
        return replace(self, timestamp=Timestamp.coerce(timestamp))

    def with_level(self, level: Level) -> 'Message':
        """Return a copy with a different severity."""
        return replace(self, level=level)

    def with_metadata(self, key: str, value: Any) -> 'Message':
        """Return a copy with one additional field set (overwrites ``key``)."""
        metadata = dict(self.metadata)
        metadata[key] = value
        return replace(self, metadata=metadata)

    def with_all_metadata(self, values: Mapping[str, Any]) -> 'Message':
        """Return a copy with several additional fields set."""
        metadata = dict(self.metadata)
        metadata.update(values)
        return replace(self, metadata=metadata)
