"""
Common Schema Types
==================

Bounded Context: Shared Data Structures

Types:
- Timestamp: Unix-seconds timestamp wrapper used by GELF's ``timestamp`` field
"""

import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union


@dataclass(frozen=True)
class Timestamp:
    """
    Immutable point in time, stored as fractional seconds since the Unix epoch.

    Attributes:
        value: Seconds since epoch (float, sub-second precision)

    Invariants:
        - value is finite

    Example:
        >>> ts = Timestamp.now()
        >>> ts.to_gelf()
        1761319845.123456
    """
    value: float

    def __post_init__(self):
        """Validate invariants."""
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValueError(f"Timestamp value must be a number, got {self.value!r}")
        if not math.isfinite(self.value):
            raise ValueError(f"Timestamp value must be finite, got {self.value}")

    @classmethod
    def now(cls) -> 'Timestamp':
        """Create timestamp from current time."""
        return cls(value=time.time())

    @classmethod
    def from_datetime(cls, dt: datetime) -> 'Timestamp':
        """Create timestamp from datetime object (naive values are UTC)."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(value=dt.timestamp())

    @classmethod
    def coerce(cls, value: Union['Timestamp', datetime, float, int]) -> 'Timestamp':
        """Build a Timestamp from any supported representation."""
        if isinstance(value, Timestamp):
            return value
        if isinstance(value, datetime):
            return cls.from_datetime(value)
        return cls(value=value)

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime."""
        return datetime.fromtimestamp(self.value, tz=timezone.utc)

    def to_gelf(self) -> float:
        """Serialize for the GELF ``timestamp`` field."""
        return float(self.value)
