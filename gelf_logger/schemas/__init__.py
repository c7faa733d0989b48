"""
gelf_logger Schemas
===================

Bounded Context: Data Structures

Immutable, typed data structures for log events and their GELF projection.

Design:
- Frozen dataclasses for caller-facing values (Message, Timestamp)
- IntEnum for severities (Level)
- WireMessage validates at construction and renders canonical GELF JSON

Public API
----------
    Level: Syslog severity enum
    Timestamp: Unix-seconds wrapper
    Message: Caller-facing log event
    WireMessage: GELF-normalized message
    RESERVED_FIELDS: GELF field names that metadata may not set
    GELF_VERSION: "1.1"

Example:
    >>> from gelf_logger.schemas import Message, Level, WireMessage
    >>> msg = Message("User logged in", Level.NOTICE).with_metadata("user_id", 42)
    >>> WireMessage(msg, "web-01").fields["_user_id"]
    42
"""

from .common import Timestamp
from .level import Level
from .message import Message
from .wire import (
    GELF_VERSION,
    RESERVED_FIELDS,
    WireMessage,
    additional_field_name,
    additional_field_value,
)

__all__ = [
    'Level',
    'Timestamp',
    'Message',
    'WireMessage',
    'GELF_VERSION',
    'RESERVED_FIELDS',
    'additional_field_name',
    'additional_field_value',
]
