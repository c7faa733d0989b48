"""
Structured Diagnostics for gelf_logger
======================================

Bounded Context: Observability

JSON-structured logging for the library's own events (backend connections,
send failures, handler lifecycle).

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function
    LOGGER_NAMESPACE: Root logger name used by the library

Example:
    >>> from gelf_logger.logging import create_logger, LogEvent
    >>> logger = create_logger("backend.udp")
    >>> logger.warning(
    ...     event=LogEvent.BACKEND_SEND_FAILED,
    ...     message="Datagram rejected",
    ...     metadata={'endpoint': 'graylog:12201'}
    ... )
"""

from .events import LogEvent
from .structured import LOGGER_NAMESPACE, StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'LOGGER_NAMESPACE',
    'StructuredLogger',
    'create_logger',
]
