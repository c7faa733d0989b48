"""
Diagnostic Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the library's own structured diagnostics.

Event Naming Convention:
    <component>.<category>.<action>

    component: backend, encoding, handler, error
    category: connected, send, installed
    action: success, failed
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for the library's diagnostic logging.

    Categories:
    - backend.*: Transport interactions
    - handler.*: logging-module adapter lifecycle
    - error.*: Error conditions
    """

    # ========== Backend Events ==========
    BACKEND_CONNECTED = "backend.connected"
    """Transport connection established."""

    BACKEND_DISCONNECTED = "backend.disconnected"
    """Transport connection closed or lost."""

    BACKEND_SEND_SUCCESS = "backend.send.success"
    """Encoded message handed to the transport."""

    BACKEND_SEND_FAILED = "backend.send.failed"
    """Transport refused or failed to deliver a message."""

    BACKEND_CHUNKED = "backend.send.chunked"
    """Oversized UDP payload split into GELF chunks."""

    # ========== Handler Events ==========
    HANDLER_INSTALLED = "handler.installed"
    """GelfHandler attached to a logging.Logger."""

    HANDLER_UNINSTALLED = "handler.uninstalled"
    """GelfHandler detached from a logging.Logger."""

    # ========== Error Events ==========
    ENCODING_ERROR = "error.encoding"
    """Message could not be normalized or serialized to GELF JSON."""

    COMPRESSION_ERROR = "error.compression"
    """Payload compression failed."""

    CONNECTION_ERROR = "error.connection"
    """Failed to connect to the transport endpoint."""


BACKEND_EVENTS = {
    LogEvent.BACKEND_CONNECTED,
    LogEvent.BACKEND_DISCONNECTED,
    LogEvent.BACKEND_SEND_SUCCESS,
    LogEvent.BACKEND_SEND_FAILED,
    LogEvent.BACKEND_CHUNKED,
}

ERROR_EVENTS = {
    LogEvent.ENCODING_ERROR,
    LogEvent.COMPRESSION_ERROR,
    LogEvent.CONNECTION_ERROR,
}
