"""
GELF Logger
===========

Bounded Context: Logging Façade

The Logger owns a hostname, a set of default metadata fields and a backend.
For every Message it builds a WireMessage (defaults merged, host injected) and
hands it to the backend.

Message Flow:
    Message → Logger.log_message → WireMessage → Backend.log_message → send(bytes)

Standalone usage:
    >>> backend = UdpBackend("graylog.local")
    >>> logger = Logger.create(backend)
    >>> logger.add_default_metadata("facility", "billing")
    >>> logger.log_message(Message("Invoice sent", Level.NOTICE))

Usage as a logging-module sink: see gelf_logger.handler.install().
"""

import threading
from typing import Any, Callable, Dict, Optional

from .backends import Backend
from .errors import LoggerCreateError
from .hostname import detect_hostname
from .schemas import Message, WireMessage, additional_field_name, additional_field_value


class Logger:
    """
    GELF logger façade.

    Attributes:
        backend: Transport receiving every WireMessage

    Thread Safety:
        hostname and default metadata are guarded by an RLock. log_message
        snapshots them under the lock, so concurrent logging and mutation are
        safe. Concurrent sends are serialized (or not) by the backend.
    """

    def __init__(self, backend: Backend, hostname: str):
        """
        Construct a Logger with an explicit hostname.

        Args:
            backend: Transport for encoded messages
            hostname: Value for the GELF ``host`` field
        """
        self.backend = backend
        self._hostname = hostname
        self._default_metadata: Dict[str, Any] = {}
        self._lock = threading.RLock()

    @classmethod
    def create(
        cls,
        backend: Backend,
        detector: Callable[[], Optional[str]] = detect_hostname
    ) -> 'Logger':
        """
        Construct a Logger using the detected local hostname.

        Raises:
            LoggerCreateError: If the hostname cannot be determined
        """
        try:
            hostname = detector()
        except OSError as e:
            raise LoggerCreateError(f"Failed to determine local hostname: {e}") from e

        if not hostname:
            raise LoggerCreateError("Failed to determine local hostname")
        return cls(backend, hostname)

    def log_message(self, message: Message) -> None:
        """
        Log a message via the backend.

        Default metadata fields missing from the message are added; fields the
        message sets itself win.

        Raises:
            EncodingError: If the message cannot be represented as GELF
            CompressionError: If the backend fails to compress it
            TransportError: If the backend fails to deliver it
        """
        with self._lock:
            hostname = self._hostname
            defaults = dict(self._default_metadata)

        self.backend.log_message(WireMessage(message, hostname, defaults))

    @property
    def hostname(self) -> str:
        """Hostname used for GELF's ``host`` field."""
        with self._lock:
            return self._hostname

    def set_hostname(self, hostname: str) -> 'Logger':
        """Set the hostname used for GELF's ``host`` field."""
        with self._lock:
            self._hostname = hostname
        return self

    @property
    def default_metadata(self) -> Dict[str, Any]:
        """Snapshot of all default metadata."""
        with self._lock:
            return dict(self._default_metadata)

    def add_default_metadata(self, key: str, value: Any) -> 'Logger':
        """
        Add (or overwrite) a default metadata field.

        Every logged Message that lacks ``key`` gets this value, e.g. a
        ``facility`` for all messages of a service:

            >>> logger.add_default_metadata("facility", "billing")
            >>> logger.log_message(Message("Invoice sent"))
            # -> "_facility": "billing"

        Raises:
            EncodingError: If key is reserved or invalid, or value is not a
                string or number
        """
        additional_field_name(key)
        additional_field_value(key, value)
        with self._lock:
            self._default_metadata[key] = value
        return self

    def close(self) -> None:
        """Close the backend."""
        self.backend.close()

    def __enter__(self) -> 'Logger':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
