"""
Base Backend
============

Bounded Context: Transport Infrastructure

Abstract base class for GELF transports.

Architecture:
    Backend (abstract)
        ↓
    NullBackend, UdpBackend, TcpBackend, MqttBackend (concrete)

Responsibilities:
- Encoding a WireMessage with the backend's compression
- Handing the encoded bytes to the transport (send)
- Send statistics
- NOT responsible for: field merging (Logger) or retries (none are done)
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..compression import MessageCompression
from ..errors import CompressionError, EncodingError
from ..logging import LogEvent, StructuredLogger, create_logger
from ..schemas import WireMessage


class Backend(ABC):
    """
    Abstract base class for GELF backends.

    Subclasses implement send(), which receives one fully encoded message.

    Attributes:
        name: Short backend name used in errors and diagnostics
        compression: Algorithm applied by encode()
        logger: Structured logger for diagnostics

    Thread Safety:
        Statistics are guarded by a lock. Subclasses serialize transport
        access themselves where the transport is not thread-safe.
    """

    name = "backend"

    def __init__(
        self,
        compression: MessageCompression = MessageCompression.default(),
        logger: Optional[StructuredLogger] = None
    ):
        self.compression = MessageCompression(compression)
        self.logger = logger or create_logger(f"backend.{self.name}")

        self._message_count = 0
        self._byte_count = 0
        self._stats_lock = threading.Lock()

    def encode(self, message: WireMessage) -> bytes:
        """
        Render and compress a message for this transport.

        Raises:
            EncodingError: If the message cannot be rendered
            CompressionError: If compression fails
        """
        return self.compression.compress(message)

    def log_message(self, message: WireMessage) -> None:
        """
        Encode a message and send it.

        Raises:
            EncodingError, CompressionError: From encode()
            TransportError: From send()
        """
        try:
            payload = self.encode(message)
        except EncodingError as e:
            self.logger.warning(
                event=LogEvent.ENCODING_ERROR,
                message=str(e),
                metadata={'host': message.host}
            )
            raise
        except CompressionError as e:
            self.logger.error(
                event=LogEvent.COMPRESSION_ERROR,
                message="Failed to compress message",
                exc_info=e,
                metadata={'algorithm': e.algorithm}
            )
            raise

        self.send(payload)
        self._record_sent(len(payload))
        self.logger.debug(
            event=LogEvent.BACKEND_SEND_SUCCESS,
            message="Message sent",
            metadata={'size': len(payload)}
        )

    @abstractmethod
    def send(self, payload: bytes) -> None:
        """
        Deliver one encoded message.

        Raises:
            TransportError: If the transport fails
        """
        raise NotImplementedError("Subclasses must implement send()")

    def close(self) -> None:
        """Release transport resources. Default: nothing to release."""
        pass

    def _record_sent(self, size: int) -> None:
        with self._stats_lock:
            self._message_count += 1
            self._byte_count += size

    def get_stats(self) -> Dict[str, Any]:
        """
        Get backend statistics.

        Example:
            >>> stats = backend.get_stats()
            >>> print(f"Sent {stats['message_count']} messages")
        """
        with self._stats_lock:
            return {
                'backend': self.name,
                'message_count': self._message_count,
                'byte_count': self._byte_count,
                'compression': self.compression.value,
            }

    def __enter__(self) -> 'Backend':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class NullBackend(Backend):
    """
    Backend that discards every payload.

    Messages are still fully encoded, so encoding and compression errors
    surface exactly as with a real transport.
    """

    name = "null"

    def __init__(
        self,
        compression: MessageCompression = MessageCompression.NONE,
        logger: Optional[StructuredLogger] = None
    ):
        super().__init__(compression=compression, logger=logger)

    def send(self, payload: bytes) -> None:
        pass
