"""
TCP Backend
===========

Bounded Context: GELF over TCP

GELF TCP frames are null-byte terminated, so payloads are never compressed.
The connection is opened lazily; a failed write drops the socket and raises,
and the next send opens a fresh connection.
"""

import socket
import threading
from typing import Optional

from ..compression import MessageCompression
from ..errors import TransportError
from ..logging import LogEvent, StructuredLogger
from .base import Backend

FRAME_DELIMITER = b"\x00"


class TcpBackend(Backend):
    """
    GELF TCP transport.

    Attributes:
        host: GELF input hostname
        port: GELF input port (default: 12201)
        timeout: Connect/write timeout in seconds
    """

    name = "tcp"

    def __init__(
        self,
        host: str,
        port: int = 12201,
        timeout: float = 5.0,
        compression: MessageCompression = MessageCompression.NONE,
        logger: Optional[StructuredLogger] = None
    ):
        if MessageCompression(compression) is not MessageCompression.NONE:
            raise ValueError("GELF TCP does not support compression")
        super().__init__(compression=MessageCompression.NONE, logger=logger)

        self.host = host
        self.port = port
        self.timeout = timeout

        self._sock: Optional[socket.socket] = None
        self._sock_lock = threading.Lock()

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    def _connect(self) -> socket.socket:
        if self._sock is None:
            self._sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
            self.logger.info(
                event=LogEvent.BACKEND_CONNECTED,
                message="Connected to GELF TCP input",
                metadata={'endpoint': self.endpoint}
            )
        return self._sock

    def send(self, payload: bytes) -> None:
        if FRAME_DELIMITER in payload:
            raise TransportError("Payload contains a null byte", self.name)

        with self._sock_lock:
            try:
                self._connect().sendall(payload + FRAME_DELIMITER)
            except OSError as e:
                self._drop()
                self.logger.error(
                    event=LogEvent.BACKEND_SEND_FAILED,
                    message="Failed to send frame",
                    exc_info=e,
                    metadata={'endpoint': self.endpoint}
                )
                raise TransportError(f"Failed to send to {self.endpoint}: {e}", self.name) from e

    def _drop(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    def close(self) -> None:
        with self._sock_lock:
            if self._sock is not None:
                self._drop()
                self.logger.info(
                    event=LogEvent.BACKEND_DISCONNECTED,
                    message="Closed GELF TCP connection",
                    metadata={'endpoint': self.endpoint}
                )
