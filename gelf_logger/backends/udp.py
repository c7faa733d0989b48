"""
UDP Backend
===========

Bounded Context: GELF over UDP

Sends each encoded message as one datagram, or as GELF chunks when the
payload exceeds ``chunk_size``.

Chunk layout (12-byte header + data):
    0x1e 0x0f | message id (8 bytes) | sequence number (1) | count (1) | data

A message may span at most 128 chunks; larger payloads are rejected.
"""

import os
import socket
import threading
from typing import List, Optional

from ..compression import MessageCompression
from ..errors import TransportError
from ..logging import LogEvent, StructuredLogger
from .base import Backend

CHUNK_MAGIC = b"\x1e\x0f"
CHUNK_HEADER_SIZE = 12
MAX_CHUNKS = 128

# Graylog's recommended sizes for WAN and LAN paths
WAN_CHUNK_SIZE = 1420
LAN_CHUNK_SIZE = 8154


def chunk_payload(
    payload: bytes,
    chunk_size: int = WAN_CHUNK_SIZE,
    message_id: Optional[bytes] = None
) -> List[bytes]:
    """
    Split a payload into GELF datagrams.

    Args:
        payload: Encoded (possibly compressed) GELF message
        chunk_size: Maximum datagram size, header included
        message_id: 8-byte id shared by all chunks (default: random)

    Returns:
        ``[payload]`` if it fits in one datagram, otherwise the chunks in order

    Raises:
        ValueError: If chunk_size leaves no room for data or message_id is
            not 8 bytes
        TransportError: If more than 128 chunks would be needed
    """
    if chunk_size <= CHUNK_HEADER_SIZE:
        raise ValueError(f"chunk_size must be > {CHUNK_HEADER_SIZE}, got {chunk_size}")

    if len(payload) <= chunk_size:
        return [payload]

    data_size = chunk_size - CHUNK_HEADER_SIZE
    count = -(-len(payload) // data_size)
    if count > MAX_CHUNKS:
        raise TransportError(
            f"Message of {len(payload)} bytes needs {count} chunks "
            f"(max {MAX_CHUNKS} at chunk_size={chunk_size})",
            "udp"
        )

    message_id = message_id if message_id is not None else os.urandom(8)
    if len(message_id) != 8:
        raise ValueError(f"message_id must be 8 bytes, got {len(message_id)}")

    return [
        CHUNK_MAGIC
        + message_id
        + bytes((sequence, count))
        + payload[sequence * data_size:(sequence + 1) * data_size]
        for sequence in range(count)
    ]


class UdpBackend(Backend):
    """
    GELF UDP transport.

    Attributes:
        host: GELF input hostname
        port: GELF input port (default: 12201)
        chunk_size: Maximum datagram size before chunking

    Example:
        >>> backend = UdpBackend("graylog.local", compression=MessageCompression.ZLIB)
        >>> logger = Logger(backend, "web-01")
    """

    name = "udp"

    def __init__(
        self,
        host: str,
        port: int = 12201,
        compression: MessageCompression = MessageCompression.default(),
        chunk_size: int = WAN_CHUNK_SIZE,
        logger: Optional[StructuredLogger] = None
    ):
        super().__init__(compression=compression, logger=logger)
        if chunk_size <= CHUNK_HEADER_SIZE:
            raise ValueError(f"chunk_size must be > {CHUNK_HEADER_SIZE}, got {chunk_size}")

        self.host = host
        self.port = port
        self.chunk_size = chunk_size

        self._sock: Optional[socket.socket] = None
        self._address = None
        self._sock_lock = threading.Lock()

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    def _socket(self) -> socket.socket:
        if self._sock is None:
            family, socktype, proto, _, address = socket.getaddrinfo(
                self.host, self.port, 0, socket.SOCK_DGRAM
            )[0]
            self._sock = socket.socket(family, socktype, proto)
            self._address = address
        return self._sock

    def send(self, payload: bytes) -> None:
        datagrams = chunk_payload(payload, self.chunk_size)
        if len(datagrams) > 1:
            self.logger.debug(
                event=LogEvent.BACKEND_CHUNKED,
                message=f"Split message into {len(datagrams)} chunks",
                metadata={'endpoint': self.endpoint, 'size': len(payload)}
            )

        with self._sock_lock:
            try:
                sock = self._socket()
                for datagram in datagrams:
                    sock.sendto(datagram, self._address)
            except OSError as e:
                self.logger.error(
                    event=LogEvent.BACKEND_SEND_FAILED,
                    message="Failed to send datagram",
                    exc_info=e,
                    metadata={'endpoint': self.endpoint}
                )
                raise TransportError(f"Failed to send to {self.endpoint}: {e}", self.name) from e

    def close(self) -> None:
        with self._sock_lock:
            if self._sock is not None:
                self._sock.close()
                self._sock = None
