"""
Message Compression
===================

Bounded Context: Payload Encoding

GELF accepts raw JSON or the whole JSON payload compressed with gzip or zlib.
Each call is one complete encode; no compressor state survives a call.
"""

import gzip
import io
import zlib
from enum import Enum

from .errors import CompressionError
from .schemas import WireMessage


class MessageCompression(str, Enum):
    """Compression algorithms supported by GELF."""
    NONE = "none"
    GZIP = "gzip"
    ZLIB = "zlib"

    @classmethod
    def default(cls) -> 'MessageCompression':
        """Default algorithm (gzip)."""
        return cls.GZIP

    def compress(self, message: WireMessage) -> bytes:
        """
        Serialize a WireMessage and compress it with this algorithm.

        Args:
            message: Normalized message

        Returns:
            Raw UTF-8 JSON for NONE, otherwise the complete compressed stream

        Raises:
            EncodingError: If the message cannot be rendered as GELF JSON
            CompressionError: If the encoder fails
        """
        payload = message.to_bytes()
        return self.compress_bytes(payload)

    def compress_bytes(self, payload: bytes) -> bytes:
        """Compress an already rendered GELF JSON payload."""
        if self is MessageCompression.NONE:
            return payload

        try:
            if self is MessageCompression.GZIP:
                buffer = io.BytesIO()
                with gzip.GzipFile(fileobj=buffer, mode="wb") as encoder:
                    encoder.write(payload)
                return buffer.getvalue()

            encoder = zlib.compressobj()
            return encoder.compress(payload) + encoder.flush()
        except (OSError, zlib.error) as e:
            raise CompressionError(f"Failed to compress message: {e}", self.value) from e

    def decompress(self, payload: bytes) -> bytes:
        """
        Inverse of compress(): recover the GELF JSON bytes.

        Raises:
            CompressionError: If payload is not a valid stream for this algorithm
        """
        if self is MessageCompression.NONE:
            return payload

        try:
            if self is MessageCompression.GZIP:
                return gzip.decompress(payload)
            return zlib.decompress(payload)
        except (OSError, EOFError, zlib.error) as e:
            raise CompressionError(f"Failed to decompress message: {e}", self.value) from e

    @classmethod
    def detect(cls, payload: bytes) -> 'MessageCompression':
        """Guess the algorithm of an encoded payload from its magic bytes."""
        if payload[:2] == b"\x1f\x8b":
            return cls.GZIP
        if payload[:1] == b"\x78":
            return cls.ZLIB
        return cls.NONE
