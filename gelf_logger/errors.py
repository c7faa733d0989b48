"""
Error types raised by the GELF pipeline.

Every error derives from GelfError so callers can catch the whole family.
"""

from typing import Optional


class GelfError(Exception):
    """Base class for all gelf_logger errors."""
    pass


class LoggerCreateError(GelfError):
    """Raised when a Logger cannot determine its hostname."""
    pass


class EncodingError(GelfError):
    """
    Raised when a message cannot be represented as GELF JSON.

    Covers reserved-name collisions, invalid field names and values that are
    not a JSON string or number. The affected message is never sent.
    """
    pass


class CompressionError(GelfError):
    """Raised when the gzip/zlib encoder fails.

    Attributes:
        algorithm: Name of the compression algorithm that failed
    """

    def __init__(self, message: str, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"[{algorithm}] {message}")


class TransportError(GelfError):
    """Raised when a backend cannot deliver an encoded payload.

    Attributes:
        backend: Name of the backend that failed (e.g. "udp", "mqtt")
    """

    def __init__(self, message: str, backend: Optional[str] = None):
        self.backend = backend
        super().__init__(f"[{backend}] {message}" if backend else message)
