"""
gelf_logger
===========

Bounded Context: GELF Encoding Pipeline

Turns application log events into GELF 1.1 payloads (Graylog Extended Log
Format), optionally compresses them, and hands them to a transport backend.

Architecture:
- schemas/: Level, Message, WireMessage (GELF normalization)
- compression: MessageCompression (none, gzip, zlib)
- logger: Logger façade (hostname, default metadata, dispatch)
- backends/: UDP (chunked), TCP, MQTT and null transports
- handler: explicit adapter for the standard logging module
- config: YAML configuration and factories
- logging/: structured JSON diagnostics for the library itself

Public API
----------
Schemas:
    Level, Timestamp, Message, WireMessage

Pipeline:
    MessageCompression, Logger

Backends:
    Backend, NullBackend, UdpBackend, TcpBackend, MqttBackend, chunk_payload

Integration:
    GelfHandler, LoggingInstallation, install

Errors:
    GelfError, LoggerCreateError, EncodingError, CompressionError, TransportError

Example:
    >>> from gelf_logger import Logger, UdpBackend, Message, Level
    >>>
    >>> logger = Logger.create(UdpBackend("graylog.local", 12201))
    >>> logger.add_default_metadata("facility", "billing")
    >>> logger.log_message(Message("Invoice sent", Level.NOTICE).with_metadata("invoice_id", 1042))
"""

__version__ = "1.0.0"

# Schemas
from .schemas import (
    Level,
    Timestamp,
    Message,
    WireMessage,
    RESERVED_FIELDS,
)

# Errors
from .errors import (
    GelfError,
    LoggerCreateError,
    EncodingError,
    CompressionError,
    TransportError,
)

# Pipeline
from .compression import MessageCompression
from .logger import Logger

# Backends
from .backends import (
    Backend,
    NullBackend,
    UdpBackend,
    TcpBackend,
    MqttBackend,
    chunk_payload,
)

# Integration
from .handler import GelfHandler, LoggingInstallation, install

__all__ = [
    '__version__',
    # Schemas
    'Level',
    'Timestamp',
    'Message',
    'WireMessage',
    'RESERVED_FIELDS',
    # Errors
    'GelfError',
    'LoggerCreateError',
    'EncodingError',
    'CompressionError',
    'TransportError',
    # Pipeline
    'MessageCompression',
    'Logger',
    # Backends
    'Backend',
    'NullBackend',
    'UdpBackend',
    'TcpBackend',
    'MqttBackend',
    'chunk_payload',
    # Integration
    'GelfHandler',
    'LoggingInstallation',
    'install',
]
