"""
GELF Backends
=============

Bounded Context: Message Transport

A backend turns a WireMessage into bytes with its MessageCompression and
delivers them. Delivery failures raise TransportError; nothing is retried or
buffered.

Public API
----------
    Backend: Abstract backend (for custom transports)
    NullBackend: Discards payloads
    UdpBackend: GELF UDP with chunking
    TcpBackend: GELF TCP (null-byte framing, uncompressed)
    MqttBackend: Publishes payloads to an MQTT topic

Example:
    >>> from gelf_logger.backends import UdpBackend
    >>> backend = UdpBackend("graylog.local", 12201)
"""

from .base import Backend, NullBackend
from .mqtt import MqttBackend
from .tcp import TcpBackend
from .udp import UdpBackend, chunk_payload

__all__ = [
    'Backend',
    'NullBackend',
    'UdpBackend',
    'TcpBackend',
    'MqttBackend',
    'chunk_payload',
]
