"""
Configuration schema for gelf_logger.

Describes the backend a Logger ships to, its hostname and default metadata.
Loaded from YAML and validated at construction (frozen dataclasses).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .backends import Backend, MqttBackend, NullBackend, TcpBackend, UdpBackend
from .compression import MessageCompression
from .errors import LoggerCreateError
from .handler import LoggingInstallation, install
from .hostname import detect_hostname
from .logger import Logger
from .schemas import Level

BACKEND_TYPES = {"udp", "tcp", "mqtt", "null"}


@dataclass(frozen=True)
class BackendConfig:
    """Transport configuration."""

    type: str = "udp"
    host: str = "localhost"
    port: Optional[int] = None  # 12201 for GELF inputs, 1883 for mqtt
    compression: Optional[str] = None  # backend default when unset
    chunk_size: int = 1420  # udp only
    timeout: float = 5.0  # tcp only

    # mqtt only
    topic: str = "gelf/{hostname}"
    qos: int = 0
    username: Optional[str] = None
    password: Optional[str] = None
    client_id: str = "gelf_logger"

    def __post_init__(self):
        """Validate backend configuration."""
        if self.type not in BACKEND_TYPES:
            raise ValueError(
                f"Invalid backend type: {self.type}. "
                f"Must be one of {sorted(BACKEND_TYPES)}"
            )

        if self.port is None:
            object.__setattr__(self, "port", 1883 if self.type == "mqtt" else 12201)

        if not 1 <= self.port <= 65535:
            raise ValueError(
                f"Backend port must be in [1, 65535], got {self.port}"
            )

        if self.compression is not None:
            valid = {c.value for c in MessageCompression}
            if self.compression not in valid:
                raise ValueError(
                    f"Invalid compression: {self.compression}. "
                    f"Must be one of {sorted(valid)}"
                )
            if self.type == "tcp" and self.compression != "none":
                raise ValueError("GELF TCP does not support compression")

        if self.chunk_size <= 12:
            raise ValueError(f"chunk_size must be > 12, got {self.chunk_size}")

        if self.qos not in {0, 1, 2}:
            raise ValueError(
                f"MQTT QoS must be 0, 1, or 2, got {self.qos}"
            )

    def compression_or(self, default: MessageCompression) -> MessageCompression:
        if self.compression is None:
            return default
        return MessageCompression(self.compression)


@dataclass(frozen=True)
class LoggerConfig:
    """
    Main configuration for a gelf_logger Logger.

    hostname is detected when unset.
    """

    backend: BackendConfig = field(default_factory=BackendConfig)
    hostname: Optional[str] = None
    default_metadata: Dict[str, Any] = field(default_factory=dict)
    level: str = "debug"

    def __post_init__(self):
        """Validate logger configuration."""
        if self.hostname is not None and not self.hostname:
            raise ValueError("hostname cannot be empty")

        if not isinstance(self.default_metadata, dict):
            raise ValueError(
                f"default_metadata must be a mapping, got {type(self.default_metadata).__name__}"
            )

        Level.from_name(self.level)

    @property
    def logging_level(self) -> int:
        """Threshold for the logging-module adapter, as a stdlib level."""
        return _LOGGING_LEVELS[Level.from_name(self.level)]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LoggerConfig":
        """Build configuration from a parsed mapping."""
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        backend_data = data.get("backend") or {}
        try:
            backend = BackendConfig(**backend_data)
        except TypeError as e:
            raise ValueError(f"Invalid backend configuration: {e}") from e

        return cls(
            backend=backend,
            hostname=data.get("hostname"),
            default_metadata=dict(data.get("default_metadata") or {}),
            level=data.get("level", "debug"),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "LoggerConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            hostname: "web-01"        # omit to detect
            level: "info"
            default_metadata:
              facility: "billing"
              environment: "prod"

            backend:
              type: "udp"             # udp | tcp | mqtt | null
              host: "graylog.local"
              port: 12201
              compression: "gzip"     # none | gzip | zlib
              chunk_size: 1420
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

        return cls.from_dict(data)


_LOGGING_LEVELS = {
    Level.EMERGENCY: logging.CRITICAL,
    Level.ALERT: logging.CRITICAL,
    Level.CRITICAL: logging.CRITICAL,
    Level.ERROR: logging.ERROR,
    Level.WARNING: logging.WARNING,
    Level.NOTICE: logging.INFO,
    Level.INFORMATIONAL: logging.INFO,
    Level.DEBUG: logging.DEBUG,
}


def build_backend(config: BackendConfig, hostname: str = "") -> Backend:
    """Instantiate the backend described by ``config``."""
    if config.type == "udp":
        return UdpBackend(
            host=config.host,
            port=config.port,
            compression=config.compression_or(MessageCompression.default()),
            chunk_size=config.chunk_size,
        )
    if config.type == "tcp":
        return TcpBackend(host=config.host, port=config.port, timeout=config.timeout)
    if config.type == "mqtt":
        return MqttBackend(
            broker_host=config.host,
            broker_port=config.port,
            topic=config.topic.format(hostname=hostname),
            client_id=config.client_id,
            username=config.username,
            password=config.password,
            qos=config.qos,
            compression=config.compression_or(MessageCompression.default()),
        )
    return NullBackend(compression=config.compression_or(MessageCompression.NONE))


def resolve_hostname(config: LoggerConfig) -> str:
    """
    The configured hostname, or the detected one when unset.

    Raises:
        LoggerCreateError: If hostname is unset and cannot be detected
    """
    hostname = config.hostname or detect_hostname()
    if not hostname:
        raise LoggerCreateError("Failed to determine local hostname")
    return hostname


def build_logger(config: LoggerConfig) -> Logger:
    """
    Build a Logger (and its backend) from configuration.

    Raises:
        LoggerCreateError: If hostname is unset and cannot be detected
        EncodingError: If a default metadata field is reserved or invalid
    """
    hostname = resolve_hostname(config)
    logger = Logger(build_backend(config.backend, hostname), hostname)
    for key, value in config.default_metadata.items():
        logger.add_default_metadata(key, value)
    return logger


def install_logging(config: LoggerConfig, target: Optional[logging.Logger] = None) -> LoggingInstallation:
    """
    Build a Logger from configuration and attach it to the logging module.

    The target logger's threshold is set from ``config.level``.

    Example:
        >>> installation = install_logging(LoggerConfig.from_yaml("config/gelf.yaml"))
        >>> logging.getLogger("billing").info("Invoice sent")
        >>> installation.uninstall()
    """
    return install(build_logger(config), level=config.logging_level, target=target)
