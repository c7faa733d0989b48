"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

JSON-per-line diagnostics for the library itself (backend connections, send
failures, handler lifecycle). Wraps Python's logging module.

Loggers created here live under the ``gelf_logger.`` namespace. GelfHandler
skips that namespace, so these diagnostics never travel through GELF.

Output:
    {
        "timestamp": "2025-10-24T15:30:45.123456+00:00",
        "level": "WARNING",
        "component": "backend.mqtt",
        "event": "backend.disconnected",
        "message": "Disconnected from MQTT broker",
        "metadata": {"broker": "localhost:1883"}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent

LOGGER_NAMESPACE = "gelf_logger"


class StructuredLogger:
    """
    JSON structured logger for library diagnostics.

    Attributes:
        component: Component name (e.g., "backend.udp", "handler")
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging module.
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "backend.udp")
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: gelf_logger.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"{LOGGER_NAMESPACE}.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        log_level = getattr(logging, level)
        if not self.logger.isEnabledFor(log_level):
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(log_level, json.dumps(log_entry, default=str))

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Example:
            >>> logger.info(
            ...     event=LogEvent.BACKEND_CONNECTED,
            ...     message="Connected to broker",
            ...     metadata={'broker': 'localhost:1883'}
            ... )
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log WARNING level message."""
        self._log('WARNING', event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception instance, summarized as type and message
        """
        self._log('ERROR', event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        """Change logging level dynamically."""
        self.logger.setLevel(level)


class JSONFormatter(logging.Formatter):
    """
    Pass-through formatter: StructuredLogger already renders the JSON line.
    """

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.WARNING
) -> StructuredLogger:
    """
    Factory function to create a configured StructuredLogger.

    Library components default to WARNING so that a healthy pipeline stays
    quiet on stderr.

    Example:
        >>> logger = create_logger("backend.udp", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
