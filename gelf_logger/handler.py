"""
logging-module Adapter
======================

Bounded Context: Integration with the standard logging module

GelfHandler forwards logging.LogRecord objects to a gelf_logger Logger.
Installation is explicit and revocable:

    >>> installation = install(Logger(UdpBackend("graylog.local"), "web-01"))
    >>> logging.getLogger("app").warning("Low disk space")
    >>> installation.uninstall()

The handler accepts every severity; filtering is up to whoever installs it
(logger levels, handler.setLevel, filters).
"""

import logging
import traceback
from typing import Any, Dict, Optional

from .logger import Logger
from .logging import LOGGER_NAMESPACE, LogEvent, create_logger
from .errors import EncodingError
from .schemas import Level, Message, additional_field_name, additional_field_value

# Attributes every LogRecord carries; anything else came from ``extra=``.
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

_diagnostics = create_logger("handler")


def _is_field(key: str, value: Any) -> bool:
    try:
        additional_field_name(key)
        additional_field_value(key, value)
    except EncodingError:
        return False
    return True


def record_to_message(record: logging.LogRecord) -> Message:
    """
    Map a LogRecord to a Message.

    The formatted traceback (exc_info, or stack_info) becomes the full
    message; source location and scalar ``extra=`` values become metadata.
    Extras never replace the source-location fields.
    """
    full_message = None
    if record.exc_info:
        full_message = "".join(traceback.format_exception(*record.exc_info)).rstrip()
    elif record.exc_text:
        full_message = record.exc_text
    if record.stack_info:
        full_message = f"{full_message}\n{record.stack_info}" if full_message else record.stack_info

    metadata: Dict[str, Any] = {
        'logger': record.name,
        'file': record.pathname,
        'line': record.lineno,
        'module': record.module,
        'function': record.funcName,
        'thread': record.threadName,
        'process': record.process,
    }
    for key, value in record.__dict__.items():
        if key not in _RECORD_ATTRIBUTES and key not in metadata and _is_field(key, value):
            metadata[key] = value

    return Message(
        short_message=record.getMessage() or "-",
        level=Level.from_logging_level(record.levelno),
        full_message=full_message,
        timestamp=record.created,
        metadata={k: v for k, v in metadata.items() if v is not None},
    )


class GelfHandler(logging.Handler):
    """
    logging.Handler that sends every record through a GELF Logger.

    Records from the library's own ``gelf_logger.*`` loggers are skipped so a
    failing backend never logs into itself.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET):
        super().__init__(level)
        self.gelf_logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == LOGGER_NAMESPACE or record.name.startswith(LOGGER_NAMESPACE + "."):
            return
        try:
            self.gelf_logger.log_message(record_to_message(record))
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.gelf_logger.close()
        finally:
            super().close()


class LoggingInstallation:
    """
    An installed GelfHandler, attached to one logging.Logger.

    Attributes:
        handler: The attached GelfHandler
        target: The logging.Logger it is attached to
    """

    def __init__(self, handler: GelfHandler, target: logging.Logger, level: Optional[int]):
        self.handler = handler
        self.target = target
        self._level = level
        self._previous_level = target.level
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> 'LoggingInstallation':
        if self._installed:
            return self
        self._previous_level = self.target.level
        if self._level is not None:
            self.target.setLevel(self._level)
        self.target.addHandler(self.handler)
        self._installed = True
        _diagnostics.debug(
            event=LogEvent.HANDLER_INSTALLED,
            message="Installed GelfHandler",
            metadata={'target': self.target.name}
        )
        return self

    def uninstall(self) -> None:
        """Detach the handler and restore the target's previous level."""
        if not self._installed:
            return
        self.target.removeHandler(self.handler)
        self.target.setLevel(self._previous_level)
        self._installed = False
        _diagnostics.debug(
            event=LogEvent.HANDLER_UNINSTALLED,
            message="Uninstalled GelfHandler",
            metadata={'target': self.target.name}
        )

    def __enter__(self) -> 'LoggingInstallation':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.uninstall()


def install(
    logger: Logger,
    level: Optional[int] = logging.DEBUG,
    target: Optional[logging.Logger] = None
) -> LoggingInstallation:
    """
    Attach a GelfHandler for ``logger`` to a logging.Logger.

    Args:
        logger: GELF Logger receiving the records
        level: Level set on the target while installed (None keeps it)
        target: logging.Logger to attach to (default: root logger)

    Returns:
        The active installation; call uninstall() to revert
    """
    handler = GelfHandler(logger)
    target = target if target is not None else logging.getLogger()
    return LoggingInstallation(handler, target, level).install()
