import logging
import sys

import pytest

from gelf_logger import GelfHandler, Level, Logger, TransportError, install
from gelf_logger.handler import record_to_message

from .support import FailingBackend, RecordingBackend


@pytest.fixture
def app_logger():
    target = logging.getLogger("tests.handler.app")
    target.propagate = False
    target.setLevel(logging.WARNING)
    yield target
    for handler in list(target.handlers):
        target.removeHandler(handler)


def make_record(levelno=logging.INFO, msg="hello %s", args=("world",), **extra):
    record = logging.LogRecord("app.module", levelno, "/src/app.py", 42, msg, args, None, func="run")
    record.__dict__.update(extra)
    return record


def test_record_to_message_basic_fields():
    record = make_record(logging.WARNING)
    msg = record_to_message(record)

    assert msg.short_message == "hello world"
    assert msg.level is Level.WARNING
    assert msg.full_message is None
    assert msg.timestamp.value == record.created
    assert msg.metadata["logger"] == "app.module"
    assert msg.metadata["file"] == "/src/app.py"
    assert msg.metadata["line"] == 42
    assert msg.metadata["function"] == "run"


def test_record_to_message_includes_scalar_extras():
    record = make_record(request_id="abc", attempt=2, payload={"x": 1}, flag=True)
    metadata = record_to_message(record).metadata

    assert metadata["request_id"] == "abc"
    assert metadata["attempt"] == 2
    assert "payload" not in metadata
    assert "flag" not in metadata


def test_record_to_message_skips_reserved_extras():
    record = make_record(host="spoofed", _level="x")
    metadata = record_to_message(record).metadata
    assert "host" not in metadata
    assert "_level" not in metadata


def test_record_to_message_formats_exceptions():
    try:
        raise RuntimeError("kaboom")
    except RuntimeError:
        record = logging.LogRecord("app", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    msg = record_to_message(record)
    assert msg.level is Level.ERROR
    assert "RuntimeError: kaboom" in msg.full_message
    assert "Traceback" in msg.full_message


def test_handler_accepts_every_level():
    handler = GelfHandler(Logger(RecordingBackend(), "h"))
    assert handler.level == logging.NOTSET
    assert handler.filter(make_record(logging.DEBUG))


def test_install_forwards_records(app_logger):
    backend = RecordingBackend()
    installation = install(Logger(backend, "myhost"), level=logging.DEBUG, target=app_logger)

    app_logger.debug("debug %d", 1)
    app_logger.error("boom", extra={"order_id": 7})

    sent = backend.sent_json()
    assert [m["short_message"] for m in sent] == ["debug 1", "boom"]
    assert [m["level"] for m in sent] == [7, 3]
    assert sent[1]["_order_id"] == 7
    assert all(m["host"] == "myhost" for m in sent)

    installation.uninstall()


def test_uninstall_detaches_and_restores_level(app_logger):
    backend = RecordingBackend()
    with install(Logger(backend, "h"), level=logging.DEBUG, target=app_logger) as installation:
        assert installation.installed
        assert app_logger.level == logging.DEBUG

    assert not installation.installed
    assert app_logger.level == logging.WARNING
    assert installation.handler not in app_logger.handlers

    app_logger.error("after uninstall")
    assert backend.payloads == []


def test_install_without_level_keeps_target_level(app_logger):
    installation = install(Logger(RecordingBackend(), "h"), level=None, target=app_logger)
    assert app_logger.level == logging.WARNING
    installation.uninstall()


def test_library_diagnostics_are_not_forwarded():
    backend = RecordingBackend()
    handler = GelfHandler(Logger(backend, "h"))

    handler.handle(logging.LogRecord("gelf_logger.backend.udp", logging.ERROR, "", 0, "x", (), None))
    handler.handle(logging.LogRecord("gelf_logger", logging.ERROR, "", 0, "x", (), None))
    handler.handle(logging.LogRecord("gelf_logger_other", logging.ERROR, "", 0, "x", (), None))

    assert len(backend.payloads) == 1


def test_record_to_message_skips_non_finite_extras():
    metadata = record_to_message(make_record(ratio=float("inf"), ok=1.5)).metadata
    assert "ratio" not in metadata
    assert metadata["ok"] == 1.5


def test_failures_go_to_handle_error(monkeypatch):
    handler = GelfHandler(Logger(FailingBackend(TransportError("down", "failing")), "h"))
    errors = []
    monkeypatch.setattr(handler, "handleError", errors.append)

    record = make_record()
    handler.handle(record)

    assert errors == [record]


def test_extras_do_not_replace_source_location():
    record = make_record(file="elsewhere.py", line=1, logger="other")
    metadata = record_to_message(record).metadata

    assert metadata["file"] == "/src/app.py"
    assert metadata["line"] == 42
    assert metadata["logger"] == "app.module"
