import logging
from unittest.mock import MagicMock

import pytest

from gelf_logger import (
    EncodingError,
    LoggerCreateError,
    MessageCompression,
    MqttBackend,
    NullBackend,
    TcpBackend,
    UdpBackend,
)
from gelf_logger.config import (
    BackendConfig,
    LoggerConfig,
    build_backend,
    build_logger,
    install_logging,
)

YAML = """
hostname: "web-01"
level: "warning"
default_metadata:
  facility: "billing"
  environment: "prod"
backend:
  type: "udp"
  host: "graylog.local"
  compression: "zlib"
  chunk_size: 8154
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "gelf.yaml"
    path.write_text(YAML)
    return path


def test_from_yaml(config_file):
    config = LoggerConfig.from_yaml(config_file)

    assert config.hostname == "web-01"
    assert config.level == "warning"
    assert config.default_metadata == {"facility": "billing", "environment": "prod"}
    assert config.backend.type == "udp"
    assert config.backend.host == "graylog.local"
    assert config.backend.port == 12201
    assert config.backend.compression == "zlib"
    assert config.backend.chunk_size == 8154


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LoggerConfig.from_yaml(tmp_path / "missing.yaml")


def test_from_yaml_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("backend: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        LoggerConfig.from_yaml(path)


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    config = LoggerConfig.from_yaml(path)
    assert config == LoggerConfig()


def test_from_dict_rejects_unknown_backend_keys():
    with pytest.raises(ValueError, match="Invalid backend configuration"):
        LoggerConfig.from_dict({"backend": {"hots": "typo"}})


def test_from_dict_rejects_non_mapping():
    with pytest.raises(ValueError):
        LoggerConfig.from_dict(["not", "a", "mapping"])


@pytest.mark.parametrize("backend_type,port", [("udp", 12201), ("tcp", 12201), ("mqtt", 1883)])
def test_port_defaults_per_backend(backend_type, port):
    assert BackendConfig(type=backend_type).port == port


@pytest.mark.parametrize(
    "kwargs",
    [
        {"type": "smtp"},
        {"port": 0},
        {"port": 70000},
        {"compression": "brotli"},
        {"type": "tcp", "compression": "gzip"},
        {"chunk_size": 12},
        {"qos": 3},
    ],
)
def test_backend_config_validation(kwargs):
    with pytest.raises(ValueError):
        BackendConfig(**kwargs)


def test_logger_config_validation():
    with pytest.raises(ValueError):
        LoggerConfig(hostname="")
    with pytest.raises(ValueError):
        LoggerConfig(level="loud")
    with pytest.raises(ValueError):
        LoggerConfig(default_metadata=["facility"])


@pytest.mark.parametrize(
    "level,expected",
    [("debug", logging.DEBUG), ("info", logging.INFO), ("notice", logging.INFO),
     ("warn", logging.WARNING), ("err", logging.ERROR), ("emerg", logging.CRITICAL)],
)
def test_logging_level(level, expected):
    assert LoggerConfig(level=level).logging_level == expected


def test_build_backend_types():
    udp = build_backend(BackendConfig(type="udp", compression="zlib", chunk_size=8154))
    assert isinstance(udp, UdpBackend)
    assert udp.compression is MessageCompression.ZLIB
    assert udp.chunk_size == 8154

    tcp = build_backend(BackendConfig(type="tcp", timeout=2.0))
    assert isinstance(tcp, TcpBackend)
    assert tcp.compression is MessageCompression.NONE
    assert tcp.timeout == 2.0

    null = build_backend(BackendConfig(type="null"))
    assert isinstance(null, NullBackend)
    assert null.compression is MessageCompression.NONE


def test_build_backend_defaults_udp_to_gzip():
    assert build_backend(BackendConfig()).compression is MessageCompression.GZIP


def test_build_mqtt_backend_formats_topic(monkeypatch):
    monkeypatch.setattr("gelf_logger.backends.mqtt.mqtt.Client", lambda *args, **kwargs: MagicMock())
    backend = build_backend(BackendConfig(type="mqtt", host="broker", qos=1), hostname="web-01")

    assert isinstance(backend, MqttBackend)
    assert backend.topic == "gelf/web-01"
    assert backend.broker == "broker:1883"
    assert backend.qos == 1


def test_build_logger_from_yaml(config_file):
    logger = build_logger(LoggerConfig.from_yaml(config_file))

    assert logger.hostname == "web-01"
    assert logger.default_metadata == {"facility": "billing", "environment": "prod"}
    assert isinstance(logger.backend, UdpBackend)
    assert logger.backend.compression is MessageCompression.ZLIB
    logger.close()


def test_build_logger_detects_hostname(monkeypatch):
    monkeypatch.setattr("gelf_logger.config.detect_hostname", lambda: "detected")
    logger = build_logger(LoggerConfig(backend=BackendConfig(type="null")))
    assert logger.hostname == "detected"


def test_build_logger_without_hostname_fails(monkeypatch):
    monkeypatch.setattr("gelf_logger.config.detect_hostname", lambda: None)
    with pytest.raises(LoggerCreateError):
        build_logger(LoggerConfig(backend=BackendConfig(type="null")))


def test_build_logger_rejects_reserved_default_metadata():
    config = LoggerConfig(
        hostname="h",
        backend=BackendConfig(type="null"),
        default_metadata={"host": "spoofed"},
    )
    with pytest.raises(EncodingError):
        build_logger(config)


def test_install_logging_sets_configured_level():
    target = logging.getLogger("tests.config.install")
    target.setLevel(logging.NOTSET)
    config = LoggerConfig(hostname="h", level="error", backend=BackendConfig(type="null"))

    with install_logging(config, target=target) as installation:
        assert target.level == logging.ERROR
        target.error("sent")
        target.warning("filtered")
        assert installation.handler.gelf_logger.backend.get_stats()["message_count"] == 1

    assert target.level == logging.NOTSET
