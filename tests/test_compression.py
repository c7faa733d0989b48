import gzip
import zlib

import pytest

from gelf_logger import CompressionError, EncodingError, Message, MessageCompression, WireMessage


@pytest.fixture
def wire():
    msg = Message("compress me").with_full_message("x" * 500).with_metadata("n", 1)
    return WireMessage(msg, "myhost", {"facility": "tests"})


def test_default_is_gzip():
    assert MessageCompression.default() is MessageCompression.GZIP


def test_none_returns_raw_json(wire):
    assert MessageCompression.NONE.compress(wire) == wire.to_gelf().encode("utf-8")


def test_gzip_round_trip(wire):
    payload = MessageCompression.GZIP.compress(wire)
    assert payload[:2] == b"\x1f\x8b"
    assert gzip.decompress(payload) == wire.to_bytes()


def test_zlib_round_trip(wire):
    payload = MessageCompression.ZLIB.compress(wire)
    assert zlib.decompress(payload) == wire.to_bytes()


@pytest.mark.parametrize("compression", list(MessageCompression))
def test_decompress_inverts_compress(compression, wire):
    assert compression.decompress(compression.compress(wire)) == wire.to_bytes()


@pytest.mark.parametrize("compression", list(MessageCompression))
def test_detect(compression, wire):
    assert MessageCompression.detect(compression.compress(wire)) is compression


def test_compressed_payload_is_smaller(wire):
    raw = MessageCompression.NONE.compress(wire)
    assert len(MessageCompression.GZIP.compress(wire)) < len(raw)
    assert len(MessageCompression.ZLIB.compress(wire)) < len(raw)


def test_parse_from_config_value():
    assert MessageCompression("zlib") is MessageCompression.ZLIB
    with pytest.raises(ValueError):
        MessageCompression("brotli")


def test_encoder_failure_raises_compression_error(monkeypatch, wire):
    class BrokenCompressor:
        def compress(self, data):
            raise zlib.error("boom")

        def flush(self):
            return b""

    monkeypatch.setattr("gelf_logger.compression.zlib.compressobj", lambda: BrokenCompressor())

    with pytest.raises(CompressionError) as excinfo:
        MessageCompression.ZLIB.compress(wire)
    assert excinfo.value.algorithm == "zlib"


def test_encoding_error_is_not_wrapped():
    wire = WireMessage(Message("bad \ud800"), "h")
    with pytest.raises(EncodingError):
        MessageCompression.GZIP.compress(wire)


def test_decompress_garbage_raises():
    with pytest.raises(CompressionError) as excinfo:
        MessageCompression.GZIP.decompress(b"not gzip")
    assert excinfo.value.algorithm == "gzip"
