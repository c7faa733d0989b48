"""Shared test fixtures for gelf_logger tests."""

import pytest

from gelf_logger import Logger

from .support import RecordingBackend


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def logger(backend):
    return Logger(backend, "myhost")
