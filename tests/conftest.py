"""Pytest configuration and shared fixtures."""
import os
from pathlib import Path

import pytest

from watchread.input.reader import InputReader
from watchread.logging_config import reset_logging
from watchread.watch.sources import has_native_support


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "native: requires native change notification")


def pytest_collection_modifyitems(config, items):
    """Skip native-notification tests on platforms without an event observer."""
    if has_native_support() and os.environ.get("WATCHREAD_NO_NATIVE") not in ("1", "true", "True"):
        return
    skip = pytest.mark.skip(reason="Native change notification not available")
    for item in items:
        if "native" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def restore_logging():
    """Undo any logging configuration made by the test."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """Path of a not-yet-created input file in a temp directory."""
    return tmp_path / "in.txt"


@pytest.fixture
def make_reader():
    """Build InputReaders that are closed at teardown."""
    readers: list[InputReader] = []

    def _make(path, value_type=int, **kwargs) -> InputReader:
        reader = InputReader(path, value_type, **kwargs)
        readers.append(reader)
        return reader

    yield _make

    for reader in readers:
        reader.close(timeout=2.0)
