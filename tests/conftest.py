"""Shared fixtures for the dup-manager tests."""

from pathlib import Path

import pytest

from dup_manager.core.quarantine import QuarantineManager
from dup_manager.utils.config import Config


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def volume(tmp_path):
    """A directory standing in for a volume root."""
    return tmp_path


@pytest.fixture
def quarantine(config, volume):
    """Quarantine manager whose volume root is the test's tmp_path."""
    return QuarantineManager(config, volume_root_resolver=lambda p: volume)


@pytest.fixture
def make_file(volume):
    """Create a file with the given content below the volume root."""

    def _make(relative: str, content: str = "") -> Path:
        path = volume / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _make
