"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from get_platform.adapters.mock import MockCommandAdapter
from get_platform.core.observability.warn_once import WarnOnce, warn_once
from get_platform.core.services.prober import CommandProber


class RecordingNotify:
    """notify(key, message) double that remembers every call."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def __call__(self, key: str, message: str) -> None:
        self.calls.append((key, message))

    @property
    def keys(self) -> list[str]:
        return [key for key, _ in self.calls]


@pytest.fixture(autouse=True)
def _reset_warn_once():
    """Keep the process-wide warning registry from leaking between tests."""
    warn_once.reset()
    yield
    warn_once.reset()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() rewires the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def mock_adapter() -> MockCommandAdapter:
    """A scripted adapter where every unscripted command fails."""
    return MockCommandAdapter()


@pytest.fixture
def prober(mock_adapter: MockCommandAdapter) -> CommandProber:
    """A prober wired to ``mock_adapter``."""
    return CommandProber(adapter=mock_adapter)


@pytest.fixture
def notify() -> RecordingNotify:
    return RecordingNotify()


@pytest.fixture
def fresh_warn_once() -> WarnOnce:
    return WarnOnce()


@pytest.fixture
def os_release(tmp_path: Path):
    """Factory writing an os-release file and returning its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "os-release"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
