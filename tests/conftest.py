"""Shared pytest configuration and fixtures for tests."""

import asyncio
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tally import config  # noqa: E402
from tally.core.storage import MemoryStorage, TaskPersistence  # noqa: E402
from tally.core.store import TaskStore  # noqa: E402


class FakeClock:
    """Millisecond clock that advances by one on every call."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        value = self.now
        self.now += 1
        return value


class AlertRecorder:
    """Collects (title, message) alerts instead of showing them."""

    def __init__(self):
        self.alerts = []

    def __call__(self, title: str, message: str) -> None:
        self.alerts.append((title, message))


@pytest.fixture(autouse=True)
def temp_storage(monkeypatch, tmp_path):
    """Point the default storage file at a temporary directory."""
    storage_path = tmp_path / "storage.json"
    monkeypatch.setattr(config, "TALLY_HOME", tmp_path)
    monkeypatch.setattr(config, "STORAGE_PATH", storage_path)
    yield storage_path


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage):
    return TaskStore(TaskPersistence(memory_storage), clock=FakeClock())


@pytest.fixture
def alerts():
    return AlertRecorder()


def run(coro):
    """Drive a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)
