# tests/conftest.py

import logging

import pytest
import structlog
from structlog.contextvars import clear_contextvars

from Dicebag.metrics import reset_counters


class FixedSource:
    """Random source that always picks the same face index."""

    def __init__(self, index: int = 0):
        self.index = index
        self.calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return self.index


class ScriptedSource:
    """Random source that replays a fixed list of face indexes, cycling."""

    def __init__(self, indexes: list[int]):
        self.indexes = list(indexes)
        self._i = 0

    def randrange(self, stop: int) -> int:
        idx = self.indexes[self._i % len(self.indexes)]
        self._i += 1
        assert 0 <= idx < stop
        return idx


@pytest.fixture
def fresh_metrics():
    reset_counters()
    yield
    reset_counters()


@pytest.fixture
def zero_source() -> FixedSource:
    return FixedSource(0)


@pytest.fixture
def restore_logging():
    """Undo setup_logging() so later tests see the stock configuration."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    clear_contextvars()
