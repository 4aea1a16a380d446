"""
Shared fixtures for the mood matching test suite.

Provides:
- a raw-row factory matching the catalog's positional layout
- repository/engine builders that never touch the bundled catalog file
- a loguru sink collecting warning messages
"""

from collections.abc import Callable, Iterator

import pytest
from loguru import logger

from app.services.mood.engine import MatchEngine
from app.services.mood.repository import ProfileRepository


@pytest.fixture
def make_row() -> Callable[..., list[str]]:
    def _make_row(
        label: str,
        conditions: str = "",
        pattern: str = "Uplifted",
        triggers: str = "",
        description: str = "",
        quotes: str = "['A quote']",
    ) -> list[str]:
        return [label, triggers, conditions, pattern, description, quotes]

    return _make_row


@pytest.fixture
def build_engine() -> Callable[..., MatchEngine]:
    """Build an engine over an in-memory catalog, independent of environment settings."""

    def _build(rows, noise_threshold: float = 0.0, drift_fallback: bool = False) -> MatchEngine:
        repository = ProfileRepository(fallback_label="Neutral Balance")
        repository.load_rows(rows)
        return MatchEngine(repository, noise_threshold=noise_threshold, drift_fallback=drift_fallback)

    return _build


@pytest.fixture
def warnings_logged() -> Iterator[list[str]]:
    """Messages logged at WARNING or above while the test runs."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
