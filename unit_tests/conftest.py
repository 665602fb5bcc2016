"""Shared pytest fixtures for unit tests."""

from datetime import date
from pathlib import Path
from typing import Any, Callable
import sys

import pytest

# Ensure project root is importable when tests run from repository root.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from api.main import app  # noqa: E402
from implementation.classes.schemas import Actor, Movie  # noqa: E402


@pytest.fixture
def client() -> TestClient:
    """TestClient without the lifespan, so the pool is never opened."""
    return TestClient(app)


@pytest.fixture
def movie_factory() -> Callable[..., Movie]:
    """Return a factory that builds a valid Movie with optional overrides."""

    def _factory(**overrides: Any) -> Movie:
        base_data: dict[str, Any] = {
            "id": 123,
            "name": "The Thing",
            "synopsis": "An Antarctic research crew meets a shape-shifter.",
            "released_at": date(1982, 6, 25),
            "runtime": 109,
            "genre_id": 5,
        }
        base_data.update(overrides)
        return Movie(**base_data)

    return _factory


@pytest.fixture
def actor_factory() -> Callable[..., Actor]:
    """Return a factory that builds a valid Actor with optional overrides."""

    def _factory(**overrides: Any) -> Actor:
        base_data: dict[str, Any] = {
            "id": 7,
            "name": "Kurt Russell",
            "bio": "American actor.",
            "born_at": date(1951, 3, 17),
        }
        base_data.update(overrides)
        return Actor(**base_data)

    return _factory
