"""Shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from playdeck.core.config import settings
from playdeck.models.library import Track
from playdeck.models.playlist import TrackList
from playdeck.state.memory_state import MemoryState


@pytest.fixture
def track_a() -> Track:
    return Track(id=1, title="A", artist="Artist A", durationSeconds=30)


@pytest.fixture
def track_b() -> Track:
    return Track(id=2, title="B", artist="Artist B", durationSeconds=45)


@pytest.fixture
def two_track_list(track_a: Track, track_b: Track) -> TrackList:
    return TrackList(id=10, name="L", tracks=[track_a, track_b])


@pytest.fixture
def state() -> MemoryState:
    return MemoryState()


@pytest.fixture
def client(monkeypatch):
    """App on the in-memory backend, seeded, with a clock too slow to tick during a test."""
    monkeypatch.setattr(settings, "state_backend", "memory")
    monkeypatch.setattr(settings, "seed_demo_data", True)
    monkeypatch.setattr(settings, "tick_interval_s", 3600.0)

    from playdeck.main import app

    with TestClient(app) as c:
        yield c
