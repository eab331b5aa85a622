"""Tests for the player executor (stores + sequencer + clock glue)."""

import asyncio

import pytest

from playdeck.models.library import TrackPayload
from playdeck.services.player_clock import PlayerClock
from playdeck.services.player_executor import PlayerExecutor
from playdeck.state.library_state import create_track
from playdeck.state.player_state import get_player_status
from playdeck.state.playlist_state import create_playlist
from playdeck.state.redis_keys import EVENTS_CHANNEL


async def _seed(state):
    a = await create_track(state, TrackPayload(title="A", artist="x", durationSeconds=3))
    b = await create_track(state, TrackPayload(title="B", artist="y", durationSeconds=2))
    playlist = await create_playlist(state, "L", [a.id, b.id])
    return a, b, playlist


@pytest.fixture
def executor(state):
    return PlayerExecutor(state, clock=PlayerClock(interval_s=3600))


class TestControls:
    """Tests for the REST-facing controls."""

    @pytest.mark.asyncio
    async def test_play_track_unknown_id(self, executor):
        with pytest.raises(LookupError):
            await executor.play_track(404)
        assert executor.status().is_idle

    @pytest.mark.asyncio
    async def test_play_track_unknown_playlist(self, state, executor):
        a, _, _ = await _seed(state)
        with pytest.raises(LookupError):
            await executor.play_track(a.id, playlist_id=999)
        assert executor.status().is_idle

    @pytest.mark.asyncio
    async def test_play_playlist_and_navigate(self, state, executor):
        a, b, playlist = await _seed(state)

        snapshot = await executor.play_playlist(playlist.id)
        assert snapshot.activeTrack.id == a.id
        assert snapshot.hasNext is True

        snapshot = await executor.next()
        assert snapshot.activeTrack.id == b.id

        snapshot = await executor.previous()
        assert snapshot.activeTrack.id == a.id

        snapshot = await executor.toggle()
        assert snapshot.isAdvancing is False

        snapshot = await executor.stop_playback()
        assert snapshot.is_idle

    @pytest.mark.asyncio
    async def test_status_is_persisted(self, state, executor):
        a, _, _ = await _seed(state)
        await executor.play_track(a.id)

        saved = await get_player_status(state)
        assert saved.activeTrack.id == a.id
        assert saved.isAdvancing is True

    @pytest.mark.asyncio
    async def test_status_is_published(self, state, executor):
        a, _, _ = await _seed(state)
        received = []

        async def consume():
            async for raw in state.listen(EVENTS_CHANNEL):
                received.append(raw)
                return

        task = asyncio.create_task(consume())
        await asyncio.sleep(0)
        await executor.play_track(a.id)
        await asyncio.wait_for(task, timeout=1)

        assert '"type": "status"' in received[0]


class TestTicks:
    """Tests for clock-driven progress through the executor."""

    @pytest.mark.asyncio
    async def test_ticks_run_playlist_to_the_end(self, state, executor):
        a, b, playlist = await _seed(state)
        await executor.play_playlist(playlist.id)

        # first tick only arms the new session
        await executor.on_tick()
        assert executor.status().elapsedSeconds == 0

        await executor.on_tick()
        await executor.on_tick()
        assert executor.status().elapsedSeconds == 2

        await executor.on_tick()
        assert executor.status().activeTrack.id == b.id

        for _ in range(5):
            await executor.on_tick()
        assert executor.status().is_idle

    @pytest.mark.asyncio
    async def test_tick_pending_across_new_track_is_dropped(self, state, executor):
        a, b, _ = await _seed(state)
        await executor.play_track(a.id)
        await executor.on_tick()
        await executor.on_tick()
        assert executor.status().elapsedSeconds == 1

        # the next tick was armed for A
        await executor.play_track(b.id)
        await executor.on_tick()

        status = executor.status()
        assert status.activeTrack.id == b.id
        assert status.elapsedSeconds == 0

    @pytest.mark.asyncio
    async def test_start_and_stop_drive_the_clock(self, executor):
        await executor.start()
        assert executor.clock.running
        await executor.stop()
        assert not executor.clock.running
