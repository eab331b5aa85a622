from __future__ import annotations

import logging
from typing import Optional

from playdeck.models.events import status_event
from playdeck.models.player import PlaybackState
from playdeck.services.player_clock import PlayerClock
from playdeck.services.sequencer import PlaybackSequencer
from playdeck.state.backend import StateBackend
from playdeck.state.library_state import get_track
from playdeck.state.player_state import save_player_status
from playdeck.state.playlist_state import get_playlist
from playdeck.state.redis_keys import EVENTS_CHANNEL

log = logging.getLogger("player.executor")


class PlayerExecutor:
    """
    Drives the sequencer from the REST layer and the clock.

    - resolves ids through the library / playlist stores before touching
      the sequencer (unknown ids raise LookupError)
    - feeds clock ticks with the session seen at the previous tick, so a
      tick that was pending when a new track started is dropped
    - persists and publishes a status snapshot after every change
    """

    def __init__(
        self,
        state: StateBackend,
        clock: Optional[PlayerClock] = None,
        sequencer: Optional[PlaybackSequencer] = None,
    ):
        self.state = state
        self.clock = clock or PlayerClock()
        self.sequencer = sequencer or PlaybackSequencer()
        self._armed_session: int = self.sequencer.session

    # =========================
    # Lifecycle
    # =========================

    async def start(self) -> None:
        if self.clock.running:
            return
        self.clock.on_tick(self.on_tick)
        await self._publish_status()
        log.info("executor_started")

    async def stop(self) -> None:
        await self.clock.cancel()
        log.info("executor_stopped")

    # =========================
    # Public REST controls
    # =========================

    def status(self) -> PlaybackState:
        return self.sequencer.get_state()

    async def play_track(self, track_id: int, playlist_id: Optional[int] = None) -> PlaybackState:
        track = await get_track(self.state, track_id)
        if track is None:
            raise LookupError(f"track {track_id} not found")

        track_list = None
        if playlist_id is not None:
            track_list = await get_playlist(self.state, playlist_id)
            if track_list is None:
                raise LookupError(f"playlist {playlist_id} not found")

        self.sequencer.play_track(track, track_list)
        return await self._publish_status()

    async def play_playlist(self, playlist_id: int) -> PlaybackState:
        track_list = await get_playlist(self.state, playlist_id)
        if track_list is None:
            raise LookupError(f"playlist {playlist_id} not found")

        self.sequencer.play_list(track_list)
        return await self._publish_status()

    async def toggle(self) -> PlaybackState:
        self.sequencer.toggle_play_pause()
        return await self._publish_status()

    async def stop_playback(self) -> PlaybackState:
        self.sequencer.stop()
        return await self._publish_status()

    async def next(self) -> PlaybackState:
        self.sequencer.next()
        return await self._publish_status()

    async def previous(self) -> PlaybackState:
        self.sequencer.previous()
        return await self._publish_status()

    # =========================
    # Clock
    # =========================

    async def on_tick(self) -> None:
        applied = self.sequencer.tick(self._armed_session)
        self._armed_session = self.sequencer.session
        if applied:
            await self._publish_status()

    # =========================
    # Status publish
    # =========================

    async def _publish_status(self) -> PlaybackState:
        snapshot = self.sequencer.get_state()
        await save_player_status(self.state, snapshot)
        await self.state.publish_event(EVENTS_CHANNEL, status_event(snapshot))
        return snapshot
