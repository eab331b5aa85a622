from __future__ import annotations

import logging
from typing import Callable, List, Optional

from playdeck.models.library import Track
from playdeck.models.player import PlaybackState
from playdeck.models.playlist import TrackList

log = logging.getLogger("player.sequencer")

Listener = Callable[[PlaybackState], None]


class PlaybackSequencer:
    """
    Playback state machine: which track is active, whether it is advancing,
    how far into it we are and what comes next / previous.

    - Idle -> play_track / play_list -> Playing
    - Playing <-> Paused via toggle_play_pause
    - stop (or next past the end of the list) -> Idle

    No operation raises. Invalid requests fall back to a no-op or a stop.

    Every play / stop bumps `session`. A clock that captured the session
    before sleeping passes it back to `tick`, so a tick scheduled for a
    previous track is dropped instead of advancing the new one.
    """

    def __init__(self) -> None:
        self._track: Optional[Track] = None
        self._advancing: bool = False
        self._elapsed: int = 0
        self._list: Optional[TrackList] = None
        self._index: int = -1

        self._session: int = 0
        self._listeners: List[Listener] = []

    # =========================
    # Queries
    # =========================

    @property
    def session(self) -> int:
        return self._session

    @property
    def has_next(self) -> bool:
        return (
            self._list is not None
            and self._index >= 0
            and self._index < len(self._list.tracks) - 1
        )

    @property
    def has_previous(self) -> bool:
        return self._list is not None and self._index > 0

    def get_state(self) -> PlaybackState:
        return PlaybackState(
            activeTrack=self._track,
            isAdvancing=self._advancing,
            elapsedSeconds=self._elapsed,
            activeList=self._list,
            activeIndex=self._index,
            hasNext=self.has_next,
            hasPrevious=self.has_previous,
            session=self._session,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Registers a listener called with a fresh snapshot after every change.
        Returns a callable that removes it.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # =========================
    # Intents
    # =========================

    def play_track(self, track: Track, track_list: Optional[TrackList] = None) -> None:
        self._enter(track, track_list, track_list.index_of(track.id) if track_list is not None else -1)
        log.info(
            "track_start",
            extra={"trackId": track.id, "listId": track_list.id if track_list is not None else None, "index": self._index},
        )
        self._notify()

    def play_list(self, track_list: TrackList) -> None:
        if not track_list.tracks:
            log.debug("play_list_empty", extra={"listId": track_list.id})
            return
        self.play_track(track_list.tracks[0], track_list)

    def toggle_play_pause(self) -> None:
        if self._track is None:
            return
        self._advancing = not self._advancing
        log.info("player_toggled", extra={"isAdvancing": self._advancing})
        self._notify()

    def stop(self) -> None:
        self._reset()
        log.info("player_stopped")
        self._notify()

    def next(self) -> None:
        # no list context or last entry: playback ends
        if not self.has_next:
            self.stop()
            return
        self._step_to(self._index + 1)

    def previous(self) -> None:
        if not self.has_previous:
            return
        self._step_to(self._index - 1)

    # =========================
    # Clock driver
    # =========================

    def tick(self, session: Optional[int] = None) -> bool:
        """
        Advances the active track by one second.

        Ignored while idle or paused, and when `session` belongs to an older
        playback. When the track would reach its duration, moves on like
        `next()` instead. Returns True if the tick was applied.
        """
        if self._track is None or not self._advancing:
            return False
        if session is not None and session != self._session:
            log.debug("stale_tick_dropped", extra={"tickSession": session, "session": self._session})
            return False

        if self._elapsed + 1 >= self._track.durationSeconds:
            log.info("track_end", extra={"trackId": self._track.id})
            self.next()
            return True

        self._elapsed += 1
        self._notify()
        return True

    # =========================
    # Internals
    # =========================

    def _step_to(self, index: int) -> None:
        track = self._list.tracks[index]
        self._enter(track, self._list, index)
        log.info("track_start", extra={"trackId": track.id, "listId": self._list.id, "index": index})
        self._notify()

    def _enter(self, track: Track, track_list: Optional[TrackList], index: int) -> None:
        self._track = track
        self._advancing = True
        self._elapsed = 0
        self._list = track_list
        self._index = index if track_list is not None else -1
        self._session += 1

    def _reset(self) -> None:
        self._track = None
        self._advancing = False
        self._elapsed = 0
        self._list = None
        self._index = -1
        self._session += 1

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.get_state()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                log.exception("sequencer_listener_failed")
