from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from playdeck.models.library import Track
from playdeck.models.playlist import TrackList


class PlaybackState(BaseModel):
    """
    Immutable snapshot of the player.

    hasNext / hasPrevious / session are derived by the sequencer when the
    snapshot is taken and are carried along so clients do not recompute them.
    """

    model_config = ConfigDict(frozen=True)

    activeTrack: Optional[Track] = None
    isAdvancing: bool = False
    elapsedSeconds: int = 0
    activeList: Optional[TrackList] = None
    activeIndex: int = -1

    hasNext: bool = False
    hasPrevious: bool = False
    session: int = 0

    @property
    def is_idle(self) -> bool:
        return self.activeTrack is None


class PlayTrackRequest(BaseModel):
    trackId: int
    playlistId: Optional[int] = None
