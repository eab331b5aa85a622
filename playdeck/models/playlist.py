# playdeck/models/playlist.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from playdeck.models.library import Track


class TrackList(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    # order matters: it defines next / previous for the player
    tracks: List[Track] = Field(default_factory=list)

    def index_of(self, track_id: int) -> int:
        for i, t in enumerate(self.tracks):
            if t.id == track_id:
                return i
        return -1


class PlaylistCreate(BaseModel):
    name: Optional[str] = None
    trackIds: List[int] = Field(default_factory=list)


class PlaylistUpdate(BaseModel):
    name: Optional[str] = None


class AppendTracks(BaseModel):
    trackIds: Optional[List[int]] = None


class AppendTracksResponse(BaseModel):
    ok: bool = True
    added: int
