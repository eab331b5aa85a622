from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Track(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    artist: str
    durationSeconds: int


class TrackPayload(BaseModel):
    # everything optional so the routes can answer 400 like the REST contract says
    title: Optional[str] = None
    artist: Optional[str] = None
    durationSeconds: Optional[int] = None

    def is_complete(self) -> bool:
        if not self.title or not self.artist:
            return False
        return self.durationSeconds is not None and self.durationSeconds > 0
