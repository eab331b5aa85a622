from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel

from playdeck.models.player import PlaybackState


EventType = Literal[
    "status",
    "library",
    "playlists",
]


class WsEvent(BaseModel):
    type: EventType
    data: Dict[str, Any]


def status_event(state: PlaybackState) -> Dict[str, Any]:
    return WsEvent(type="status", data=state.model_dump()).model_dump()
