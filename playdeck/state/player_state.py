from __future__ import annotations

from playdeck.models.player import PlaybackState
from playdeck.state.backend import StateBackend
from playdeck.state.redis_keys import PLAYER_STATUS_KEY


async def get_player_status(state: StateBackend) -> PlaybackState:
    raw = await state.get_json(PLAYER_STATUS_KEY)
    if not raw:
        return PlaybackState()
    return PlaybackState.model_validate(raw)


async def save_player_status(state: StateBackend, status: PlaybackState) -> None:
    await state.set_json(PLAYER_STATUS_KEY, status.model_dump())
