from __future__ import annotations

from fastapi import APIRouter, Depends

from playdeck.api.deps import get_state
from playdeck.models.player import PlaybackState
from playdeck.state.backend import StateBackend
from playdeck.state.player_state import get_player_status, save_player_status
from playdeck.state.redis_keys import PLAYER_STATUS_KEY

router = APIRouter(prefix="/status", tags=["status"])


# last snapshot persisted by the player, as other processes see it
@router.get("", response_model=PlaybackState)
async def get_status(state: StateBackend = Depends(get_state)):
    if not await state.exists(PLAYER_STATUS_KEY):
        status = PlaybackState()
        await save_player_status(state, status)
        return status
    return await get_player_status(state)
