# playdeck/api/routes_player.py
from fastapi import APIRouter, Depends, HTTPException

from playdeck.api.deps import get_player_executor
from playdeck.models.player import PlaybackState, PlayTrackRequest
from playdeck.services.player_executor import PlayerExecutor

router = APIRouter(prefix="/player", tags=["player"])


# =====================================================
# STATUS
# =====================================================
@router.get("", response_model=PlaybackState)
async def status(executor: PlayerExecutor = Depends(get_player_executor)):
    return executor.status()


# =====================================================
# PLAY TRACK (optionally inside a playlist)
# =====================================================
@router.post("/play", response_model=PlaybackState)
async def play(
    payload: PlayTrackRequest,
    executor: PlayerExecutor = Depends(get_player_executor),
):
    try:
        return await executor.play_track(payload.trackId, payload.playlistId)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# =====================================================
# PLAY PLAYLIST FROM THE TOP
# 👉 empty playlist = nothing changes
# =====================================================
@router.post("/play-playlist/{playlist_id}", response_model=PlaybackState)
async def play_playlist(
    playlist_id: int,
    executor: PlayerExecutor = Depends(get_player_executor),
):
    try:
        return await executor.play_playlist(playlist_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# =====================================================
# PLAY / PAUSE
# =====================================================
@router.post("/toggle", response_model=PlaybackState)
async def toggle(executor: PlayerExecutor = Depends(get_player_executor)):
    return await executor.toggle()


# =====================================================
# STOP
# =====================================================
@router.post("/stop", response_model=PlaybackState)
async def stop(executor: PlayerExecutor = Depends(get_player_executor)):
    return await executor.stop_playback()


# =====================================================
# NEXT
# 👉 past the last entry (or without a playlist) this stops playback
# =====================================================
@router.post("/next", response_model=PlaybackState)
async def next_track(executor: PlayerExecutor = Depends(get_player_executor)):
    return await executor.next()


# =====================================================
# PREVIOUS
# =====================================================
@router.post("/previous", response_model=PlaybackState)
async def previous_track(executor: PlayerExecutor = Depends(get_player_executor)):
    return await executor.previous()
