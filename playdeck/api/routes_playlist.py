# playdeck/api/routes_playlist.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from playdeck.api.deps import get_state
from playdeck.models.playlist import (
    AppendTracks,
    AppendTracksResponse,
    PlaylistCreate,
    PlaylistUpdate,
    TrackList,
)
from playdeck.state.backend import StateBackend
from playdeck.state.playlist_state import (
    append_tracks,
    create_playlist,
    delete_playlist,
    get_playlist,
    list_playlists,
    update_playlist,
)
from playdeck.state.redis_keys import EVENTS_CHANNEL

router = APIRouter(prefix="/playlists", tags=["playlists"])


async def _publish_playlists(state: StateBackend) -> None:
    playlists = await list_playlists(state)
    await state.publish_event(
        EVENTS_CHANNEL,
        {"type": "playlists", "data": {"playlists": [p.model_dump() for p in playlists]}},
    )


# =====================================================
# LIST
# =====================================================

@router.get("", response_model=List[TrackList])
async def get_playlists(state: StateBackend = Depends(get_state)):
    return await list_playlists(state)


# =====================================================
# CREATE
# =====================================================

@router.post("", response_model=TrackList, status_code=201)
async def post_playlist(payload: PlaylistCreate, state: StateBackend = Depends(get_state)):
    if not payload.name:
        raise HTTPException(status_code=400, detail="Missing required field: name")

    playlist = await create_playlist(state, payload.name, payload.trackIds)
    await _publish_playlists(state)
    return playlist


# =====================================================
# RENAME
# =====================================================

@router.put("/{playlist_id}", response_model=TrackList)
async def put_playlist(
    playlist_id: int,
    payload: PlaylistUpdate,
    state: StateBackend = Depends(get_state),
):
    if await get_playlist(state, playlist_id) is None:
        raise HTTPException(status_code=404, detail="Playlist not found")
    if not payload.name:
        raise HTTPException(status_code=400, detail="Missing required field: name")

    playlist = await update_playlist(state, playlist_id, payload.name)
    if playlist is None:
        raise HTTPException(status_code=404, detail="Playlist not found")

    await _publish_playlists(state)
    return playlist


# =====================================================
# DELETE
# =====================================================

@router.delete("/{playlist_id}", status_code=204)
async def remove_playlist(playlist_id: int, state: StateBackend = Depends(get_state)):
    if not await delete_playlist(state, playlist_id):
        raise HTTPException(status_code=404, detail="Playlist not found")

    await _publish_playlists(state)
    return Response(status_code=204)


# =====================================================
# APPEND SONGS
# =====================================================

@router.post("/{playlist_id}/songs", response_model=AppendTracksResponse)
async def post_playlist_songs(
    playlist_id: int,
    payload: AppendTracks,
    state: StateBackend = Depends(get_state),
):
    if await get_playlist(state, playlist_id) is None:
        raise HTTPException(status_code=404, detail="Playlist not found")
    if payload.trackIds is None:
        raise HTTPException(status_code=400, detail="trackIds must be an array")

    added = await append_tracks(state, playlist_id, payload.trackIds)
    if added is None:
        raise HTTPException(status_code=404, detail="Playlist not found")

    await _publish_playlists(state)
    return AppendTracksResponse(added=added)
