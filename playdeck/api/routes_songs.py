# playdeck/api/routes_songs.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from playdeck.api.deps import get_state
from playdeck.models.library import Track, TrackPayload
from playdeck.state.backend import StateBackend
from playdeck.state.library_state import (
    create_track,
    delete_track,
    get_track,
    list_tracks,
    update_track,
)
from playdeck.state.redis_keys import EVENTS_CHANNEL

router = APIRouter(prefix="/songs", tags=["songs"])

MISSING_FIELDS = "Missing required fields: title, artist, durationSeconds"


async def _publish_library(state: StateBackend) -> None:
    tracks = await list_tracks(state)
    await state.publish_event(
        EVENTS_CHANNEL,
        {"type": "library", "data": {"tracks": [t.model_dump() for t in tracks]}},
    )


# =====================================================
# LIST
# =====================================================

@router.get("", response_model=List[Track])
async def get_songs(state: StateBackend = Depends(get_state)):
    return await list_tracks(state)


# =====================================================
# CREATE
# =====================================================

@router.post("", response_model=Track, status_code=201)
async def post_song(payload: TrackPayload, state: StateBackend = Depends(get_state)):
    if not payload.is_complete():
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)

    track = await create_track(state, payload)
    await _publish_library(state)
    return track


# =====================================================
# UPDATE (also rewrites the copies held by playlists)
# =====================================================

@router.put("/{track_id}", response_model=Track)
async def put_song(
    track_id: int,
    payload: TrackPayload,
    state: StateBackend = Depends(get_state),
):
    if await get_track(state, track_id) is None:
        raise HTTPException(status_code=404, detail="Song not found")
    if not payload.is_complete():
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)

    track = await update_track(state, track_id, payload)
    if track is None:
        raise HTTPException(status_code=404, detail="Song not found")

    await _publish_library(state)
    return track


# =====================================================
# DELETE (also removes it from playlists)
# =====================================================

@router.delete("/{track_id}", status_code=204)
async def remove_song(track_id: int, state: StateBackend = Depends(get_state)):
    if not await delete_track(state, track_id):
        raise HTTPException(status_code=404, detail="Song not found")

    await _publish_library(state)
    return Response(status_code=204)
