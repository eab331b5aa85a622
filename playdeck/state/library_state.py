from __future__ import annotations

from typing import Any, Dict, List, Optional

from playdeck.models.library import Track, TrackPayload
from playdeck.state.backend import StateBackend
from playdeck.state.redis_keys import PLAYLISTS_KEY, SONGS_KEY, SONGS_SEQ_KEY


async def get_songs_raw(state: StateBackend) -> List[Dict[str, Any]]:
    data = await state.get_json(SONGS_KEY)
    if not data:
        return []
    if isinstance(data, list):
        return data
    return []


async def set_songs_raw(state: StateBackend, songs: List[Dict[str, Any]]) -> None:
    await state.set_json(SONGS_KEY, songs)


async def list_tracks(state: StateBackend) -> List[Track]:
    return [Track.model_validate(s) for s in await get_songs_raw(state)]


async def get_track(state: StateBackend, track_id: int) -> Optional[Track]:
    for s in await get_songs_raw(state):
        if s.get("id") == track_id:
            return Track.model_validate(s)
    return None


async def create_track(state: StateBackend, payload: TrackPayload) -> Track:
    songs = await get_songs_raw(state)
    track = Track(
        id=await state.next_id(SONGS_SEQ_KEY),
        title=payload.title,
        artist=payload.artist,
        durationSeconds=int(payload.durationSeconds),
    )
    songs.append(track.model_dump())
    await set_songs_raw(state, songs)
    return track


async def update_track(
    state: StateBackend,
    track_id: int,
    payload: TrackPayload,
) -> Optional[Track]:
    """
    Replaces title/artist/duration of a song.
    Playlists hold copies of their songs, so every copy is rewritten too.
    Returns None when the id does not exist.
    """
    songs = await get_songs_raw(state)
    updated: Optional[Track] = None

    for i, s in enumerate(songs):
        if s.get("id") == track_id:
            updated = Track(
                id=track_id,
                title=payload.title,
                artist=payload.artist,
                durationSeconds=int(payload.durationSeconds),
            )
            songs[i] = updated.model_dump()
            break

    if updated is None:
        return None

    await set_songs_raw(state, songs)

    playlists = await state.get_json(PLAYLISTS_KEY) or []
    for p in playlists:
        p["tracks"] = [
            updated.model_dump() if t.get("id") == track_id else t
            for t in p.get("tracks", [])
        ]
    await state.set_json(PLAYLISTS_KEY, playlists)

    return updated


async def delete_track(state: StateBackend, track_id: int) -> bool:
    """
    Removes a song from the library and from every playlist holding it.
    """
    songs = await get_songs_raw(state)
    remaining = [s for s in songs if s.get("id") != track_id]
    if len(remaining) == len(songs):
        return False

    await set_songs_raw(state, remaining)

    playlists = await state.get_json(PLAYLISTS_KEY) or []
    for p in playlists:
        p["tracks"] = [t for t in p.get("tracks", []) if t.get("id") != track_id]
    await state.set_json(PLAYLISTS_KEY, playlists)

    return True
