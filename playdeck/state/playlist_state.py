from __future__ import annotations

from typing import Any, Dict, List, Optional

from playdeck.models.playlist import TrackList
from playdeck.state.backend import StateBackend
from playdeck.state.library_state import get_songs_raw
from playdeck.state.redis_keys import PLAYLISTS_KEY, PLAYLISTS_SEQ_KEY


async def get_playlists_raw(state: StateBackend) -> List[Dict[str, Any]]:
    data = await state.get_json(PLAYLISTS_KEY)
    if not data:
        return []
    if isinstance(data, list):
        return data
    return []


async def set_playlists_raw(state: StateBackend, playlists: List[Dict[str, Any]]) -> None:
    await state.set_json(PLAYLISTS_KEY, playlists)


async def list_playlists(state: StateBackend) -> List[TrackList]:
    return [TrackList.model_validate(p) for p in await get_playlists_raw(state)]


async def get_playlist(state: StateBackend, playlist_id: int) -> Optional[TrackList]:
    """
    Returns a playlist by id or None if it does not exist
    """
    for p in await get_playlists_raw(state):
        if p.get("id") == playlist_id:
            return TrackList.model_validate(p)
    return None


async def create_playlist(
    state: StateBackend,
    name: str,
    track_ids: Optional[List[int]] = None,
) -> TrackList:
    # unknown ids are dropped, songs keep library order
    wanted = set(track_ids or [])
    songs = [s for s in await get_songs_raw(state) if s.get("id") in wanted]

    playlist = TrackList.model_validate(
        {"id": await state.next_id(PLAYLISTS_SEQ_KEY), "name": name, "tracks": songs}
    )

    playlists = await get_playlists_raw(state)
    playlists.append(playlist.model_dump())
    await set_playlists_raw(state, playlists)
    return playlist


async def update_playlist(
    state: StateBackend,
    playlist_id: int,
    name: str,
) -> Optional[TrackList]:
    playlists = await get_playlists_raw(state)

    for p in playlists:
        if p.get("id") == playlist_id:
            p["name"] = name
            await set_playlists_raw(state, playlists)
            return TrackList.model_validate(p)

    return None


async def delete_playlist(state: StateBackend, playlist_id: int) -> bool:
    playlists = await get_playlists_raw(state)
    remaining = [p for p in playlists if p.get("id") != playlist_id]
    if len(remaining) == len(playlists):
        return False
    await set_playlists_raw(state, remaining)
    return True


async def append_tracks(
    state: StateBackend,
    playlist_id: int,
    track_ids: List[int],
) -> Optional[int]:
    """
    Appends library songs to a playlist.
    Unknown ids and songs already in the playlist are skipped.
    Returns how many were added, or None if the playlist does not exist.
    """
    playlists = await get_playlists_raw(state)
    target: Optional[Dict[str, Any]] = None
    for p in playlists:
        if p.get("id") == playlist_id:
            target = p
            break

    if target is None:
        return None

    wanted = set(track_ids)
    present = {t.get("id") for t in target.get("tracks", [])}
    to_add = [
        s for s in await get_songs_raw(state)
        if s.get("id") in wanted and s.get("id") not in present
    ]

    target.setdefault("tracks", []).extend(to_add)
    await set_playlists_raw(state, playlists)
    return len(to_add)
