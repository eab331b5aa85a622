from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from playdeck.core.config import settings
from playdeck.core.logging import setup_logging

from playdeck.models.library import TrackPayload
from playdeck.state.backend import StateBackend, create_state
from playdeck.state.library_state import create_track, get_songs_raw
from playdeck.state.playlist_state import create_playlist, get_playlists_raw

from playdeck.services.player_clock import PlayerClock
from playdeck.services.player_executor import PlayerExecutor

from playdeck.ws.manager import WebSocketManager
from playdeck.ws.broadcaster import StateToWebSocketBroadcaster

from playdeck.api.routes_ws import router as ws_router
from playdeck.api.routes_songs import router as songs_router
from playdeck.api.routes_playlist import router as playlist_router
from playdeck.api.routes_auth import router as auth_router
from playdeck.api.routes_status import router as status_router
from playdeck.api.routes_player import router as player_router

log = logging.getLogger("app")

DEMO_SONGS = [
    ("Bohemian Rhapsody", "Queen", 355),
    ("Stairway to Heaven", "Led Zeppelin", 482),
    ("Hotel California", "Eagles", 390),
    ("Like a Rolling Stone", "Bob Dylan", 373),
    ("Smells Like Teen Spirit", "Nirvana", 301),
]

# positions in DEMO_SONGS
DEMO_PLAYLISTS = [
    ("Rock Classics", [0, 1, 3]),
    ("Chill Vibes", [2]),
    ("90s Grunge", [4]),
]


async def bootstrap_defaults(state: StateBackend) -> None:
    if await get_songs_raw(state) or await get_playlists_raw(state):
        return

    tracks = []
    for title, artist, duration in DEMO_SONGS:
        tracks.append(
            await create_track(
                state,
                TrackPayload(title=title, artist=artist, durationSeconds=duration),
            )
        )

    for name, positions in DEMO_PLAYLISTS:
        await create_playlist(state, name, [tracks[i].id for i in positions])

    log.info("demo_data_seeded", extra={"songs": len(tracks), "playlists": len(DEMO_PLAYLISTS)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    log.info("app_starting", extra={"backend": settings.state_backend})

    state = await create_state(settings)
    app.state.state = state

    if settings.seed_demo_data:
        await bootstrap_defaults(state)

    # WEBSOCKET
    app.state.ws_manager = WebSocketManager()
    app.state.broadcaster = StateToWebSocketBroadcaster(state, app.state.ws_manager)
    await app.state.broadcaster.start()

    # PLAYER
    app.state.executor = PlayerExecutor(state, clock=PlayerClock(settings.tick_interval_s))
    await app.state.executor.start()

    try:
        yield
    finally:
        try:
            await app.state.executor.stop()
        except Exception:
            log.exception("error_stopping_executor")

        try:
            await app.state.broadcaster.stop()
        except Exception:
            log.exception("error_stopping_broadcaster")

        try:
            await state.close()
        except Exception:
            log.exception("error_closing_state")


app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ws_router)
app.include_router(songs_router)
app.include_router(playlist_router)
app.include_router(auth_router)
app.include_router(status_router)
app.include_router(player_router)


@app.get("/health")
def health():
    return {
        "ok": True,
        "app": settings.app_name,
        "env": settings.app_env,
    }
