from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, WebSocket

from playdeck.models.user import User
from playdeck.services.player_executor import PlayerExecutor
from playdeck.state.backend import StateBackend
from playdeck.state.user_state import user_for_token
from playdeck.ws.manager import WebSocketManager


# =========================
# CORE STATE
# =========================

def get_state(request: Request) -> StateBackend:
    return request.app.state.state


# =========================
# EXECUTOR (HTTP)
# =========================

def get_player_executor(request: Request) -> PlayerExecutor:
    executor = getattr(request.app.state, "executor", None)
    if executor is None:
        raise HTTPException(status_code=500, detail="Player not initialized")
    return executor


# =========================
# AUTH
# =========================

def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return authorization[7:].strip()


async def get_current_user(
    token: str = Depends(get_bearer_token),
    state: StateBackend = Depends(get_state),
) -> User:
    user = await user_for_token(state, token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


# =========================
# WS MANAGER
# =========================

def get_ws_manager_ws(websocket: WebSocket) -> WebSocketManager:
    return websocket.app.state.ws_manager


# =========================
# EXECUTOR (WEBSOCKET)
# =========================

def get_player_executor_ws(websocket: WebSocket) -> PlayerExecutor:
    return websocket.app.state.executor
