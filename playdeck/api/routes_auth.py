# playdeck/api/routes_auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from playdeck.api.deps import get_bearer_token, get_current_user, get_state
from playdeck.models.user import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    User,
    UserUpdate,
)
from playdeck.state.backend import StateBackend
from playdeck.state import user_state

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=User, status_code=201)
async def register(payload: RegisterRequest, state: StateBackend = Depends(get_state)):
    if not payload.email or not payload.password or not payload.name:
        raise HTTPException(status_code=400, detail="Missing required fields: email, password, name")

    user = await user_state.register(state, payload.email, payload.password, payload.name)
    if user is None:
        raise HTTPException(status_code=409, detail="Email already registered")
    return user


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, state: StateBackend = Depends(get_state)):
    token = await user_state.authenticate(state, payload.email, payload.password)
    if token is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return TokenResponse(token=token)


@router.post("/logout", status_code=204)
async def logout(
    token: str = Depends(get_bearer_token),
    state: StateBackend = Depends(get_state),
):
    await user_state.logout(state, token)
    return Response(status_code=204)


@router.get("/me", response_model=User)
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.put("/me", response_model=User)
async def put_me(
    payload: UserUpdate,
    user: User = Depends(get_current_user),
    state: StateBackend = Depends(get_state),
):
    if (payload.name is not None and not payload.name.strip()) or (
        payload.email is not None and not payload.email.strip()
    ):
        raise HTTPException(status_code=400, detail="name and email cannot be empty")

    try:
        updated = await user_state.update_user(state, user.id, name=payload.name, email=payload.email)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return updated


@router.delete("/me", status_code=204)
async def delete_me(
    user: User = Depends(get_current_user),
    state: StateBackend = Depends(get_state),
):
    await user_state.delete_user(state, user.id)
    return Response(status_code=204)
