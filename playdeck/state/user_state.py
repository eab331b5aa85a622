from __future__ import annotations

import asyncio
import hashlib
import hmac
import os
import time
import uuid
from typing import Any, Dict, List, Optional

from playdeck.models.user import Session, User, UserRecord
from playdeck.state.backend import StateBackend
from playdeck.state.redis_keys import SESSIONS_KEY, USERS_KEY, USERS_SEQ_KEY

_HASH_ROUNDS = 100_000


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), _HASH_ROUNDS
    )
    return digest.hex()


def _public(record: Dict[str, Any]) -> User:
    return User(id=record["id"], email=record["email"], name=record["name"])


async def _get_users_raw(state: StateBackend) -> List[Dict[str, Any]]:
    data = await state.get_json(USERS_KEY)
    return data if isinstance(data, list) else []


async def _get_sessions_raw(state: StateBackend) -> Dict[str, Dict[str, Any]]:
    data = await state.get_json(SESSIONS_KEY)
    return data if isinstance(data, dict) else {}


async def register(
    state: StateBackend,
    email: str,
    password: str,
    name: str,
) -> Optional[User]:
    """
    Creates a user. Returns None if the email is already taken.
    """
    users = await _get_users_raw(state)
    email = email.strip().lower()
    if any(u.get("email") == email for u in users):
        return None

    salt = os.urandom(16).hex()
    record = UserRecord(
        id=await state.next_id(USERS_SEQ_KEY),
        email=email,
        name=name,
        passwordHash=await asyncio.to_thread(hash_password, password, salt),
        salt=salt,
    )
    users.append(record.model_dump())
    await state.set_json(USERS_KEY, users)
    return _public(record.model_dump())


async def authenticate(state: StateBackend, email: str, password: str) -> Optional[str]:
    """
    Checks credentials and opens a session. Returns the bearer token.
    """
    email = email.strip().lower()
    for u in await _get_users_raw(state):
        if u.get("email") != email:
            continue
        expected = await asyncio.to_thread(hash_password, password, u["salt"])
        if not hmac.compare_digest(expected, u["passwordHash"]):
            return None

        session = Session(token=uuid.uuid4().hex, userId=u["id"], createdAt=time.time())
        sessions = await _get_sessions_raw(state)
        sessions[session.token] = session.model_dump()
        await state.set_json(SESSIONS_KEY, sessions)
        return session.token
    return None


async def user_for_token(state: StateBackend, token: str) -> Optional[User]:
    session = (await _get_sessions_raw(state)).get(token)
    if session is None:
        return None
    for u in await _get_users_raw(state):
        if u.get("id") == session.get("userId"):
            return _public(u)
    return None


async def update_user(
    state: StateBackend,
    user_id: int,
    name: Optional[str] = None,
    email: Optional[str] = None,
) -> Optional[User]:
    users = await _get_users_raw(state)
    if email is not None:
        email = email.strip().lower()
        if any(u.get("email") == email and u.get("id") != user_id for u in users):
            raise ValueError("email already registered")

    for u in users:
        if u.get("id") == user_id:
            if name is not None:
                u["name"] = name
            if email is not None:
                u["email"] = email
            await state.set_json(USERS_KEY, users)
            return _public(u)
    return None


async def delete_user(state: StateBackend, user_id: int) -> bool:
    users = await _get_users_raw(state)
    remaining = [u for u in users if u.get("id") != user_id]
    if len(remaining) == len(users):
        return False
    await state.set_json(USERS_KEY, remaining)

    sessions = await _get_sessions_raw(state)
    sessions = {t: s for t, s in sessions.items() if s.get("userId") != user_id}
    await state.set_json(SESSIONS_KEY, sessions)
    return True


async def logout(state: StateBackend, token: str) -> bool:
    sessions = await _get_sessions_raw(state)
    if sessions.pop(token, None) is None:
        return False
    await state.set_json(SESSIONS_KEY, sessions)
    return True
