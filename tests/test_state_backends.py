"""Tests for the Redis wrapper and the backend factory."""

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError

from playdeck.core.config import Settings
from playdeck.state.backend import create_state
from playdeck.state.memory_state import MemoryState
from playdeck.state.redis_state import RedisState


@pytest.fixture
def redis():
    return AsyncMock()


class TestRedisState:

    @pytest.mark.asyncio
    async def test_get_json_decodes(self, redis):
        redis.get.return_value = json.dumps([{"id": 1}]).encode()
        assert await RedisState(redis).get_json("k") == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_get_json_missing(self, redis):
        redis.get.return_value = None
        assert await RedisState(redis).get_json("k") is None

    @pytest.mark.asyncio
    async def test_get_json_bad_payload(self, redis):
        redis.get.return_value = b"{not json"
        assert await RedisState(redis).get_json("k") is None

    @pytest.mark.asyncio
    async def test_get_json_connection_error_degrades(self, redis):
        redis.get.side_effect = ConnectionError("down")
        assert await RedisState(redis).get_json("k") is None

    @pytest.mark.asyncio
    async def test_set_json_encodes(self, redis):
        await RedisState(redis).set_json("k", {"a": 1})
        redis.set.assert_awaited_once_with("k", json.dumps({"a": 1}))

    @pytest.mark.asyncio
    async def test_next_id_uses_incr(self, redis):
        redis.incr.return_value = 7
        assert await RedisState(redis).next_id("seq") == 7
        redis.incr.assert_awaited_once_with("seq")

    @pytest.mark.asyncio
    async def test_publish_event(self, redis):
        await RedisState(redis).publish_event("ch", {"type": "status", "data": {}})
        redis.publish.assert_awaited_once_with("ch", json.dumps({"type": "status", "data": {}}))


class TestMemoryState:

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        state = MemoryState()
        value = {"tracks": [1]}
        await state.set_json("k", value)
        value["tracks"].append(2)

        stored = await state.get_json("k")
        stored["tracks"].append(3)

        assert await state.get_json("k") == {"tracks": [1]}

    @pytest.mark.asyncio
    async def test_counters(self):
        state = MemoryState()
        assert await state.next_id("seq") == 1
        assert await state.next_id("seq") == 2
        await state.set_counter("seq", 10)
        assert await state.next_id("seq") == 11


class TestFactory:

    @pytest.mark.asyncio
    async def test_memory_backend(self):
        state = await create_state(Settings(state_backend="memory"))
        assert isinstance(state, MemoryState)
