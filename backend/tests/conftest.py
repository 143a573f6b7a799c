"""
Test Configuration Module
"""

import time
from datetime import timedelta
from typing import Any, Optional

import pytest
import pytest_asyncio

from hyperlink.config import get_settings
from hyperlink.repositories.memory import MemoryMessageRepository
from hyperlink.repositories.redis import RedisMessageRepository


def _encode(value: Any) -> bytes:
    """Encode a value the way redis-py sends it over the wire"""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    return str(value).encode("utf-8")


class FakeRedis:
    """
    In-process stand-in for the subset of redis.asyncio.Redis used by the
    message repository: hash commands, millisecond expiry and MULTI/EXEC
    pipelines. Responses are bytes, as with decode_responses=False.
    """

    def __init__(self):
        self.hashes: dict[str, dict[bytes, bytes]] = {}
        self.expires: dict[str, float] = {}
        self.closed = False

    def _purge(self, key: str) -> None:
        deadline = self.expires.get(key)
        if deadline is not None and time.monotonic() >= deadline:
            self.hashes.pop(key, None)
            self.expires.pop(key, None)

    def _hgetall(self, key: str) -> dict[bytes, bytes]:
        self._purge(key)
        return dict(self.hashes.get(key, {}))

    def _hset(self, key: str, mapping: dict) -> int:
        self._purge(key)
        entry = self.hashes.setdefault(key, {})
        added = 0
        for field, value in mapping.items():
            field = _encode(field)
            if field not in entry:
                added += 1
            entry[field] = _encode(value)
        return added

    def _pexpire(self, key: str, ms: int) -> bool:
        self._purge(key)
        if key not in self.hashes:
            return False
        self.expires[key] = time.monotonic() + ms / 1000
        return True

    def _delete(self, *keys: str) -> int:
        count = 0
        for key in keys:
            self._purge(key)
            if self.hashes.pop(key, None) is not None:
                count += 1
            self.expires.pop(key, None)
        return count

    def pttl(self, key: str) -> int:
        self._purge(key)
        if key not in self.hashes:
            return -2
        deadline = self.expires.get(key)
        if deadline is None:
            return -1
        return int((deadline - time.monotonic()) * 1000)

    async def hgetall(self, key: str) -> dict[bytes, bytes]:
        return self._hgetall(key)

    async def hset(self, key: str, mapping: dict) -> int:
        return self._hset(key, mapping)

    async def pexpire(self, key: str, ms: int) -> bool:
        return self._pexpire(key, ms)

    async def delete(self, *keys: str) -> int:
        return self._delete(*keys)

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.closed = True

    def pipeline(self, transaction: bool = True) -> "FakePipeline":
        return FakePipeline(self)


class FakePipeline:
    """Queues commands and applies them together on execute()"""

    def __init__(self, redis: FakeRedis):
        self.redis = redis
        self.commands: list[tuple] = []

    async def __aenter__(self) -> "FakePipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.commands = []

    def hgetall(self, key: str) -> "FakePipeline":
        self.commands.append((self.redis._hgetall, (key,), {}))
        return self

    def hset(self, key: str, mapping: dict) -> "FakePipeline":
        self.commands.append((self.redis._hset, (key,), {"mapping": mapping}))
        return self

    def pexpire(self, key: str, ms: int) -> "FakePipeline":
        self.commands.append((self.redis._pexpire, (key, ms), {}))
        return self

    def delete(self, *keys: str) -> "FakePipeline":
        self.commands.append((self.redis._delete, keys, {}))
        return self

    async def execute(self) -> list:
        # No await between commands: the batch is atomic on the event loop
        results = [func(*args, **kwargs) for func, args, kwargs in self.commands]
        self.commands = []
        return results


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def memory_repo() -> MemoryMessageRepository:
    """In-memory repository with a one hour TTL"""
    return MemoryMessageRepository(ttl=timedelta(hours=1))


@pytest.fixture
def redis_repo(fake_redis) -> RedisMessageRepository:
    """Redis repository over the fake client with a one hour TTL"""
    return RedisMessageRepository(fake_redis, ttl=timedelta(hours=1))


@pytest.fixture(params=["memory", "redis"])
def make_repo(request, fake_redis):
    """Factory fixture building either backend with a custom TTL"""

    def _make(ttl: Optional[timedelta] = None):
        ttl = ttl or timedelta(hours=1)
        if request.param == "memory":
            return MemoryMessageRepository(ttl=ttl)
        return RedisMessageRepository(fake_redis, ttl=ttl)

    return _make


@pytest_asyncio.fixture
async def repo(make_repo):
    """Either backend, closed after the test"""
    instance = make_repo()
    yield instance
    await instance.close()


@pytest.fixture
def clear_settings_cache():
    """Reload settings from the environment before and after the test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
