import pytest
from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = 0
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.writes += 1
        self.data[key] = value

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return FakeRedis()


class BrokenRedis(FakeRedis):
    """Reads work, every write fails."""

    async def set(self, key, value, ex=None):
        raise RedisConnectionError("redis down")


@pytest.fixture
def broken_redis():
    return BrokenRedis()
