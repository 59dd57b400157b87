import pytest

from src.data.redis import CacheKeys, ProcessedCallbackGuard
from src.data.redis.callback_guard import PENDING_MARKER


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.expiry = {}

    async def set(self, key, value, nx=False, ex=None):
        if nx and key in self.store:
            return None
        self.store[key] = value
        self.expiry[key] = ex
        return True

    async def get(self, key):
        return self.store.get(key)

    async def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0

    async def ping(self):
        return True


class FakeConnection:
    def __init__(self, client=None, error=None):
        self.client = client or FakeRedis()
        self.error = error

    async def get_client(self):
        if self.error is not None:
            raise self.error
        return self.client

    async def health_check(self):
        return self.error is None


KEY = CacheKeys.processed_callback("momo", "9912")


@pytest.mark.asyncio
async def test_claim_is_exclusive_and_expires():
    connection = FakeConnection()
    guard = ProcessedCallbackGuard(connection, ttl=60)

    assert await guard.claim(KEY) is True
    assert await guard.claim(KEY) is False
    assert connection.client.store[KEY] == PENDING_MARKER
    assert connection.client.expiry[KEY] == 60


@pytest.mark.asyncio
async def test_pending_claim_recalls_nothing():
    guard = ProcessedCallbackGuard(FakeConnection(), ttl=60)
    await guard.claim(KEY)

    assert await guard.recall(KEY) is None


@pytest.mark.asyncio
async def test_remembered_outcome_is_recalled():
    guard = ProcessedCallbackGuard(FakeConnection(), ttl=60)
    await guard.claim(KEY)
    await guard.remember(KEY, {"status": "CONFIRMED", "message": "Order confirmed"})

    assert await guard.recall(KEY) == {"status": "CONFIRMED", "message": "Order confirmed"}


@pytest.mark.asyncio
async def test_corrupt_entry_recalls_nothing():
    connection = FakeConnection()
    connection.client.store[KEY] = "{not json"
    guard = ProcessedCallbackGuard(connection, ttl=60)

    assert await guard.recall(KEY) is None


@pytest.mark.asyncio
async def test_release_allows_new_claim():
    guard = ProcessedCallbackGuard(FakeConnection(), ttl=60)
    await guard.claim(KEY)

    assert await guard.release(KEY) is True
    assert await guard.claim(KEY) is True


@pytest.mark.asyncio
async def test_redis_outage_fails_open():
    guard = ProcessedCallbackGuard(FakeConnection(error=ConnectionError("redis down")), ttl=60)

    assert await guard.claim(KEY) is True
    assert await guard.recall(KEY) is None
    assert await guard.remember(KEY, {}) is False
    assert await guard.release(KEY) is False
    assert await guard.health_check() is False
