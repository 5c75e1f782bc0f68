from unittest.mock import AsyncMock

import pytest

from donorlink.errors import StorageError
from donorlink.models.domain.message_domain import MessageCreate
from donorlink.services.record_store import RecordStore
from donorlink.storage.change_bus import InMemoryChangeBus
from donorlink.storage.redis_store import RedisStore


def _store_with_client(client) -> RedisStore:
    store = RedisStore(url="redis://localhost:6379/15")
    store.client = client
    store._initialized = True
    return store


@pytest.mark.asyncio
async def test_get_and_set_pass_through():
    client = AsyncMock()
    client.get.return_value = "[]"
    client.set.return_value = True
    store = _store_with_client(client)

    assert await store.get("k") == "[]"
    await store.set("k", "[1]")

    client.set.assert_awaited_once_with("k", "[1]")


@pytest.mark.asyncio
async def test_missing_key_reads_as_none():
    client = AsyncMock()
    client.get.return_value = None
    assert await _store_with_client(client).get("k") is None


@pytest.mark.asyncio
async def test_failed_write_raises_storage_error():
    client = AsyncMock()
    client.set.side_effect = ConnectionError("connection reset")
    store = _store_with_client(client)

    with pytest.raises(StorageError) as exc:
        await store.set("k", "[]")
    assert exc.value.operation == "set"
    assert exc.value.key == "k"


@pytest.mark.asyncio
async def test_unacknowledged_write_raises_storage_error():
    client = AsyncMock()
    client.set.return_value = None

    with pytest.raises(StorageError):
        await _store_with_client(client).set("k", "[]")


@pytest.mark.asyncio
async def test_ping_failure_reports_false():
    client = AsyncMock()
    client.ping.side_effect = ConnectionError("down")
    assert await _store_with_client(client).ping() is False


@pytest.mark.asyncio
async def test_record_store_surfaces_storage_errors():
    client = AsyncMock()
    client.get.return_value = None
    client.set.side_effect = TimeoutError("slow")
    bus = InMemoryChangeBus()
    record_store = RecordStore(_store_with_client(client), bus, messages_key="m")

    with pytest.raises(StorageError):
        await record_store.send_message(MessageCreate(sender_id="a", recipient_id="b", body="x"))
    assert bus.published == []
