from donorlink.storage.base import ChangeBus, ChangeListener, KeyValueStore
from donorlink.storage.change_bus import InMemoryChangeBus, RedisChangeBus
from donorlink.storage.memory import InMemoryStore
from donorlink.storage.redis_store import RedisStore

__all__ = [
    "ChangeBus",
    "ChangeListener",
    "KeyValueStore",
    "InMemoryChangeBus",
    "RedisChangeBus",
    "InMemoryStore",
    "RedisStore",
]
