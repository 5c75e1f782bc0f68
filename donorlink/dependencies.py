"""
Service wiring.

Builds the storage backend selected by STORAGE_BACKEND once per process and
hands services to routers through FastAPI dependencies, so tests can swap
them with `app.dependency_overrides`.
"""

from fastapi import Depends

from donorlink.config import settings
from donorlink.infrastructure.observability.logging import get_logger
from donorlink.services.auth_service import AuthService
from donorlink.services.conversation_service import ConversationService
from donorlink.services.donor_search_service import DonorSearchService
from donorlink.services.record_store import RecordStore
from donorlink.storage.change_bus import InMemoryChangeBus, RedisChangeBus
from donorlink.storage.memory import InMemoryStore
from donorlink.storage.redis_store import RedisStore

logger = get_logger(__name__)

_record_store: RecordStore | None = None


def build_record_store(backend: str | None = None) -> RecordStore:
    backend = backend or settings.STORAGE_BACKEND
    if backend == "redis":
        store = RedisStore()
        change_bus = RedisChangeBus(store)
    else:
        store = InMemoryStore()
        change_bus = InMemoryChangeBus()

    logger.info("Storage backend selected", backend=backend)
    return RecordStore(store, change_bus)


def get_record_store() -> RecordStore:
    global _record_store
    if _record_store is None:
        _record_store = build_record_store()
    return _record_store


def reset_record_store() -> None:
    global _record_store
    _record_store = None


def get_conversation_service(
    record_store: RecordStore = Depends(get_record_store),
) -> ConversationService:
    return ConversationService(record_store)


def get_auth_service(record_store: RecordStore = Depends(get_record_store)) -> AuthService:
    return AuthService(record_store)


def get_donor_search_service(
    record_store: RecordStore = Depends(get_record_store),
) -> DonorSearchService:
    return DonorSearchService(record_store)
