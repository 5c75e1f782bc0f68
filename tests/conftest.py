import pytest
from fastapi import FastAPI

from donorlink.dependencies import get_record_store
from donorlink.models.domain.person_domain import BloodGroup, PersonCreate, Role
from donorlink.routes import auth, donors, health, messages, people
from donorlink.services.record_store import RecordStore
from donorlink.storage.change_bus import InMemoryChangeBus
from donorlink.storage.memory import InMemoryStore


class FakeClock:
    """Millisecond clock that only moves when a test tells it to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def change_bus():
    return InMemoryChangeBus()


@pytest.fixture
def record_store(memory_store, change_bus, clock):
    return RecordStore(
        memory_store,
        change_bus,
        people_key="test:people",
        messages_key="test:messages",
        clock=clock,
    )


@pytest.fixture
def make_person(record_store):
    async def _make(name: str = "Donor", email: str | None = None, **overrides):
        data = {
            "name": name,
            "email": email or f"{name.lower().replace(' ', '.')}@example.com",
            "role": Role.DONOR,
            "blood_group": BloodGroup.O_POSITIVE,
            "city": "Lisbon",
            "country": "Portugal",
            "is_verified": True,
        }
        data.update(overrides)
        return await record_store.create_person(PersonCreate(**data))

    return _make


@pytest.fixture
def api_app(record_store):
    app = FastAPI()
    for module in (health, auth, people, donors, messages):
        app.include_router(module.router)
    app.dependency_overrides[get_record_store] = lambda: record_store
    return app
