"""
Storage interfaces.

The record store persists each collection as one JSON text value under a
fixed key, and announces changes through a change bus. Both collaborators
are injected so tests can run against in-memory implementations.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

ChangeListener = Callable[[str], Awaitable[None]]
Unsubscribe = Callable[[], None]


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> bool: ...

    async def ping(self) -> bool: ...


class ChangeBus(Protocol):
    async def publish(self, key: str) -> None: ...

    def subscribe(self, listener: ChangeListener) -> Unsubscribe: ...
