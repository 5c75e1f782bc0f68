"""
Change notification channels.

Writers publish the key of the collection they changed; subscribers
re-fetch whatever they derive from it. Delivery is best-effort: a failing
listener is logged and does not affect the writer or other listeners.
"""

import asyncio
from contextlib import suppress

from donorlink.config import settings
from donorlink.infrastructure.observability.logging import get_logger
from donorlink.storage.base import ChangeListener, Unsubscribe
from donorlink.storage.redis_store import RedisStore

logger = get_logger(__name__)


class _ListenerRegistry:
    def __init__(self):
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def _dispatch(self, key: str) -> None:
        for listener in list(self._listeners):
            try:
                await listener(key)
            except Exception as e:
                logger.error("Change listener failed", key=key, error=str(e))


class InMemoryChangeBus(_ListenerRegistry):
    """Delivers notifications to listeners in the same process."""

    def __init__(self):
        super().__init__()
        self.published: list[str] = []

    async def publish(self, key: str) -> None:
        self.published.append(key)
        logger.debug("Change published", key=key)
        await self._dispatch(key)


class RedisChangeBus(_ListenerRegistry):
    """
    Fans change notifications out across processes over Redis pub/sub.

    The publishing process receives its own notification back through the
    subscription, so local and remote listeners see the same stream.
    """

    def __init__(self, store: RedisStore, channel: str | None = None):
        super().__init__()
        self.store = store
        self.channel = channel or settings.CHANGE_CHANNEL
        self._pubsub = None
        self._task: asyncio.Task | None = None
        self.listening = False

    async def start(self) -> None:
        if self._task is not None:
            return

        await self.store.initialize()
        self._pubsub = self.store.client.pubsub(ignore_subscribe_messages=True)
        await self._pubsub.subscribe(self.channel)
        self.listening = True
        self._task = asyncio.create_task(self._listen())
        logger.info("Change bus listening", channel=self.channel)

    async def close(self) -> None:
        if self._task is not None:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            self._task = None

        if self._pubsub is not None:
            try:
                await self._pubsub.unsubscribe(self.channel)
                await self._pubsub.aclose()
            except Exception as e:
                logger.error("Error closing change bus subscription", error=str(e))
            self._pubsub = None
        logger.info("Change bus closed", channel=self.channel)

    async def publish(self, key: str) -> None:
        try:
            await self.store.initialize()
            receivers = await self.store.client.publish(self.channel, key)
            logger.debug("Change published", key=key, receivers=receivers)
        except Exception as e:
            # The write already persisted; other processes catch up on next read
            logger.error("Change publish failed", key=key, channel=self.channel, error=str(e))

    async def _listen(self) -> None:
        try:
            async for message in self._pubsub.listen():
                if message.get("type") != "message":
                    continue
                await self._dispatch(message["data"])
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                "Change bus listener stopped", channel=self.channel, error=f"{type(e).__name__}: {e}"
            )
        else:
            logger.warning("Change bus subscription ended", channel=self.channel)
        finally:
            self.listening = False
