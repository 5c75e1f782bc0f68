"""
Record store for people and chat messages.

Both collections are kept as JSON arrays under fixed keys in an injected
key-value store. Every mutation reads the whole collection, applies the
change and writes the whole collection back; there is no locking, so two
un-awaited writes from the same process may lose an update.

Message mutations publish the messages key on the change bus so other
processes can refresh unread counts and conversation lists.
"""

import json
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from donorlink.config import settings
from donorlink.errors import NotFoundError
from donorlink.infrastructure.observability.logging import get_logger
from donorlink.models.domain.message_domain import Message, MessageCreate
from donorlink.models.domain.person_domain import (
    IMMUTABLE_PERSON_FIELDS,
    NULLABLE_PERSON_FIELDS,
    Person,
    PersonCreate,
    PersonUpdate,
    Role,
)
from donorlink.security.hashing import digest_password
from donorlink.services.ids import MonotonicIdGenerator, id_sort_key, now_ms
from donorlink.storage.base import ChangeBus, KeyValueStore

logger = get_logger(__name__)


class RecordStore:
    def __init__(
        self,
        store: KeyValueStore,
        change_bus: ChangeBus,
        *,
        people_key: str | None = None,
        messages_key: str | None = None,
        id_generator: MonotonicIdGenerator | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.change_bus = change_bus
        self.people_key = people_key or settings.PEOPLE_KEY
        self.messages_key = messages_key or settings.MESSAGES_KEY
        self.id_generator = id_generator or MonotonicIdGenerator(clock)
        self._clock = clock

    # ------------------------------------------------------------------
    # Raw collection access
    # ------------------------------------------------------------------

    async def _read(self, key: str) -> list[dict[str, Any]]:
        raw = await self.store.get(key)
        if not raw:
            return []
        return json.loads(raw)

    async def write_collection(self, key: str, records: list[BaseModel]) -> None:
        payload = json.dumps([r.model_dump(mode="json", by_alias=True) for r in records])
        await self.store.set(key, payload)

    async def _read_people(self) -> list[Person]:
        return [Person.model_validate(r) for r in await self._read(self.people_key)]

    async def _read_messages(self) -> list[Message]:
        return [Message.model_validate(r) for r in await self._read(self.messages_key)]

    async def has_collection(self, key: str) -> bool:
        return await self.store.get(key) is not None

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    async def list_people(self, role: Role | None = None) -> list[Person]:
        """All people ordered by id, optionally only those with `role`."""
        people = await self._read_people()
        if role is not None:
            people = [p for p in people if p.role == role]
        return sorted(people, key=lambda p: id_sort_key(p.id))

    async def get_person_by_id(self, person_id: str) -> Person | None:
        for person in await self._read_people():
            if person.id == person_id:
                return person
        return None

    async def get_person_by_email(self, email: str) -> Person | None:
        wanted = email.lower()
        for person in await self.list_people():
            if person.email.lower() == wanted:
                return person
        return None

    async def create_person(self, data: PersonCreate) -> Person:
        """
        Append a new person.

        Email uniqueness is the caller's job (see DuplicateEmailError). A
        supplied password is digested; without one the digest is empty.
        """
        people = await self._read_people()
        fields = data.model_dump(exclude={"password"})
        person = Person(
            **fields,
            id=self.id_generator.next_id(p.id for p in people),
            password=digest_password(data.password) if data.password else "",
        )
        people.append(person)
        await self.write_collection(self.people_key, people)

        logger.info("Person created", person_id=person.id, role=person.role.value)
        return person

    async def update_person(
        self, person_id: str, changes: PersonUpdate | Mapping[str, Any]
    ) -> Person:
        """
        Merge `changes` into an existing person and persist.

        id, email and role are never changed. A non-empty password is
        re-digested; an omitted or empty one keeps the stored digest.

        Raises:
            NotFoundError: no person has `person_id`
        """
        if not isinstance(changes, PersonUpdate):
            changes = PersonUpdate.model_validate(
                {k: v for k, v in changes.items() if k not in IMMUTABLE_PERSON_FIELDS}
            )

        updates = {
            field: value
            for field, value in changes.model_dump(exclude_unset=True).items()
            if field not in IMMUTABLE_PERSON_FIELDS
            and (value is not None or field in NULLABLE_PERSON_FIELDS)
        }

        if updates.get("password"):
            updates["password"] = digest_password(updates["password"])
        else:
            updates.pop("password", None)

        people = await self._read_people()
        for index, person in enumerate(people):
            if person.id == person_id:
                break
        else:
            logger.warning("Update for unknown person", person_id=person_id)
            raise NotFoundError("User not found", record_id=person_id)

        updated = person.model_copy(update=updates)
        people[index] = updated
        await self.write_collection(self.people_key, people)

        logger.info("Person updated", person_id=person_id, fields=sorted(updates))
        return updated

    async def delete_person(self, person_id: str) -> None:
        people = await self._read_people()
        remaining = [p for p in people if p.id != person_id]
        if len(remaining) == len(people):
            return

        await self.write_collection(self.people_key, remaining)
        logger.info("Person deleted", person_id=person_id)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def list_messages(self) -> list[Message]:
        return await self._read_messages()

    async def messages_between(self, user_a: str, user_b: str) -> list[Message]:
        """Messages in either direction between two people, oldest first."""
        thread = [
            m
            for m in await self._read_messages()
            if (m.sender_id == user_a and m.recipient_id == user_b)
            or (m.sender_id == user_b and m.recipient_id == user_a)
        ]
        return sorted(thread, key=lambda m: m.timestamp)

    async def send_message(self, data: MessageCreate) -> Message:
        messages = await self._read_messages()
        message = Message(
            id=self.id_generator.next_id(m.id for m in messages),
            sender_id=data.sender_id,
            recipient_id=data.recipient_id,
            body=data.body,
            timestamp=data.timestamp if data.timestamp is not None else self._clock(),
            is_read=False,
        )
        messages.append(message)
        await self.write_collection(self.messages_key, messages)
        await self.change_bus.publish(self.messages_key)

        logger.info(
            "Message sent",
            message_id=message.id,
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
        )
        return message

    async def mark_read(self, from_id: str, to_id: str) -> int:
        """
        Mark every unread message from `from_id` to `to_id` as read.

        Returns the number of messages changed. Nothing is written or
        published when there was nothing to mark.
        """
        messages = await self._read_messages()
        changed = 0
        for index, message in enumerate(messages):
            if message.sender_id == from_id and message.recipient_id == to_id and not message.is_read:
                messages[index] = message.model_copy(update={"is_read": True})
                changed += 1

        if not changed:
            return 0

        await self.write_collection(self.messages_key, messages)
        await self.change_bus.publish(self.messages_key)

        logger.info("Messages marked read", from_id=from_id, to_id=to_id, count=changed)
        return changed

    async def unread_for(self, user_id: str) -> list[Message]:
        return [m for m in await self._read_messages() if m.recipient_id == user_id and not m.is_read]
