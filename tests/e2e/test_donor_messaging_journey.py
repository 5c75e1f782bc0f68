import pytest

from donorlink.errors import PendingApprovalError
from donorlink.models.domain.message_domain import MessageCreate
from donorlink.models.domain.person_domain import BloodGroup, PersonCreate, Role
from donorlink.security.hashing import digest_password
from donorlink.services.auth_service import AuthService
from donorlink.services.conversation_service import ConversationService


@pytest.mark.asyncio
async def test_login_blocked_until_verified(record_store):
    auth = AuthService(record_store)
    p1 = await record_store.create_person(
        PersonCreate(
            name="P1",
            email="p1@example.com",
            password="p1-password",
            role=Role.DONOR,
            blood_group=BloodGroup.A_NEGATIVE,
            is_verified=False,
        )
    )

    with pytest.raises(PendingApprovalError):
        await auth.login_donor("p1@example.com", "p1-password")

    await record_store.update_person(p1.id, {"is_verified": True})
    logged_in = await auth.login_donor("p1@example.com", "p1-password")

    assert logged_in.id == p1.id
    assert logged_in.password == digest_password("p1-password")


@pytest.mark.asyncio
async def test_message_read_receipt_journey(record_store, make_person, change_bus):
    p1 = await make_person("P1")
    p2 = await make_person("P2")
    refreshed = []

    async def on_change(key):
        refreshed.append(await ConversationService(record_store).unread_total(p2.id))

    change_bus.subscribe(on_change)

    hello = await record_store.send_message(
        MessageCreate(sender_id=p1.id, recipient_id=p2.id, body="hello")
    )
    assert await record_store.unread_for(p2.id) == [hello]

    await record_store.mark_read(p1.id, p2.id)

    assert await record_store.unread_for(p2.id) == []
    [stored] = await record_store.messages_between(p1.id, p2.id)
    assert stored.id == hello.id
    assert stored.is_read is True
    assert refreshed == [1, 0]
