from datetime import date

import pytest

from donorlink.models.domain.message_domain import MessageCreate
from donorlink.models.domain.person_domain import BloodGroup, Role
from donorlink.services.donor_search_service import (
    DonorSearchService,
    RegistrationsOnDay,
    months_before,
    registrations_by_day,
)

TODAY = date(2024, 6, 15)


def test_months_before_clamps_to_month_end():
    assert months_before(date(2024, 6, 15), 4) == date(2024, 2, 15)
    assert months_before(date(2024, 6, 30), 4) == date(2024, 2, 29)
    assert months_before(date(2024, 2, 10), 4) == date(2023, 10, 10)


@pytest.mark.asyncio
async def test_search_excludes_viewer_unverified_admins_and_recent_donors(record_store, make_person):
    viewer = await make_person("Viewer")
    available = await make_person("Available", last_donation_date="2024-01-01")
    never_donated = await make_person("Never")
    await make_person("Recent", last_donation_date="2024-05-01")
    await make_person("Pending", is_verified=False)
    await make_person("Boss", role=Role.ADMIN)

    results = await DonorSearchService(record_store).search_donors(viewer.id, today=TODAY)

    assert {p.id for p in results} == {available.id, never_donated.id}


@pytest.mark.asyncio
async def test_search_filters(record_store, make_person):
    lisbon = await make_person("Lisbon A", blood_group=BloodGroup.A_POSITIVE)
    await make_person("Lisbon O", blood_group=BloodGroup.O_NEGATIVE)
    madrid = await make_person(
        "Madrid A", blood_group=BloodGroup.A_POSITIVE, city="Madrid", country="Spain"
    )
    search = DonorSearchService(record_store)

    by_group = await search.search_donors(blood_group=BloodGroup.A_POSITIVE, today=TODAY)
    assert {p.id for p in by_group} == {lisbon.id, madrid.id}

    by_city = await search.search_donors(
        blood_group=BloodGroup.A_POSITIVE, city="lis", today=TODAY
    )
    assert [p.id for p in by_city] == [lisbon.id]

    by_country = await search.search_donors(country="SPA", today=TODAY)
    assert [p.id for p in by_country] == [madrid.id]


@pytest.mark.asyncio
async def test_donor_stats(record_store, make_person):
    await make_person("A", blood_group=BloodGroup.A_POSITIVE, last_donation_date="2023-01-01")
    await make_person("B", blood_group=BloodGroup.A_POSITIVE, is_verified=False)
    await make_person("Boss", role=Role.ADMIN, blood_group=BloodGroup.O_NEGATIVE)
    await record_store.send_message(MessageCreate(sender_id="1", recipient_id="2", body="x"))

    stats = await DonorSearchService(record_store).donor_stats()

    assert stats.total_donors == 2
    assert stats.total_admins == 1
    assert stats.verified_donors == 1
    assert stats.pending_donors == 1
    assert stats.donors_with_donation == 1
    assert stats.total_messages == 1
    assert stats.blood_groups["A+"] == 2
    assert stats.blood_groups["O-"] == 0
    assert len(stats.blood_groups) == 8
    assert stats.registrations_by_day == [RegistrationsOnDay(date(2023, 11, 14), 3)]


@pytest.mark.asyncio
async def test_registrations_grouped_by_utc_day_of_id(record_store, make_person, clock):
    await make_person("First")
    await make_person("Second")
    clock.advance(2 * 86_400_000)
    await make_person("Later", role=Role.ADMIN)

    stats = await DonorSearchService(record_store).donor_stats()

    assert stats.registrations_by_day == [
        RegistrationsOnDay(date(2023, 11, 14), 2),
        RegistrationsOnDay(date(2023, 11, 16), 1),
    ]


@pytest.mark.asyncio
async def test_registrations_skip_ids_that_are_not_timestamps(make_person):
    person = await make_person("Legacy")
    legacy = person.model_copy(update={"id": "legacy-7"})
    huge = person.model_copy(update={"id": "9" * 40})

    assert registrations_by_day([legacy, huge, person]) == [
        RegistrationsOnDay(date(2023, 11, 14), 1)
    ]
