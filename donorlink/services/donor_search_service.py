"""
Donor search and dashboard statistics.

A donor is available when verified and not donated within the cooldown
window (months, see DONATION_COOLDOWN_MONTHS).
"""

from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from donorlink.config import settings
from donorlink.models.domain.person_domain import BloodGroup, Person, Role
from donorlink.services.record_store import RecordStore


def months_before(day: date, months: int) -> date:
    """Same calendar day `months` earlier, clamped to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


@dataclass
class RegistrationsOnDay:
    date: date
    registrations: int


@dataclass
class DonorStats:
    total_donors: int = 0
    total_admins: int = 0
    verified_donors: int = 0
    pending_donors: int = 0
    donors_with_donation: int = 0
    total_messages: int = 0
    blood_groups: dict[str, int] = field(
        default_factory=lambda: {group.value: 0 for group in BloodGroup}
    )
    registrations_by_day: list[RegistrationsOnDay] = field(default_factory=list)


def _created_on(record_id: str) -> date | None:
    if not record_id.isdigit():
        return None
    try:
        return datetime.fromtimestamp(int(record_id) // 1000, tz=timezone.utc).date()
    except (OverflowError, OSError, ValueError):
        return None


def registrations_by_day(people: list[Person]) -> list[RegistrationsOnDay]:
    """
    Accounts created per UTC day, oldest first.

    Creation time is read from the millisecond id; ids that are not a
    plausible timestamp are left out.
    """
    days = Counter(day for day in map(_created_on, (p.id for p in people)) if day is not None)
    return [RegistrationsOnDay(date=day, registrations=days[day]) for day in sorted(days)]


class DonorSearchService:
    def __init__(self, record_store: RecordStore, cooldown_months: int | None = None):
        self.record_store = record_store
        self.cooldown_months = (
            cooldown_months if cooldown_months is not None else settings.DONATION_COOLDOWN_MONTHS
        )

    async def search_donors(
        self,
        viewer_id: str | None = None,
        *,
        blood_group: BloodGroup | None = None,
        city: str | None = None,
        country: str | None = None,
        today: date | None = None,
    ) -> list[Person]:
        cutoff = months_before(today or date.today(), self.cooldown_months)
        city_term = (city or "").lower()
        country_term = (country or "").lower()

        results = []
        for donor in await self.record_store.list_people(Role.DONOR):
            if donor.id == viewer_id or not donor.is_verified:
                continue
            if donor.last_donation_date and donor.last_donation_date > cutoff:
                continue
            if blood_group and donor.blood_group != blood_group:
                continue
            if city_term and city_term not in donor.city.lower():
                continue
            if country_term and country_term not in donor.country.lower():
                continue
            results.append(donor)
        return results

    async def donor_stats(self) -> DonorStats:
        stats = DonorStats()
        people = await self.record_store.list_people()
        for person in people:
            if person.role == Role.ADMIN:
                stats.total_admins += 1
                continue

            stats.total_donors += 1
            stats.blood_groups[person.blood_group.value] += 1
            if person.is_verified:
                stats.verified_donors += 1
            else:
                stats.pending_donors += 1
            if person.last_donation_date:
                stats.donors_with_donation += 1

        stats.registrations_by_day = registrations_by_day(people)
        stats.total_messages = len(await self.record_store.list_messages())
        return stats
