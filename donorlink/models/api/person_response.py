# donorlink/models/api/person_response.py
from datetime import date

from pydantic import BaseModel

from donorlink.models.domain.person_domain import BloodGroup, Person, Role


class PersonResponse(BaseModel):
    """Account view. The password digest is never returned."""

    id: str
    name: str
    email: str
    role: Role
    phone: str | None
    city: str
    country: str
    blood_group: BloodGroup
    last_donation_date: date | None
    is_verified: bool
    contact_visible: bool
    is_phone_verified: bool

    @classmethod
    def from_domain(cls, person: Person) -> "PersonResponse":
        """Full view for the account owner and admins."""
        return cls(**person.model_dump(exclude={"password"}))

    @classmethod
    def public_view(cls, person: Person) -> "PersonResponse":
        """View shown to other donors; phone is withheld unless contact is visible."""
        response = cls.from_domain(person)
        if not person.contact_visible:
            response.phone = None
        return response


class RegistrationsOnDay(BaseModel):
    date: date
    registrations: int


class DonorStatsResponse(BaseModel):
    total_donors: int
    total_admins: int
    verified_donors: int
    pending_donors: int
    donors_with_donation: int
    total_messages: int
    blood_groups: dict[str, int]
    registrations_by_day: list[RegistrationsOnDay]


class PasswordResetResponse(BaseModel):
    """The new password is shown to the user in place of sending an email."""

    temporary_password: str
