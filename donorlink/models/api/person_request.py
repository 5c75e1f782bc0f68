# donorlink/models/api/person_request.py
from datetime import date

from pydantic import BaseModel, Field

from donorlink.models.domain.person_domain import BloodGroup, PersonCreate, PersonUpdate, Role


class PersonCreateRequest(BaseModel):
    """Admin request for adding a donor or admin account."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str | None = None
    role: Role = Role.DONOR
    phone: str = ""
    city: str = ""
    country: str = ""
    blood_group: BloodGroup
    last_donation_date: date | None = None
    is_verified: bool = False
    contact_visible: bool = True
    is_phone_verified: bool = False

    def to_domain(self) -> PersonCreate:
        return PersonCreate(**self.model_dump())


class PersonUpdateRequest(BaseModel):
    """Profile or admin edit. Email, role and password are not editable here."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = None
    city: str | None = None
    country: str | None = None
    blood_group: BloodGroup | None = None
    last_donation_date: date | None = None
    is_verified: bool | None = None
    contact_visible: bool | None = None
    is_phone_verified: bool | None = None

    def to_domain(self) -> PersonUpdate:
        return PersonUpdate(**self.model_dump(exclude_unset=True))


class ChangePasswordRequest(BaseModel):
    """Profile password change; the current password must be supplied."""

    current_password: str
    new_password: str
