from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BloodGroup(str, Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


class Role(str, Enum):
    DONOR = "DONOR"
    ADMIN = "ADMIN"


# Fields an update may never touch
IMMUTABLE_PERSON_FIELDS = frozenset({"id", "email", "role"})
# Fields an update may explicitly clear
NULLABLE_PERSON_FIELDS = frozenset({"last_donation_date"})


class PersonFields(BaseModel):
    """Attributes shared by stored people and creation payloads.

    Aliases are the camelCase names used in the persisted JSON.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    role: Role = Role.DONOR
    phone: str = ""
    city: str = ""
    country: str = ""
    blood_group: BloodGroup = Field(alias="bloodGroup")
    last_donation_date: date | None = Field(default=None, alias="lastDonationDate")
    is_verified: bool = Field(default=False, alias="isVerified")
    contact_visible: bool = Field(default=True, alias="contactVisible")
    is_phone_verified: bool = Field(default=False, alias="isPhoneVerified")


class Person(PersonFields):
    """A donor or admin account as persisted. `password` holds the digest."""

    id: str
    password: str = ""


class PersonCreate(PersonFields):
    """Creation payload; `password` is plaintext and digested by the store."""

    password: str | None = None


class PersonUpdate(BaseModel):
    """Partial update payload. Unknown keys (email, role, id) are dropped."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    password: str | None = None
    phone: str | None = None
    city: str | None = None
    country: str | None = None
    blood_group: BloodGroup | None = Field(default=None, alias="bloodGroup")
    last_donation_date: date | None = Field(default=None, alias="lastDonationDate")
    is_verified: bool | None = Field(default=None, alias="isVerified")
    contact_visible: bool | None = Field(default=None, alias="contactVisible")
    is_phone_verified: bool | None = Field(default=None, alias="isPhoneVerified")
