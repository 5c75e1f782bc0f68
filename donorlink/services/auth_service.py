"""
auth_service.py
---------------
Purpose:
    Account registration and login on top of the record store.

Notes:
    - Donor and admin logins only look at accounts of their own role.
    - Newly registered donors stay unverified until an admin approves them.
    - Password digests are equality checks only; nothing here is hardened.
"""

from pydantic import BaseModel, ConfigDict, Field

from donorlink.config import settings
from donorlink.errors import (
    DuplicateEmailError,
    InvalidCredentialError,
    NotFoundError,
    PasswordPolicyError,
    PendingApprovalError,
)
from donorlink.infrastructure.observability.logging import get_logger
from donorlink.models.domain.person_domain import BloodGroup, Person, PersonCreate, Role
from donorlink.security.hashing import generate_temporary_password, verify_password
from donorlink.services.record_store import RecordStore

logger = get_logger(__name__)


class Registration(BaseModel):
    """Self-service donor sign-up data (after phone OTP check)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    password: str | None = None
    phone: str = ""
    city: str = ""
    country: str = ""
    blood_group: BloodGroup = Field(alias="bloodGroup")


class AuthService:
    def __init__(self, record_store: RecordStore):
        self.record_store = record_store

    async def create_account(self, data: PersonCreate) -> Person:
        """Admin-created account of either role. Emails are unique per store."""
        if await self.record_store.get_person_by_email(data.email):
            logger.warning("Account with existing email", email=data.email, role=data.role.value)
            raise DuplicateEmailError(data.email)

        person = await self.record_store.create_person(data)
        logger.info("Account created", person_id=person.id, role=person.role.value)
        return person

    async def register_donor(self, data: Registration) -> Person:
        person = await self.create_account(
            PersonCreate(
                **data.model_dump(),
                role=Role.DONOR,
                is_verified=False,
                contact_visible=True,
                is_phone_verified=True,
            )
        )
        logger.info("Donor registered", person_id=person.id)
        return person

    async def login_donor(self, email: str, password: str | None) -> Person:
        """
        Authenticate a donor.

        Raises:
            InvalidCredentialError: unknown email or wrong password
            PendingApprovalError: the account has not been verified yet
        """
        person = await self._find(email, Role.DONOR)
        if person is None:
            raise InvalidCredentialError("User not found. Please check your email or register.")
        if not verify_password(password, person.password):
            logger.warning("Donor login with wrong password", person_id=person.id)
            raise InvalidCredentialError("Invalid password.")
        if not person.is_verified:
            logger.info("Login blocked pending approval", person_id=person.id)
            raise PendingApprovalError()

        logger.info("Donor logged in", person_id=person.id)
        return person

    async def login_admin(self, email: str, password: str | None) -> Person:
        person = await self._find(email, Role.ADMIN)
        if person is None:
            raise InvalidCredentialError("Admin account not found.")
        if not verify_password(password, person.password):
            logger.warning("Admin login with wrong password", person_id=person.id)
            raise InvalidCredentialError("Invalid password.")

        logger.info("Admin logged in", person_id=person.id)
        return person

    async def reset_password(self, email: str) -> str:
        """Replace the password with a random one and return the plaintext."""
        person = await self.record_store.get_person_by_email(email)
        if person is None:
            raise NotFoundError("No account found with that email address.")

        new_password = generate_temporary_password(settings.TEMPORARY_PASSWORD_LENGTH)
        await self.record_store.update_person(person.id, {"password": new_password})

        logger.info("Password reset", person_id=person.id)
        return new_password

    async def change_password(
        self, person_id: str, current_password: str, new_password: str
    ) -> Person:
        """
        Profile password change.

        Raises:
            NotFoundError: no account with that id
            InvalidCredentialError: current password does not match
            PasswordPolicyError: new password is too short
        """
        person = await self.record_store.get_person_by_id(person_id)
        if person is None:
            raise NotFoundError("User not found", record_id=person_id)
        if not verify_password(current_password, person.password):
            logger.warning("Password change with wrong current password", person_id=person_id)
            raise InvalidCredentialError("Current password is incorrect.")
        if len(new_password) < settings.PASSWORD_MIN_LENGTH:
            raise PasswordPolicyError(settings.PASSWORD_MIN_LENGTH)

        updated = await self.record_store.update_person(person_id, {"password": new_password})
        logger.info("Password changed", person_id=person_id)
        return updated

    async def _find(self, email: str, role: Role) -> Person | None:
        wanted = email.lower()
        for person in await self.record_store.list_people(role):
            if person.email.lower() == wanted:
                return person
        return None
