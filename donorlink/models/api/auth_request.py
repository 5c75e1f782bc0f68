# donorlink/models/api/auth_request.py
from pydantic import BaseModel, Field

from donorlink.models.domain.person_domain import BloodGroup
from donorlink.services.auth_service import Registration


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str | None = None


class RegisterRequest(BaseModel):
    """Self-service donor sign-up."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6)
    phone: str = ""
    city: str = ""
    country: str = ""
    blood_group: BloodGroup

    def to_domain(self) -> Registration:
        return Registration(**self.model_dump())


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)
