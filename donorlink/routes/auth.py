"""
auth.py
-------
Purpose:
    Registration, login and password reset endpoints.

Usage:
    1. POST /auth/register - Create an unverified donor account
    2. POST /auth/login - Donor login (verified accounts only)
    3. POST /auth/admin/login - Admin login
    4. POST /auth/forgot-password - Reset to a random password and return it
"""

from fastapi import APIRouter, Depends, HTTPException, status

from donorlink.dependencies import get_auth_service
from donorlink.errors import (
    DuplicateEmailError,
    InvalidCredentialError,
    NotFoundError,
    PendingApprovalError,
)
from donorlink.infrastructure.observability.logging import get_logger
from donorlink.models.api.auth_request import ForgotPasswordRequest, LoginRequest, RegisterRequest
from donorlink.models.api.person_response import PasswordResetResponse, PersonResponse
from donorlink.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


@router.post("/register", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        person = await auth.register_donor(request.to_domain())
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return PersonResponse.from_domain(person)


@router.post("/login", response_model=PersonResponse)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """
    Raises:
        401: Unknown email or wrong password
        403: Account pending admin approval
    """
    try:
        person = await auth.login_donor(request.email, request.password)
    except PendingApprovalError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except InvalidCredentialError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    return PersonResponse.from_domain(person)


@router.post("/admin/login", response_model=PersonResponse)
async def admin_login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        person = await auth.login_admin(request.email, request.password)
    except InvalidCredentialError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    return PersonResponse.from_domain(person)


@router.post("/forgot-password", response_model=PasswordResetResponse)
async def forgot_password(
    request: ForgotPasswordRequest, auth: AuthService = Depends(get_auth_service)
):
    try:
        new_password = await auth.reset_password(request.email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return PasswordResetResponse(temporary_password=new_password)
