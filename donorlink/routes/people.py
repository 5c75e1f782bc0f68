"""
people.py
---------
Purpose:
    Account listing and management for the admin console and profile page.

Architecture:
    - Service layer returns domain models (Person)
    - API layer converts them to PersonResponse, which omits the password digest
    - Password changes go through their own endpoint, never through PATCH
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from donorlink.dependencies import get_auth_service, get_record_store
from donorlink.errors import (
    DuplicateEmailError,
    InvalidCredentialError,
    NotFoundError,
    PasswordPolicyError,
)
from donorlink.infrastructure.observability.logging import get_logger
from donorlink.models.api.person_request import (
    ChangePasswordRequest,
    PersonCreateRequest,
    PersonUpdateRequest,
)
from donorlink.models.api.person_response import PersonResponse
from donorlink.models.domain.person_domain import PersonUpdate, Role
from donorlink.services.auth_service import AuthService
from donorlink.services.record_store import RecordStore

router = APIRouter(prefix="/people", tags=["people"])
logger = get_logger(__name__)


@router.get("", response_model=list[PersonResponse])
async def list_people(
    role: Role | None = None, record_store: RecordStore = Depends(get_record_store)
):
    people = await record_store.list_people(role)
    return [PersonResponse.from_domain(p) for p in people]


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(person_id: str, record_store: RecordStore = Depends(get_record_store)):
    person = await record_store.get_person_by_id(person_id)
    if person is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return PersonResponse.from_domain(person)


@router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def create_person(
    request: PersonCreateRequest, auth: AuthService = Depends(get_auth_service)
):
    try:
        person = await auth.create_account(request.to_domain())
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return PersonResponse.from_domain(person)


@router.patch("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: str,
    request: PersonUpdateRequest,
    record_store: RecordStore = Depends(get_record_store),
):
    try:
        person = await record_store.update_person(person_id, request.to_domain())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return PersonResponse.from_domain(person)


@router.post("/{person_id}/password", response_model=PersonResponse)
async def change_password(
    person_id: str,
    request: ChangePasswordRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """
    Raises:
        404: Unknown person
        401: Current password does not match
        422: New password too short
    """
    try:
        person = await auth.change_password(
            person_id, request.current_password, request.new_password
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except InvalidCredentialError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    except PasswordPolicyError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return PersonResponse.from_domain(person)


@router.post("/{person_id}/approve", response_model=PersonResponse)
async def approve_person(person_id: str, record_store: RecordStore = Depends(get_record_store)):
    try:
        person = await record_store.update_person(person_id, PersonUpdate(is_verified=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    logger.info("Person approved", person_id=person_id)
    return PersonResponse.from_domain(person)


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(person_id: str, record_store: RecordStore = Depends(get_record_store)):
    await record_store.delete_person(person_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
