"""Users: employee CRUD, email change, and direct-report lookup.

Invariants:
    - PUT /users/{id} is a partial profile update; email is rejected there
    - PUT /users/{id}/email is the only way to change an email
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from metrics_api.api.dependencies import get_user_service
from metrics_api.schemas.user import UserCreate, UserEmailUpdate, UserResponse, UserUpdate
from metrics_api.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    limit: int | None = Query(None, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: UserService = Depends(get_user_service),
):
    result = await service.list_users(limit=limit, offset=offset)
    return [UserResponse.from_domain(u) for u in result.unwrap()]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    profile = body.model_dump(exclude={"email", "name"})
    result = await service.create_user(body.email, body.name, **profile)
    return UserResponse.from_domain(result.unwrap())


@router.get("/by-email/{email}", response_model=UserResponse)
async def get_user_by_email(
    email: str, service: UserService = Depends(get_user_service),
):
    result = await service.get_user_by_email(email)
    return UserResponse.from_domain(result.unwrap())


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    result = await service.get_user_by_id(user_id)
    return UserResponse.from_domain(result.unwrap())


@router.get("/{user_id}/reports", response_model=list[UserResponse])
async def get_direct_reports(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    """Users whose manager_id is this user."""
    result = await service.get_users_by_manager(user_id)
    return [UserResponse.from_domain(u) for u in result.unwrap()]


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    result = await service.update_user(user_id, **body.model_dump(exclude_unset=True))
    return UserResponse.from_domain(result.unwrap())


@router.put("/{user_id}/email", response_model=UserResponse)
async def update_user_email(
    user_id: UUID,
    body: UserEmailUpdate,
    service: UserService = Depends(get_user_service),
):
    result = await service.update_user_email(user_id, body.email)
    return UserResponse.from_domain(result.unwrap())


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    result = await service.delete_user(user_id)
    result.unwrap()
    logger.info("User deleted", extra={"entity_id": str(user_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
