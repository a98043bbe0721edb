"""User management endpoints for the sample-app API.

Provides CRUD operations over the in-memory user store. Every operation logs
a structured event carrying the request id, which is what the ELK demo
dashboards are built on.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Body, Depends

from sample_app.api.dependencies import get_user_store
from sample_app.api.models import (
    ErrorResponse,
    UserCreate,
    UserDeletedResponse,
    UserListResponse,
    UserResponse,
    UserSchema,
    UserUpdate,
)
from sample_app.core.exceptions import InvalidUserDataError, UserNotFoundError
from sample_app.monitoring.metrics import record_user_operation
from sample_app.store.users import UserStore

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "User not found"}}


def _parse_user_id(raw_id: str) -> int:
    """Path ids that are not integers can never match a user."""
    try:
        return int(raw_id)
    except ValueError:
        raise UserNotFoundError(raw_id) from None


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
)
async def list_users(
    store: UserStore = Depends(get_user_store),
) -> UserListResponse:
    """Return every stored user."""
    users = await store.list_users()

    logger.info("fetching_all_users", user_count=len(users))

    return UserListResponse(users=[UserSchema.model_validate(u) for u in users])


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    responses=NOT_FOUND_RESPONSE,
)
async def get_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    """Fetch a single user by id."""
    try:
        user = await store.get_user(_parse_user_id(user_id))
    except UserNotFoundError:
        logger.warning("user_not_found", user_id=user_id)
        raise

    logger.info("user_fetched", user_id=user.id)

    return UserResponse(user=UserSchema.model_validate(user))


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    summary="Create a user",
    responses={400: {"model": ErrorResponse, "description": "Name or email missing"}},
)
async def create_user(
    payload: Optional[UserCreate] = Body(None),
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    """
    Create a new user.

    **Parameters:**
    - **name**: Display name (required, non-empty)
    - **email**: Email address (required, non-empty)
    """
    if payload is None or not payload.name or not payload.email:
        data = payload.model_dump(exclude_none=True) if payload else {}
        logger.warning("invalid_user_data", data=data)
        raise InvalidUserDataError(data)

    user = await store.create_user(name=payload.name, email=payload.email)
    record_user_operation("create", await store.count())

    logger.info(
        "user_created",
        user_id=user.id,
        name=user.name,
        email=user.email,
    )

    return UserResponse(user=UserSchema.model_validate(user))


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
    responses=NOT_FOUND_RESPONSE,
)
async def update_user(
    user_id: str,
    payload: Optional[UserUpdate] = Body(None),
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    """Update name and/or email. Missing or empty fields are left unchanged."""
    changes = payload or UserUpdate()

    try:
        user = await store.update_user(
            _parse_user_id(user_id),
            name=changes.name,
            email=changes.email,
        )
    except UserNotFoundError:
        logger.warning("user_not_found_for_update", user_id=user_id)
        raise

    record_user_operation("update")

    logger.info(
        "user_updated",
        user_id=user.id,
        changes=changes.model_dump(exclude_none=True),
    )

    return UserResponse(user=UserSchema.model_validate(user))


@router.delete(
    "/{user_id}",
    response_model=UserDeletedResponse,
    summary="Delete a user",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> UserDeletedResponse:
    """Remove a user. Its id is never handed out again."""
    try:
        user = await store.delete_user(_parse_user_id(user_id))
    except UserNotFoundError:
        logger.warning("user_not_found_for_deletion", user_id=user_id)
        raise

    record_user_operation("delete", await store.count())

    logger.info(
        "user_deleted",
        user_id=user.id,
        deleted_user={"id": user.id, "name": user.name, "email": user.email},
    )

    return UserDeletedResponse(user=UserSchema.model_validate(user))
