"""
Help Center Backend — User Routes
===================================

    POST /api/users        register {name, email}        → 201 {message, userId}
    GET  /api/users/{id}   profile                       → 200 {user_id, name, email, phone}
    PUT  /api/users/{id}   update {name, email, phone?}  → 200 {message}

Errors (400/404/409/500) are raised by UserService and rendered by the
global handlers in main.py. An id that is not a positive 32-bit integer is a
400 from path validation.
"""

import logging

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from helpcenter.database import get_db_session
from helpcenter.messages import msg
from helpcenter.schemas.common import ErrorResponse, MessageResponse
from helpcenter.schemas.user import (
    UserCreatedResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from helpcenter.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])

# Users.user_id is a 32-bit INTEGER column; larger ids cannot exist and are
# rejected as a 400 before reaching the driver.
MAX_USER_ID = 2**31 - 1


@router.post(
    "/users",
    status_code=201,
    response_model=UserCreatedResponse,
    responses={
        400: {"description": "Missing name or email", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a user",
)
async def create_user(
    body: UserCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserCreatedResponse:
    user_id = await user_service.create_user(db, name=body.name, email=body.email)
    return UserCreatedResponse(message=msg("user_created"), user_id=user_id)


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a user profile",
)
async def get_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID, description="Store-assigned user id"),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.get_user(db, user_id)
    return UserResponse.model_validate(user)


@router.put(
    "/users/{user_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing name or email", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a user profile",
)
async def update_user(
    body: UserUpdateRequest,
    user_id: int = Path(..., ge=1, le=MAX_USER_ID, description="Store-assigned user id"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.update_user(
        db,
        user_id=user_id,
        name=body.name,
        email=body.email,
        phone=body.phone,
    )
    return MessageResponse(message=msg("user_updated"))
