"""
ProjectHub Backend — User Route Handlers
==========================================

What:  CRUD over /users.
How:   Parses ids and pagination, delegates to UserRepository, maps
       missing rows to 404.

Endpoints:
    GET    /users          paginated list with HATEOAS links
    GET    /users/{id}     single user
    POST   /users          upsert keyed on `sub` → 201 + Location
    PUT    /users/{id}     update email/name/picture, refresh lastLogin
    DELETE /users/{id}     204, or 404 when the user does not exist
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.database import get_db_session
from projecthub.exceptions import NotFoundError
from projecthub.models.user import utcnow
from projecthub.pagination import Pagination
from projecthub.repositories.users import user_repository
from projecthub.routes.deps import get_pagination, paginated_response, parse_id
from projecthub.schemas.common import ErrorResponse, PaginatedResponse
from projecthub.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=PaginatedResponse[UserResponse],
    responses={
        400: {"description": "Invalid sort or order", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List users with pagination",
)
async def list_users(
    request: Request,
    response: Response,
    pagination: Pagination = Depends(get_pagination),
    sort: Optional[str] = Query(default=None, description="UserID, name, email or lastLogin"),
    order: Optional[str] = Query(default=None, description="asc or desc"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[UserResponse]:
    page = await user_repository.find_all(db, pagination, sort=sort, order=order)
    return paginated_response(request, response, page, pagination, UserResponse)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid user ID", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a user by ID",
)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db_session)) -> UserResponse:
    user = await user_repository.find_by_id(db, parse_id(user_id, "user"))
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a user (or refresh the one with the same sub)",
)
async def create_user(
    body: UserCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_repository.create_or_update(
        db, sub=body.sub, email=body.email, name=body.name, picture=body.picture
    )
    response.headers["Location"] = str(request.url_for("get_user", user_id=str(user.id)))
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Update a user by ID",
)
async def update_user(
    user_id: str,
    body: UserUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_repository.find_by_id(db, parse_id(user_id, "user"))
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)

    changes = {
        name: value
        for name, value in body.model_dump().items()
        if value is not None
    }
    changes["last_login"] = utcnow()

    await user_repository.update(db, user, changes)
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=204,
    responses={
        400: {"description": "Invalid user ID", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Delete a user by ID",
)
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await user_repository.delete_by_id(db, parse_id(user_id, "user")):
        raise NotFoundError(resource="user", resource_id=user_id)
    return Response(status_code=204)
