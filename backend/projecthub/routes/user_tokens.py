"""
ProjectHub Backend — Active Token Route Handlers
==================================================

What:  CRUD over /user_tokens.

A PUT restarts the token's lifetime: CreationDate is reset to now.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.database import get_db_session
from projecthub.exceptions import NotFoundError
from projecthub.models.user import utcnow
from projecthub.pagination import Pagination
from projecthub.repositories.users import token_repository
from projecthub.routes.deps import get_pagination, paginated_response, parse_id
from projecthub.schemas.common import ErrorResponse, PaginatedResponse
from projecthub.schemas.user import TokenCreate, TokenResponse, TokenUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user_tokens", tags=["User Tokens"])


@router.get(
    "",
    response_model=PaginatedResponse[TokenResponse],
    responses={400: {"description": "Invalid sort, order or filter", "model": ErrorResponse}},
    summary="List tokens with pagination",
)
async def list_tokens(
    request: Request,
    response: Response,
    pagination: Pagination = Depends(get_pagination),
    user_id: Optional[str] = Query(default=None, alias="UserID"),
    sort: Optional[str] = Query(default=None, description="TokenID or CreationDate"),
    order: Optional[str] = Query(default=None, description="asc or desc"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[TokenResponse]:
    page = await token_repository.find_all(
        db, pagination, filters={"UserID": user_id}, sort=sort, order=order
    )
    return paginated_response(request, response, page, pagination, TokenResponse)


@router.get(
    "/{token_id}",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid token ID", "model": ErrorResponse},
        404: {"description": "Token not found", "model": ErrorResponse},
    },
    summary="Get a token by ID",
)
async def get_token(token_id: str, db: AsyncSession = Depends(get_db_session)) -> TokenResponse:
    token = await token_repository.find_by_id(db, parse_id(token_id, "token"))
    if token is None:
        raise NotFoundError(resource="token", resource_id=token_id)
    return TokenResponse.model_validate(token)


@router.post(
    "",
    status_code=201,
    response_model=TokenResponse,
    responses={400: {"description": "Missing required field: UserID", "model": ErrorResponse}},
    summary="Issue a token for a user",
)
async def create_token(
    body: TokenCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    token = await token_repository.issue(db, user_id=body.UserID, ttl_seconds=body.TTL)
    response.headers["Location"] = str(request.url_for("get_token", token_id=str(token.id)))
    return TokenResponse.model_validate(token)


@router.put(
    "/{token_id}",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "Token not found", "model": ErrorResponse},
    },
    summary="Update a token and restart its lifetime",
)
async def update_token(
    token_id: str,
    body: TokenUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    token = await token_repository.find_by_id(db, parse_id(token_id, "token"))
    if token is None:
        raise NotFoundError(resource="token", resource_id=token_id)

    changes: Dict[str, Any] = {"creation_date": utcnow()}
    if body.UserID is not None:
        changes["user_id"] = body.UserID
    if body.TTL is not None:
        changes["ttl_seconds"] = body.TTL

    await token_repository.update(db, token, changes)
    return TokenResponse.model_validate(token)


@router.delete(
    "/{token_id}",
    status_code=204,
    responses={404: {"description": "Token not found", "model": ErrorResponse}},
    summary="Revoke a token",
)
async def delete_token(token_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await token_repository.delete_by_id(db, parse_id(token_id, "token")):
        raise NotFoundError(resource="token", resource_id=token_id)
    return Response(status_code=204)
