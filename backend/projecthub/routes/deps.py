"""
ProjectHub Backend — Shared Route Dependencies
================================================

What:  Helpers every resource router needs: path id parsing, pagination
       from the query string, list response assembly, the session user.
"""

from typing import List, Optional, Type

from fastapi import Depends, Query, Request, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.config import settings
from projecthub.database import get_db_session
from projecthub.exceptions import AuthenticationError, NotFoundError, ValidationError
from projecthub.hateoas import build_links
from projecthub.models.user import User
from projecthub.pagination import Pagination, resolve_pagination
from projecthub.repositories.base import Page, id_in_range
from projecthub.repositories.users import user_repository
from projecthub.schemas.common import PaginatedResponse

SESSION_USER_KEY = "user_id"


def parse_id(raw: str, resource: str) -> int:
    """
    Path ids arrive as strings so a non-numeric id answers 400 (not 422).

    Raises:
        ValidationError: `raw` is not an integer
        NotFoundError:   `raw` is beyond the id column's range, so no such row
    """
    try:
        entity_id = int(raw)
    except ValueError:
        raise ValidationError(message=f"Invalid {resource} ID", field="id")
    if not id_in_range(entity_id):
        raise NotFoundError(resource=resource, resource_id=raw)
    return entity_id


def get_pagination(
    limit: Optional[str] = Query(default=None, description="Page size (default 25)"),
    offset: Optional[str] = Query(default=None, description="Rows to skip (default 0)"),
) -> Pagination:
    """Raw strings in, always-valid pagination out; see projecthub.pagination."""
    return resolve_pagination(limit, offset, default_limit=settings.default_page_size)


def base_url(request: Request) -> str:
    url = request.url
    return f"{url.scheme}://{url.netloc}{url.path}"


def paginated_response(
    request: Request,
    response: Response,
    page: Page,
    pagination: Pagination,
    item_schema: Type[BaseModel],
) -> PaginatedResponse:
    """
    Assemble the `{total, limit, offset, data, links}` body of a list endpoint.

    Also sets X-Total-Count for clients that only read headers.
    """
    links = build_links(
        total=page.total,
        limit=pagination.limit,
        offset=pagination.offset,
        base_url=base_url(request),
        query_params=request.query_params,
    )
    data: List[BaseModel] = [item_schema.model_validate(item) for item in page.items]
    response.headers["X-Total-Count"] = str(page.total)
    return PaginatedResponse[item_schema](
        total=page.total,
        limit=pagination.limit,
        offset=pagination.offset,
        data=data,
        links=links,
    )


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """
    Resolve the logged-in user from the session cookie.

    The session only stores the user id; the row is looked up per request.

    Raises:
        AuthenticationError: no session, or its user no longer exists (→ 401)
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise AuthenticationError(message="Not logged in")

    user = await user_repository.find_by_id(db, int(user_id))
    if user is None:
        request.session.pop(SESSION_USER_KEY, None)
        raise AuthenticationError(message="Session user no longer exists")
    return user
