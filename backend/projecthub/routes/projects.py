"""
ProjectHub Backend — Project Route Handlers
=============================================

What:  CRUD over /projects.

List query parameters:
    limit, offset                 pagination (see projecthub.pagination)
    sort                          ProjectID (default), ProjectName, CreationDate
    order                         asc (default) or desc
    ProjectName, OwningUserID     filters; also applied to `total`

    An unknown sort field or order answers 400 before any query runs.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.database import get_db_session
from projecthub.exceptions import NotFoundError
from projecthub.models.user import utcnow
from projecthub.pagination import Pagination
from projecthub.repositories.projects import project_repository
from projecthub.routes.deps import get_pagination, paginated_response, parse_id
from projecthub.schemas.common import ErrorResponse, PaginatedResponse
from projecthub.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectResponse],
    responses={
        400: {"description": "Invalid sort, order or filter", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List projects with filtering, sorting and pagination",
)
async def list_projects(
    request: Request,
    response: Response,
    pagination: Pagination = Depends(get_pagination),
    project_name: Optional[str] = Query(default=None, alias="ProjectName"),
    owning_user_id: Optional[str] = Query(default=None, alias="OwningUserID"),
    sort: Optional[str] = Query(default=None),
    order: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[ProjectResponse]:
    page = await project_repository.find_all(
        db,
        pagination,
        filters={"ProjectName": project_name, "OwningUserID": owning_user_id},
        sort=sort,
        order=order,
    )
    return paginated_response(request, response, page, pagination, ProjectResponse)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={
        400: {"description": "Invalid project ID", "model": ErrorResponse},
        404: {"description": "Project not found", "model": ErrorResponse},
    },
    summary="Get a project by ID",
)
async def get_project(project_id: str, db: AsyncSession = Depends(get_db_session)) -> ProjectResponse:
    project = await project_repository.find_by_id(db, parse_id(project_id, "project"))
    if project is None:
        raise NotFoundError(resource="project", resource_id=project_id)
    return ProjectResponse.model_validate(project)


@router.post(
    "",
    status_code=201,
    response_model=ProjectResponse,
    responses={400: {"description": "Missing required fields", "model": ErrorResponse}},
    summary="Create a project",
)
async def create_project(
    body: ProjectCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    project = await project_repository.create(
        db,
        owning_user_id=body.OwningUserID,
        name=body.ProjectName,
        creation_date=utcnow(),
    )
    response.headers["Location"] = str(request.url_for("get_project", project_id=str(project.id)))
    return ProjectResponse.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "Project not found", "model": ErrorResponse},
    },
    summary="Update a project",
)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectResponse:
    project = await project_repository.find_by_id(db, parse_id(project_id, "project"))
    if project is None:
        raise NotFoundError(resource="project", resource_id=project_id)

    changes = {}
    if body.OwningUserID is not None:
        changes["owning_user_id"] = body.OwningUserID
    if body.ProjectName is not None:
        changes["name"] = body.ProjectName

    await project_repository.update(db, project, changes)
    return ProjectResponse.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=204,
    responses={404: {"description": "Project not found", "model": ErrorResponse}},
    summary="Delete a project",
)
async def delete_project(project_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await project_repository.delete_by_id(db, parse_id(project_id, "project")):
        raise NotFoundError(resource="project", resource_id=project_id)
    return Response(status_code=204)
