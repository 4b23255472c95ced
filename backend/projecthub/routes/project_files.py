"""
ProjectHub Backend — Project File Route Handlers
==================================================

What:  CRUD over /project_files, the file/directory nodes of a project.

List query parameters:
    sort        FileID (default), FileName, CreationDate
    order       asc (default) or desc
    filters     ProjectID, ParentDirectory, FileName (substring), IsDirectory
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.database import get_db_session
from projecthub.exceptions import NotFoundError
from projecthub.models.user import utcnow
from projecthub.pagination import Pagination
from projecthub.repositories.projects import project_file_repository
from projecthub.routes.deps import get_pagination, paginated_response, parse_id
from projecthub.schemas.common import ErrorResponse, PaginatedResponse
from projecthub.schemas.project import (
    ProjectFileCreate,
    ProjectFileResponse,
    ProjectFileUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/project_files", tags=["Project Files"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectFileResponse],
    responses={400: {"description": "Invalid sort, order or filter", "model": ErrorResponse}},
    summary="List project files with filtering, sorting and pagination",
)
async def list_project_files(
    request: Request,
    response: Response,
    pagination: Pagination = Depends(get_pagination),
    project_id: Optional[str] = Query(default=None, alias="ProjectID"),
    parent_directory: Optional[str] = Query(default=None, alias="ParentDirectory"),
    file_name: Optional[str] = Query(default=None, alias="FileName"),
    is_directory: Optional[str] = Query(default=None, alias="IsDirectory"),
    sort: Optional[str] = Query(default=None),
    order: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[ProjectFileResponse]:
    page = await project_file_repository.find_all(
        db,
        pagination,
        filters={
            "ProjectID": project_id,
            "ParentDirectory": parent_directory,
            "FileName": file_name,
            "IsDirectory": is_directory,
        },
        sort=sort,
        order=order,
    )
    return paginated_response(request, response, page, pagination, ProjectFileResponse)


@router.get(
    "/{file_id}",
    response_model=ProjectFileResponse,
    responses={
        400: {"description": "Invalid file ID", "model": ErrorResponse},
        404: {"description": "Project file not found", "model": ErrorResponse},
    },
    summary="Get a project file by ID",
)
async def get_project_file(
    file_id: str, db: AsyncSession = Depends(get_db_session)
) -> ProjectFileResponse:
    project_file = await project_file_repository.find_by_id(db, parse_id(file_id, "file"))
    if project_file is None:
        raise NotFoundError(resource="project file", resource_id=file_id)
    return ProjectFileResponse.model_validate(project_file)


@router.post(
    "",
    status_code=201,
    response_model=ProjectFileResponse,
    responses={400: {"description": "Missing required fields", "model": ErrorResponse}},
    summary="Create a file or directory",
)
async def create_project_file(
    body: ProjectFileCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectFileResponse:
    project_file = await project_file_repository.create(
        db,
        project_id=body.ProjectID,
        parent_directory_id=body.ParentDirectory,
        name=body.FileName,
        is_directory=body.IsDirectory,
        creation_date=utcnow(),
    )
    response.headers["Location"] = str(
        request.url_for("get_project_file", file_id=str(project_file.id))
    )
    return ProjectFileResponse.model_validate(project_file)


@router.put(
    "/{file_id}",
    response_model=ProjectFileResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "Project file not found", "model": ErrorResponse},
    },
    summary="Rename, move or retype a project file",
)
async def update_project_file(
    file_id: str,
    body: ProjectFileUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectFileResponse:
    project_file = await project_file_repository.find_by_id(db, parse_id(file_id, "file"))
    if project_file is None:
        raise NotFoundError(resource="project file", resource_id=file_id)

    changes: Dict[str, Any] = {}
    # null is meaningful here: it moves the node to the project root
    if "ParentDirectory" in body.model_fields_set:
        changes["parent_directory_id"] = body.ParentDirectory
    if body.FileName is not None:
        changes["name"] = body.FileName
    if body.IsDirectory is not None:
        changes["is_directory"] = body.IsDirectory

    await project_file_repository.update(db, project_file, changes)
    return ProjectFileResponse.model_validate(project_file)


@router.delete(
    "/{file_id}",
    status_code=204,
    responses={404: {"description": "Project file not found", "model": ErrorResponse}},
    summary="Delete a project file",
)
async def delete_project_file(file_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await project_file_repository.delete_by_id(db, parse_id(file_id, "file")):
        raise NotFoundError(resource="project file", resource_id=file_id)
    return Response(status_code=204)
