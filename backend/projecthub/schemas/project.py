"""
ProjectHub Backend — Project and ProjectFile Schemas
======================================================

What:  API contract for /projects and /project_files.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from projecthub.database import MAX_ID, MIN_ID


class ProjectResponse(BaseModel):
    ProjectID: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("ProjectID", "id"),
    )
    OwningUserID: int = Field(validation_alias=AliasChoices("OwningUserID", "owning_user_id"))
    ProjectName: str = Field(validation_alias=AliasChoices("ProjectName", "name"))
    CreationDate: datetime = Field(
        validation_alias=AliasChoices("CreationDate", "creation_date"),
    )

    model_config = {"from_attributes": True}


class ProjectFileResponse(BaseModel):
    """
    A file or directory node.

    ParentDirectory is null for nodes at the project root.
    """
    FileID: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("FileID", "id"),
    )
    ProjectID: int = Field(validation_alias=AliasChoices("ProjectID", "project_id"))
    ParentDirectory: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("ParentDirectory", "parent_directory_id"),
    )
    FileName: str = Field(validation_alias=AliasChoices("FileName", "name"))
    IsDirectory: bool = Field(validation_alias=AliasChoices("IsDirectory", "is_directory"))
    CreationDate: datetime = Field(
        validation_alias=AliasChoices("CreationDate", "creation_date"),
    )

    model_config = {"from_attributes": True}


class ProjectCreate(BaseModel):
    OwningUserID: int = Field(ge=MIN_ID, le=MAX_ID)
    ProjectName: str


class ProjectUpdate(BaseModel):
    OwningUserID: Optional[int] = Field(default=None, ge=MIN_ID, le=MAX_ID)
    ProjectName: Optional[str] = None


class ProjectFileCreate(BaseModel):
    ProjectID: int = Field(ge=MIN_ID, le=MAX_ID)
    ParentDirectory: Optional[int] = Field(default=None, ge=MIN_ID, le=MAX_ID)
    FileName: str
    IsDirectory: bool


class ProjectFileUpdate(BaseModel):
    """
    PUT /project_files/{id}.

    An explicit `"ParentDirectory": null` moves the node to the project
    root; leaving the key out keeps the current parent.
    """
    ParentDirectory: Optional[int] = Field(default=None, ge=MIN_ID, le=MAX_ID)
    FileName: Optional[str] = None
    IsDirectory: Optional[bool] = None
