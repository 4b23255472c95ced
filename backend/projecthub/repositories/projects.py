"""
ProjectHub Backend — Project and ProjectFile Repositories
===========================================================

What:  Persistence for projects and the file tree inside each project.
Who:   /projects and /project_files route handlers.

List filters (query-string names):
    /projects       ProjectName (substring), OwningUserID
    /project_files  ProjectID, ParentDirectory ("null" = root level), FileName (substring),
                    IsDirectory
"""

from projecthub.models.project import Project, ProjectFile
from projecthub.repositories.base import FilterField, Repository


class ProjectRepository(Repository[Project]):
    model = Project
    resource = "project"
    sort_fields = {
        "ProjectID": "id",
        "ProjectName": "name",
        "CreationDate": "creation_date",
    }
    filter_fields = {
        "ProjectName": FilterField("name", kind="contains"),
        "OwningUserID": FilterField("owning_user_id"),
    }


class ProjectFileRepository(Repository[ProjectFile]):
    model = ProjectFile
    resource = "project file"
    sort_fields = {
        "FileID": "id",
        "FileName": "name",
        "CreationDate": "creation_date",
    }
    filter_fields = {
        "ProjectID": FilterField("project_id"),
        "ParentDirectory": FilterField("parent_directory_id", nullable=True),
        "FileName": FilterField("name", kind="contains"),
        "IsDirectory": FilterField("is_directory", kind="bool"),
    }


project_repository = ProjectRepository()
project_file_repository = ProjectFileRepository()
