"""
ProjectHub Backend — ORM Models
=================================

Importing this package registers every table with `Base.metadata`
(Alembic autogenerate and the test suite's create_all rely on it).
"""

from projecthub.models.user import ActiveToken, User
from projecthub.models.project import Project, ProjectFile

__all__ = ["User", "ActiveToken", "Project", "ProjectFile"]
