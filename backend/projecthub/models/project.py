"""
ProjectHub Backend — Project and ProjectFile SQLAlchemy Models
================================================================

What:  ORM models for the `projects` and `project_files` tables.

Tree Structure:
    project_files.parent_directory_id references project_files.id.
    NULL means the file sits at the project root. Directories and leaf
    files share the table and are told apart by `is_directory`.
    Cycles are not prevented.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from projecthub.database import Base
from projecthub.models.user import utcnow


class Project(Base):
    """A named project owned by a single user."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    owning_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}', owner={self.owning_user_id})>"


class ProjectFile(Base):
    """A file or directory node inside a project."""

    __tablename__ = "project_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )

    parent_directory_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("project_files.id", ondelete="CASCADE"),
        nullable=True,
        default=None,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    is_directory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Directory listings filter on (project, parent)
    __table_args__ = (
        Index("idx_project_files_tree", "project_id", "parent_directory_id"),
    )

    def __repr__(self) -> str:
        kind = "dir" if self.is_directory else "file"
        return f"<ProjectFile(id={self.id}, {kind} '{self.name}', project={self.project_id})>"
