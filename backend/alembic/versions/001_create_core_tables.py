"""Create users, active_tokens, projects and project_files tables

Revision ID: 001
Revises: None
Create Date: 2024-10-28 00:00:00.000000+00:00

What:  Initial schema. Mirrors projecthub/models/user.py and
       projecthub/models/project.py.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "sub",
            sa.String(255),
            nullable=False,
            comment="Subject identifier issued by the identity provider",
        ),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("picture", sa.String(1024), nullable=False),
        sa.Column(
            "last_login",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Login looks users up by subject
    op.create_index("ix_users_sub", "users", ["sub"], unique=True)

    op.create_table(
        "active_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "ttl_seconds",
            sa.Integer(),
            server_default=sa.text("3600"),
            nullable=False,
        ),
        sa.Column(
            "creation_date",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_active_tokens_user_id", "active_tokens", ["user_id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owning_user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "creation_date",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["owning_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_owning_user_id", "projects", ["owning_user_id"])

    op.create_table(
        "project_files",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column(
            "parent_directory_id",
            sa.Integer(),
            nullable=True,
            comment="NULL for nodes at the project root",
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_directory", sa.Boolean(), nullable=False),
        sa.Column(
            "creation_date",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["parent_directory_id"], ["project_files.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Directory listings filter on (project, parent)
    op.create_index(
        "idx_project_files_tree",
        "project_files",
        ["project_id", "parent_directory_id"],
    )


def downgrade() -> None:
    op.drop_index("idx_project_files_tree", table_name="project_files")
    op.drop_table("project_files")
    op.drop_index("ix_projects_owning_user_id", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_active_tokens_user_id", table_name="active_tokens")
    op.drop_table("active_tokens")
    op.drop_index("ix_users_sub", table_name="users")
    op.drop_table("users")
