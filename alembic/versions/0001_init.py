"""init schema

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    # enums
    role_create = postgresql.ENUM("owner", "manager", "developer", "viewer", name="role")
    task_status_create = postgresql.ENUM("todo", "in_progress", "completed", name="task_status")
    task_priority_create = postgresql.ENUM("low", "medium", "high", name="task_priority")

    role_create.create(op.get_bind(), checkfirst=True)
    task_status_create.create(op.get_bind(), checkfirst=True)
    task_priority_create.create(op.get_bind(), checkfirst=True)

    role = postgresql.ENUM("owner", "manager", "developer", "viewer", name="role", create_type=False)
    task_status = postgresql.ENUM("todo", "in_progress", "completed", name="task_status", create_type=False)
    task_priority = postgresql.ENUM("low", "medium", "high", name="task_priority", create_type=False)

    op.create_table(
        "users",
        sa.Column("username", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "auth_magic_links",
        sa.Column("token_hash", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("username", sa.String(length=64), sa.ForeignKey("users.username"), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_auth_magic_links_username", "auth_magic_links", ["username"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="active"),
        sa.Column("owner_id", sa.String(length=64), sa.ForeignKey("users.username"), nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("progress >= 0 AND progress <= 100", name="ck_projects_progress_range"),
    )
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"])

    op.create_table(
        "team_members",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("role", role, nullable=False, server_default="viewer"),
        sa.Column("assigned_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("project_id", "username", name="uq_team_member_project_user"),
    )
    op.create_index("ix_team_members_project_id", "team_members", ["project_id"])
    op.create_index("ix_team_members_username", "team_members", ["username"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", task_status, nullable=False, server_default="todo"),
        sa.Column("priority", task_priority, nullable=False, server_default="medium"),
        sa.Column("assigned_to", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_tasks_project_id", "tasks", ["project_id"])
    op.create_index("ix_tasks_assigned_to", "tasks", ["assigned_to"])

def downgrade() -> None:
    op.drop_index("ix_tasks_assigned_to", table_name="tasks")
    op.drop_index("ix_tasks_project_id", table_name="tasks")
    op.drop_table("tasks")

    op.drop_index("ix_team_members_username", table_name="team_members")
    op.drop_index("ix_team_members_project_id", table_name="team_members")
    op.drop_table("team_members")

    op.drop_index("ix_projects_owner_id", table_name="projects")
    op.drop_table("projects")

    op.drop_index("ix_auth_magic_links_username", table_name="auth_magic_links")
    op.drop_table("auth_magic_links")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    postgresql.ENUM(name="task_priority").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="task_status").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="role").drop(op.get_bind(), checkfirst=True)
