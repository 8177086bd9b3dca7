"""Initial schema: users, github_organizations, github_contributors.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="Product Engineer"),
        sa.Column("role_type", sa.String(10), nullable=False, server_default="IC"),
        sa.Column("growth_level", sa.String(50), nullable=True),
        sa.Column("org_function", sa.String(50), nullable=True),
        sa.Column("pillar", sa.String(255), nullable=True),
        sa.Column("tribe", sa.String(255), nullable=True),
        sa.Column("squad", sa.String(255), nullable=True),
        sa.Column("job_title", sa.String(255), nullable=True),
        sa.Column(
            "manager_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("app_access_role", sa.String(20), nullable=False, server_default="IC"),
        *_timestamps(),
    )
    op.create_index("ix_users_manager_id", "users", ["manager_id"])

    op.create_table(
        "github_organizations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("access_token", sa.Text, nullable=False),
        sa.Column("token_expires_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "github_contributors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("current_username", sa.String(255), nullable=False, unique=True),
        sa.Column("current_email", sa.String(320), nullable=False),
        sa.Column("current_name", sa.String(255), nullable=False),
        sa.Column("all_known_usernames", ARRAY(sa.Text), nullable=False, server_default="{}"),
        sa.Column("all_known_emails", ARRAY(sa.Text), nullable=False, server_default="{}"),
        sa.Column("all_known_names", ARRAY(sa.Text), nullable=False, server_default="{}"),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("last_active_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
    )
    op.create_index("ix_github_contributors_current_email", "github_contributors", ["current_email"])
    op.create_index("ix_github_contributors_user_id", "github_contributors", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_github_contributors_user_id", table_name="github_contributors")
    op.drop_index("ix_github_contributors_current_email", table_name="github_contributors")
    op.drop_table("github_contributors")
    op.drop_table("github_organizations")
    op.drop_index("ix_users_manager_id", table_name="users")
    op.drop_table("users")
