# pylint: skip-file
# ruff: noqa
"""Initial schema - accounts, groups, content, targeting, read states

Revision ID: 001
Revises:
Create Date: 2026-03-01 00:00:00

Tables created:
- users: Staff accounts mirrored from the auth provider
- groups: Named cohorts (targeting joins on the name)
- user_groups: Membership junction table
- content_items: Education and best-practice posts
- content_target_groups: Group-name audience rows
- content_target_users: User audience rows
- read_states: Per-user acknowledgments (upsert target uq_read_states_user_content)

Enums created:
- user_role: admin, manager
- content_collection: education, best_practice
- targeting_type: group, individual
- approval_status: pending, approved
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role_enum = postgresql.ENUM("admin", "manager", name="user_role", create_type=False)

content_collection_enum = postgresql.ENUM(
    "education",
    "best_practice",
    name="content_collection",
    create_type=False,
)

targeting_type_enum = postgresql.ENUM(
    "group",
    "individual",
    name="targeting_type",
    create_type=False,
)

approval_status_enum = postgresql.ENUM(
    "pending",
    "approved",
    name="approval_status",
    create_type=False,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute("CREATE TYPE user_role AS ENUM ('admin', 'manager')")
    op.execute("CREATE TYPE content_collection AS ENUM ('education', 'best_practice')")
    op.execute("CREATE TYPE targeting_type AS ENUM ('group', 'individual')")
    op.execute("CREATE TYPE approval_status AS ENUM ('pending', 'approved')")

    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False, unique=True, index=True),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("nickname", sa.String(100), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "groups",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "user_groups",
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "group_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("groups.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "content_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("collection", content_collection_enum, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("targeting_type", targeting_type_enum, nullable=False),
        sa.Column("approval_status", approval_status_enum, nullable=False, index=True),
        sa.Column(
            "author_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index(
        "ix_content_items_collection_created",
        "content_items",
        ["collection", "created_at"],
    )

    op.create_table(
        "content_target_groups",
        sa.Column(
            "content_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("content_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("group_name", sa.String(100), primary_key=True),
    )

    op.create_table(
        "content_target_users",
        sa.Column(
            "content_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("content_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )

    op.create_table(
        "read_states",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "content_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("content_items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
    )
    # ON CONFLICT target of the read-state upsert
    op.create_unique_constraint(
        "uq_read_states_user_content", "read_states", ["user_id", "content_id"]
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("read_states")
    op.drop_table("content_target_users")
    op.drop_table("content_target_groups")
    op.drop_index("ix_content_items_collection_created", table_name="content_items")
    op.drop_table("content_items")
    op.drop_table("user_groups")
    op.drop_table("groups")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS approval_status")
    op.execute("DROP TYPE IF EXISTS targeting_type")
    op.execute("DROP TYPE IF EXISTS content_collection")
    op.execute("DROP TYPE IF EXISTS user_role")
