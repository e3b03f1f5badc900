"""Initial schema - app_user, permit, material, role_permissions, activity_log.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "app_user",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="observer"),
        sa.Column(
            "regions",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default=sa.text("ARRAY['headquarters']::text[]"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("cardinality(regions) > 0", name="ck_app_user_regions_not_empty"),
    )
    op.create_index("ix_app_user_username", "app_user", ["username"], unique=True)
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)

    # created_by / closed_by are plain ids: deleting a user keeps their permits.
    op.create_table(
        "permit",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("permit_number", sa.String(50), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("region", sa.String(50), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("carrier_name", sa.Text(), nullable=False),
        sa.Column("carrier_id", sa.Text(), nullable=False),
        sa.Column("request_type", sa.String(50), nullable=False),
        sa.Column("vehicle_plate", sa.Text(), nullable=False),
        sa.Column("created_by", sa.UUID(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("closed_by", sa.UUID(), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("closed_by_name", sa.Text(), nullable=True),
        sa.Column("can_reopen", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint(
            "(closed_at IS NULL) = (closed_by IS NULL)", name="ck_permit_closed_pair"
        ),
    )
    op.create_index("ix_permit_permit_number", "permit", ["permit_number"], unique=True)
    op.create_index("ix_permit_region", "permit", ["region"])
    op.create_index("ix_permit_date", "permit", ["date"])
    op.create_index("ix_permit_created_at", "permit", ["created_at"])

    op.create_table(
        "material",
        sa.Column(
            "permit_id",
            sa.UUID(),
            sa.ForeignKey("permit.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("position", sa.Integer(), primary_key=True),
        sa.Column("material_id", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("serial_number", sa.Text(), nullable=False),
    )

    op.create_table(
        "role_permissions",
        sa.Column("role", sa.String(50), primary_key=True),
        sa.Column("capabilities", postgresql.JSONB(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "activity_log",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("actor_id", sa.UUID(), nullable=True),
        sa.Column("actor_name", sa.Text(), nullable=False),
        sa.Column("actor_username", sa.String(255), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("details", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("source_ip", sa.String(255), nullable=False, server_default="unknown"),
        sa.Column("user_agent", sa.Text(), nullable=False, server_default="unknown"),
    )
    op.create_index("ix_activity_log_timestamp", "activity_log", ["timestamp"])
    op.create_index("ix_activity_log_action", "activity_log", ["action"])


def downgrade() -> None:
    op.drop_table("activity_log")
    op.drop_table("role_permissions")
    op.drop_table("material")
    op.drop_table("permit")
    op.drop_table("app_user")
