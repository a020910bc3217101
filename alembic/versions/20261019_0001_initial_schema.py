"""Initial marketplace schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


service_type_enum = sa.Enum("30_min", "1_hour", "1_week", "1_month", name="service_type_enum", native_enum=False)
session_status_enum = sa.Enum(
    "pending",
    "confirmed",
    "in_progress",
    "completed",
    "cancelled",
    name="session_status_enum",
    native_enum=False,
)
conversation_status_enum = sa.Enum("active", "closed", name="conversation_status_enum", native_enum=False)
message_type_enum = sa.Enum("text", "system", name="message_type_enum", native_enum=False)
waitlist_status_enum = sa.Enum("pending", "invited", "rejected", name="waitlist_status_enum", native_enum=False)


def _id_col() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def _profile_fk(table: str, column: str, ondelete: str = "CASCADE") -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint([column], ["profiles.id"], name=f"fk_{table}_{column}_profiles", ondelete=ondelete)


def upgrade() -> None:
    op.create_table(
        "profiles",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=128), nullable=True),
        sa.Column("last_name", sa.String(length=128), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("profile_bio", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("home_country", sa.String(length=128), nullable=True),
        sa.Column("specialties", postgresql.ARRAY(sa.String(length=128)), nullable=True),
        sa.Column("starting_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("profile_image_url", sa.String(length=1024), nullable=True),
        sa.Column("preview_image_url", sa.String(length=1024), nullable=True),
        sa.Column("linkedin_url", sa.String(length=1024), nullable=True),
        sa.Column("instagram_url", sa.String(length=1024), nullable=True),
        sa.Column("facebook_url", sa.String(length=1024), nullable=True),
        sa.Column("is_expert", sa.Boolean(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("expert_rank", sa.Integer(), nullable=True),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=False)
    op.create_index("ix_profiles_is_expert", "profiles", ["is_expert"], unique=False)

    op.create_table(
        "expert_services",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("expert_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("service_type", service_type_enum, nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("availability_slots", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _profile_fk("expert_services", "expert_id"),
    )
    op.create_index("ix_expert_services_expert_id", "expert_services", ["expert_id"], unique=False)

    op.create_table(
        "expert_categories",
        _id_col(),
        _created_col(),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=True),
        sa.UniqueConstraint("name", name="uq_expert_categories_name"),
    )

    op.create_table(
        "expert_category_associations",
        _id_col(),
        _created_col(),
        sa.Column("expert_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("category_id", postgresql.UUID(as_uuid=True), nullable=False),
        _profile_fk("expert_category_associations", "expert_id"),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["expert_categories.id"],
            name="fk_expert_category_associations_category_id_expert_categories",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("expert_id", "category_id", name="uq_expert_category_pair"),
    )
    op.create_index(
        "ix_expert_category_associations_expert_id",
        "expert_category_associations",
        ["expert_id"],
        unique=False,
    )
    op.create_index(
        "ix_expert_category_associations_category_id",
        "expert_category_associations",
        ["category_id"],
        unique=False,
    )

    op.create_table(
        "expert_videos",
        _id_col(),
        _created_col(),
        sa.Column("expert_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("url", sa.String(length=1024), nullable=False),
        _profile_fk("expert_videos", "expert_id"),
    )
    op.create_index("ix_expert_videos_expert_id", "expert_videos", ["expert_id"], unique=False)

    op.create_table(
        "bookings",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("expert_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("service_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("price_paid", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", session_status_enum, nullable=False),
        sa.Column("chat_enabled", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("auto_completion_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _profile_fk("bookings", "user_id"),
        _profile_fk("bookings", "expert_id"),
        sa.ForeignKeyConstraint(
            ["service_id"],
            ["expert_services.id"],
            name="fk_bookings_service_id_expert_services",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint("price_paid >= 0", name="ck_bookings_price_paid_non_negative"),
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"], unique=False)
    op.create_index("ix_bookings_expert_id", "bookings", ["expert_id"], unique=False)
    op.create_index("ix_bookings_service_id", "bookings", ["service_id"], unique=False)
    op.create_index("ix_bookings_status", "bookings", ["status"], unique=False)
    op.create_index("ix_bookings_auto_completion_date", "bookings", ["auto_completion_date"], unique=False)

    op.create_table(
        "conversations",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("expert_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("status", conversation_status_enum, nullable=False),
        _profile_fk("conversations", "user_id"),
        _profile_fk("conversations", "expert_id"),
        sa.ForeignKeyConstraint(
            ["booking_id"],
            ["bookings.id"],
            name="fk_conversations_booking_id_bookings",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_conversations_user_id", "conversations", ["user_id"], unique=False)
    op.create_index("ix_conversations_expert_id", "conversations", ["expert_id"], unique=False)
    op.create_index("ix_conversations_booking_id", "conversations", ["booking_id"], unique=False)

    op.create_table(
        "messages",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("conversation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("message_type", message_type_enum, nullable=False),
        sa.Column("is_edited", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["conversation_id"],
            ["conversations.id"],
            name="fk_messages_conversation_id_conversations",
            ondelete="CASCADE",
        ),
        _profile_fk("messages", "sender_id"),
    )
    op.create_index("ix_messages_conversation_id", "messages", ["conversation_id"], unique=False)

    op.create_table(
        "expert_suggestions",
        _id_col(),
        _created_col(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=128), nullable=True),
        sa.Column("submitted_by", postgresql.UUID(as_uuid=True), nullable=True),
        _profile_fk("expert_suggestions", "submitted_by", ondelete="SET NULL"),
    )

    op.create_table(
        "waitlist",
        _id_col(),
        _created_col(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=128), nullable=True),
        sa.Column("last_name", sa.String(length=128), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("status", waitlist_status_enum, nullable=False),
        sa.UniqueConstraint("email", name="uq_waitlist_email"),
    )
    op.create_index("ix_waitlist_email", "waitlist", ["email"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_waitlist_email", table_name="waitlist")
    op.drop_table("waitlist")
    op.drop_table("expert_suggestions")

    op.drop_index("ix_messages_conversation_id", table_name="messages")
    op.drop_table("messages")

    op.drop_index("ix_conversations_booking_id", table_name="conversations")
    op.drop_index("ix_conversations_expert_id", table_name="conversations")
    op.drop_index("ix_conversations_user_id", table_name="conversations")
    op.drop_table("conversations")

    op.drop_index("ix_bookings_auto_completion_date", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_service_id", table_name="bookings")
    op.drop_index("ix_bookings_expert_id", table_name="bookings")
    op.drop_index("ix_bookings_user_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_expert_videos_expert_id", table_name="expert_videos")
    op.drop_table("expert_videos")
    op.drop_index("ix_expert_category_associations_category_id", table_name="expert_category_associations")
    op.drop_index("ix_expert_category_associations_expert_id", table_name="expert_category_associations")
    op.drop_table("expert_category_associations")
    op.drop_table("expert_categories")
    op.drop_index("ix_expert_services_expert_id", table_name="expert_services")
    op.drop_table("expert_services")

    op.drop_index("ix_profiles_is_expert", table_name="profiles")
    op.drop_index("ix_profiles_user_id", table_name="profiles")
    op.drop_table("profiles")
