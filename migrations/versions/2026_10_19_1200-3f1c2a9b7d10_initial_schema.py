"""initial_schema

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "3f1c2a9b7d10"
down_revision = None
branch_labels = None
depends_on = None

# shared by several tables, so it is created once up front
channel_enum = postgresql.ENUM("sms", "email", name="channel_enum", create_type=False)


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
    ]


def upgrade() -> None:
    channel_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("notify", channel_enum, nullable=False),
        sa.Column("profile_pic", sa.String(length=500), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_phone", "users", ["phone"], unique=True)

    op.create_table(
        "events",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=50), nullable=False),
        sa.Column("location", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("label", sa.String(length=50), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("rsvp_open", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.UUID(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["created_by"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_events_date", "events", ["date"])
    op.create_index("ix_events_created_by", "events", ["created_by"])

    op.create_table(
        "event_invited_guests",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("guest_key", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("notify", channel_enum, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("avatar", sa.String(length=500), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("event_id", "guest_key", name="uq_invited_guest"),
    )
    op.create_index("ix_event_invited_guests_event_id", "event_invited_guests", ["event_id"])
    op.create_index("ix_event_invited_guests_user_id", "event_invited_guests", ["user_id"])
    op.create_index("ix_event_invited_guests_email", "event_invited_guests", ["email"])
    op.create_index("ix_event_invited_guests_phone", "event_invited_guests", ["phone"])

    op.create_table(
        "event_attendees",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("notify", channel_enum, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("headcount", sa.Integer(), nullable=False, server_default="1"),
        *timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_attendee"),
        sa.CheckConstraint("headcount >= 1", name="ck_attendee_headcount_positive"),
    )
    op.create_index("ix_event_attendees_event_id", "event_attendees", ["event_id"])
    op.create_index("ix_event_attendees_user_id", "event_attendees", ["user_id"])

    op.create_table(
        "event_memories",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("date", sa.String(length=50), nullable=False),
        sa.Column("location", sa.String(length=500), nullable=False),
        sa.Column("image_url", sa.String(length=1000), nullable=False),
        sa.Column("uploaded_by", sa.UUID(), nullable=False),
        sa.Column("uploaded_by_name", sa.String(length=255), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_event_memories_event_id", "event_memories", ["event_id"])

    op.create_table(
        "notifications",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("user_to", sa.UUID(), nullable=False),
        sa.Column("user_from", sa.UUID(), nullable=False),
        sa.Column("event_type", sa.String(length=255), nullable=False),
        sa.Column("label", sa.String(length=50), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=True),
        sa.Column("subject_key", sa.String(length=255), nullable=False),
        sa.Column(
            "notification_type",
            sa.Enum(
                "invite",
                "rsvp",
                "newMessage",
                "reminder",
                "cancellation",
                name="notification_kind_enum",
            ),
            nullable=False,
        ),
        sa.Column("opened", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_to"], ["users.uuid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_from"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint(
            "user_to",
            "user_from",
            "notification_type",
            "subject_key",
            name="uq_notification_subject",
        ),
    )
    op.create_index("ix_notifications_user_to", "notifications", ["user_to"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])

    op.create_table(
        "delivery_logs",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("provider_message_id", sa.String(length=255), nullable=True),
        sa.Column("channel", channel_enum, nullable=False),
        sa.Column("to_address", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("message_type", sa.String(length=50), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "sent", "failed", name="delivery_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("error_message", sa.Text(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_delivery_logs_provider_message_id", "delivery_logs", ["provider_message_id"])
    op.create_index("ix_delivery_logs_to_address", "delivery_logs", ["to_address"])
    op.create_index("ix_delivery_logs_message_type", "delivery_logs", ["message_type"])
    op.create_index("ix_delivery_logs_status", "delivery_logs", ["status"])


def downgrade() -> None:
    op.drop_table("delivery_logs")
    op.drop_table("notifications")
    op.drop_table("event_memories")
    op.drop_table("event_attendees")
    op.drop_table("event_invited_guests")
    op.drop_table("events")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS delivery_status_enum")
    op.execute("DROP TYPE IF EXISTS notification_kind_enum")
    op.execute("DROP TYPE IF EXISTS channel_enum")
