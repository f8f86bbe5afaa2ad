"""initial schema: users, events, rsvps, collections, credentials

Revision ID: 001
Revises:
Create Date: 2026-10-18

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


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        postgresql.TIMESTAMP(timezone=True),
        server_default=sa.text("now()"),
        nullable=True,
    )


def upgrade() -> None:
    event_type_enum = postgresql.ENUM(
        "in_person", "virtual", name="event_type", create_type=False
    )
    event_type_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("wallet_address", sa.Text(), nullable=True),
        sa.Column(
            "nickname", sa.Text(), server_default="Anonymous", nullable=False
        ),
        _created_at(),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
        sa.UniqueConstraint("wallet_address", name=op.f("uq_users_wallet_address")),
    )

    op.create_table(
        "events",
        sa.Column("event_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description_text", sa.Text(), nullable=True),
        sa.Column("description_html", sa.Text(), nullable=True),
        sa.Column(
            "start_date_time", postgresql.TIMESTAMP(timezone=True), nullable=False
        ),
        sa.Column("end_date_time", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("location", sa.Text(), server_default="", nullable=False),
        sa.Column("hash", sa.Text(), nullable=False),
        sa.Column("limit", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_deleted", sa.Boolean(), server_default="false", nullable=False),
        sa.Column(
            "g_cal_event_requested",
            sa.Boolean(),
            server_default="false",
            nullable=False,
        ),
        sa.Column("g_cal_event_id", sa.Text(), nullable=True),
        sa.Column("g_cal_id", sa.Text(), nullable=True),
        sa.Column(
            "type", event_type_enum, server_default="in_person", nullable=False
        ),
        sa.Column("proposer_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(
            ["proposer_id"],
            ["users.user_id"],
            name=op.f("fk_events_proposer_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("event_id", name=op.f("pk_events")),
        sa.UniqueConstraint("hash", name=op.f("uq_events_hash")),
    )
    op.create_index("idx_events_proposer_id", "events", ["proposer_id"])
    op.create_index("idx_events_start_date_time", "events", ["start_date_time"])

    op.create_table(
        "rsvps",
        sa.Column("rsvp_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("attendee_id", sa.Integer(), nullable=False),
        sa.Column(
            "is_added_to_google_calendar",
            sa.Boolean(),
            server_default="false",
            nullable=False,
        ),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.event_id"],
            name=op.f("fk_rsvps_event_id_events"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["attendee_id"],
            ["users.user_id"],
            name=op.f("fk_rsvps_attendee_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("rsvp_id", name=op.f("pk_rsvps")),
        sa.UniqueConstraint(
            "event_id", "attendee_id", name="rsvps_event_attendee_unique"
        ),
    )
    op.create_index("idx_rsvps_attendee_id", "rsvps", ["attendee_id"])

    op.create_table(
        "collections",
        sa.Column("collection_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            name=op.f("fk_collections_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("collection_id", name=op.f("pk_collections")),
    )
    op.create_index("idx_collections_user_id", "collections", ["user_id"])

    op.create_table(
        "collection_events",
        sa.Column("collection_id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["collection_id"],
            ["collections.collection_id"],
            name=op.f("fk_collection_events_collection_id_collections"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.event_id"],
            name=op.f("fk_collection_events_event_id_events"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "collection_id", "event_id", name=op.f("pk_collection_events")
        ),
    )

    op.create_table(
        "google_credentials",
        sa.Column("credential_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("token_type", sa.Text(), nullable=True),
        sa.Column("scope", sa.Text(), nullable=True),
        sa.Column("id_token", sa.Text(), nullable=True),
        sa.Column("expiry_date", postgresql.TIMESTAMP(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("credential_id", name=op.f("pk_google_credentials")),
    )

    op.create_table(
        "slack_credentials",
        sa.Column("credential_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column("team_id", sa.Text(), nullable=True),
        sa.Column("channel_id", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("credential_id", name=op.f("pk_slack_credentials")),
    )


def downgrade() -> None:
    op.drop_table("slack_credentials")
    op.drop_table("google_credentials")
    op.drop_table("collection_events")
    op.drop_index("idx_collections_user_id", table_name="collections")
    op.drop_table("collections")
    op.drop_index("idx_rsvps_attendee_id", table_name="rsvps")
    op.drop_table("rsvps")
    op.drop_index("idx_events_start_date_time", table_name="events")
    op.drop_index("idx_events_proposer_id", table_name="events")
    op.drop_table("events")
    op.drop_table("users")
    postgresql.ENUM(name="event_type").drop(op.get_bind(), checkfirst=True)
