"""SQLAlchemy Core table definitions for the database schema."""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

from .enums import event_type_enum

# Naming convention for constraints (helps Alembic generate better names)
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=convention)


# =====================================================
# 1. USERS
# =====================================================
users = Table(
    "users",
    metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("email", Text, unique=True),
    Column("wallet_address", Text, unique=True),
    Column("nickname", Text, nullable=False, server_default="Anonymous"),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Column("updated_at", TIMESTAMP(timezone=True), server_default=func.now()),
)


# =====================================================
# 2. EVENTS
# =====================================================
# One row per session. Once g_cal_event_id is set it never changes, and a
# row with is_deleted = true is never flipped back.
events = Table(
    "events",
    metadata,
    Column("event_id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("description_text", Text),
    Column("description_html", Text),
    Column("start_date_time", TIMESTAMP(timezone=True), nullable=False),
    Column("end_date_time", TIMESTAMP(timezone=True), nullable=False),
    Column("location", Text, nullable=False, server_default=""),
    Column("hash", Text, nullable=False, unique=True),
    Column("limit", Integer, nullable=False, server_default="0"),  # 0 = no limit
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "g_cal_event_requested", Boolean, nullable=False, server_default="false"
    ),
    Column("g_cal_event_id", Text),
    Column("g_cal_id", Text),
    Column("type", event_type_enum, nullable=False, server_default="in_person"),
    Column(
        "proposer_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Column("updated_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Index("idx_events_proposer_id", "proposer_id"),
    Index("idx_events_start_date_time", "start_date_time"),
)


# =====================================================
# 3. RSVPS
# =====================================================
rsvps = Table(
    "rsvps",
    metadata,
    Column("rsvp_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "event_id",
        Integer,
        ForeignKey("events.event_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "attendee_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "is_added_to_google_calendar",
        Boolean,
        nullable=False,
        server_default="false",
    ),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Index("idx_rsvps_attendee_id", "attendee_id"),
    UniqueConstraint("event_id", "attendee_id", name="rsvps_event_attendee_unique"),
)


# =====================================================
# 4. COLLECTIONS
# =====================================================
collections = Table(
    "collections",
    metadata,
    Column("collection_id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Index("idx_collections_user_id", "user_id"),
)

collection_events = Table(
    "collection_events",
    metadata,
    Column(
        "collection_id",
        Integer,
        ForeignKey("collections.collection_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "event_id",
        Integer,
        ForeignKey("events.event_id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# =====================================================
# 5. THIRD-PARTY CREDENTIALS
# =====================================================
google_credentials = Table(
    "google_credentials",
    metadata,
    Column("credential_id", Integer, primary_key=True, autoincrement=True),
    Column("access_token", Text, nullable=False),
    Column("refresh_token", Text),
    Column("token_type", Text),
    Column("scope", Text),
    Column("id_token", Text),
    Column("expiry_date", TIMESTAMP(timezone=True)),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
)

slack_credentials = Table(
    "slack_credentials",
    metadata,
    Column("credential_id", Integer, primary_key=True, autoincrement=True),
    Column("access_token", Text, nullable=False),
    Column("team_id", Text),
    Column("channel_id", Text),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
)
