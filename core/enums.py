"""SQLAlchemy enum definitions for the database schema."""

import enum

from sqlalchemy import Enum as SQLEnum


# =====================================================
# Python Enum Classes
# =====================================================


class EventType(str, enum.Enum):
    in_person = "in_person"
    virtual = "virtual"


# =====================================================
# SQLAlchemy Enum Types
# Created by the initial migration (create_type=False here)
# =====================================================

event_type_enum = SQLEnum(
    EventType, name="event_type", create_type=False, native_enum=True
)
