"""SQLAlchemy base classes and shared column types.

Column types are portable: JSONB and native UUID on PostgreSQL, JSON text
and CHAR(32) elsewhere (SQLite in tests).
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

JSONDocument = JSON().with_variant(JSONB(), "postgresql")
"""JSON column type, stored as JSONB on PostgreSQL."""


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    type_annotation_map = {
        datetime: DateTime(timezone=True),
        uuid.UUID: Uuid(as_uuid=True),
    }


class UUIDPrimaryKeyMixin:
    """Mixin that adds a client-generated UUID primary key.

    Attributes:
        id: Primary key, generated in Python so it is known before flush.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )
