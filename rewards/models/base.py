"""
Base models and mixins for SQLAlchemy ORM.

Provides the declarative base, mixins for timestamps and UUIDs, an exact
decimal column type, and common utilities for all database models.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional
import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator


# SQLAlchemy declarative base for all ORM models
Base = declarative_base()


def utc_now_iso() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        ISO format timestamp string (e.g., "2026-10-19T10:30:45.123456+00:00")
    """
    return datetime.now(timezone.utc).isoformat()


class DecimalString(TypeDecorator):
    """
    Exact decimal stored as TEXT.

    SQLite has no decimal type and would round-trip amounts through
    floats; storing the canonical string keeps every cent exact on every
    backend.
    """

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value: Optional[Any], dialect) -> Optional[str]:  # noqa: ANN001
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:  # noqa: ANN001
        if value is None:
            return None
        return Decimal(value)


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at timestamp columns.

    Timestamps are UTC ISO strings, set by the application so the same
    defaults work on SQLite and PostgreSQL.

    Attributes:
        created_at: Timestamp when record was created (immutable)
        updated_at: Timestamp when record was last updated (auto-updated)
    """

    created_at = Column(
        String,
        nullable=False,
        default=utc_now_iso,
        doc="UTC timestamp when record was created"
    )

    updated_at = Column(
        String,
        nullable=False,
        default=utc_now_iso,
        onupdate=utc_now_iso,
        doc="UTC timestamp when record was last updated"
    )


class UUIDMixin:
    """
    Mixin that adds a UUID primary key column.

    UUIDs are stored as strings for portability between SQLite and
    PostgreSQL.

    Attributes:
        id: UUID primary key as TEXT
    """

    id = Column(
        String,
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="UUID primary key"
    )


class ModelMixin:
    """
    Mixin providing common model utilities.
    """

    def to_dict(self) -> dict[str, Any]:
        """
        Convert model instance to dictionary.

        Note:
            Only includes columns, not relationships.
        """
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
        }

    def __repr__(self) -> str:
        attrs = ", ".join(
            f"{key}={repr(value)}"
            for key, value in self.to_dict().items()
            if key in ["id", "number", "name", "merchant_number", "transaction_id"]
        )
        return f"{self.__class__.__name__}({attrs})"
