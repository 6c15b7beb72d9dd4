"""SQLAlchemy declarative base, ULID key mixin and closed-enum column type."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from sqlalchemy import Enum, String, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from ulid import ULID


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    return str(ULID())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ULIDMixin:
    """Mixin that provides a ULID primary key and created_at timestamp."""

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=new_id)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


def status_column_type(enum_cls: type[enum.Enum]) -> Enum:
    """Store an enum by value in a VARCHAR, rejecting unknown strings on write."""
    return Enum(
        enum_cls,
        native_enum=False,
        validate_strings=True,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )
