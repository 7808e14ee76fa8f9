"""Module: base."""

from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


# Shared SQLAlchemy declarative base that all ORM models inherit from.
class Base(DeclarativeBase):
    pass


def utc_now() -> datetime:
    return datetime.now(UTC)
