"""Module: deps."""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from vetcare.core.errors import MalformedInput
from vetcare.db.session import SessionLocal
from vetcare.repositories.profiles import ProfileRepository


# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_repository(db: Session = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(db)


# Validate and coerce numeric identifiers from path/query values.
def parse_id(value: str, field_name: str = "id") -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise MalformedInput(f"Invalid {field_name} (must be numeric)")
    if parsed <= 0:
        raise MalformedInput(f"Invalid {field_name} (must be positive)")
    return parsed
