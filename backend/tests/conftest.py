"""
Shared pytest configuration for the vetcare backend tests.

Every test gets a fresh in-memory SQLite database. Settings are read from the
environment at import time, so the variables below are set before any
vetcare module is imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-signing-key-0123456789abcdef0123456789"
# Cheap hashing keeps the suite fast; the scheme is unchanged.
os.environ["PASSWORD_ITERATIONS"] = "1000"
os.environ["STRICT_SPECIES_REFERENCES"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vetcare.api.v1.routes.deps import get_db
from vetcare.db.base import Base
from vetcare.db.models.species import Species
from vetcare.db.session import enable_sqlite_foreign_keys
from vetcare.main import app
from vetcare.repositories.profiles import ProfileRepository
from vetcare.schemas.account import AccountCreate
from vetcare.schemas.professional import ProfessionalCreate, ScheduleEntryIn

import vetcare.db.models  # noqa: F401


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db_session) -> ProfileRepository:
    return ProfileRepository(db_session)


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def species(db_session) -> list[Species]:
    rows = [Species(name="Dog"), Species(name="Cat"), Species(name="Rabbit")]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture
def account_payload() -> AccountCreate:
    return AccountCreate(
        name="Lucia",
        surname="Fernandez",
        email="lucia@example.com",
        phone="3415550101",
        password="s3cret-pass",
    )


@pytest.fixture
def professional_payload(species) -> ProfessionalCreate:
    return ProfessionalCreate(
        license_number="MP-1001",
        name="Tomas",
        surname="Gimenez",
        address="Cordoba 1234",
        phone="3415550199",
        email="tomas.vet@example.com",
        password="vet-pass",
        schedule=[
            ScheduleEntryIn(day="Monday", start_time="09:00", end_time="13:00"),
            ScheduleEntryIn(day="Thursday", start_time="14:00", end_time="18:30"),
        ],
        species=[species[0].id],
    )
