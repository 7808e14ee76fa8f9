"""Module: profiles.

Persistence boundary for accounts and professional aggregates. Services never
touch the ``Session`` directly; they go through a ``ProfileRepository`` bound
to the request's session.
"""

import enum
from collections.abc import Iterable, Sequence
from typing import TypeVar

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from vetcare.core.errors import DuplicateEmail, NotFound
from vetcare.db.models.account import Account
from vetcare.db.models.professional import Professional
from vetcare.db.models.rating import Rating
from vetcare.db.models.species import Species

ProfileT = TypeVar("ProfileT", Account, Professional)


class Populate(enum.Enum):
    """Relationships a read may eagerly resolve."""

    PETS = "pets"
    SCHEDULE = "schedule"
    SPECIES = "species"


# Which populate options make sense for which aggregate root.
_POPULATE_TARGETS = {
    Account: {Populate.PETS: Account.pets},
    Professional: {
        Populate.SCHEDULE: Professional.schedule,
        Populate.SPECIES: Professional.species,
    },
}

_KIND_LABELS = {Account: "Account", Professional: "Professional"}


def _loader_options(kind: type, populate: Iterable[Populate]) -> list:
    targets = _POPULATE_TARGETS[kind]
    options = []
    for option in populate:
        if option not in targets:
            raise ValueError(f"{option.name} cannot be populated on {kind.__name__}")
        options.append(selectinload(targets[option]))
    return options


def normalize_email(value: str) -> str:
    return value.strip().lower()


class ProfileRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(
        self,
        kind: type[ProfileT],
        entity_id: int,
        populate: Sequence[Populate] = (),
    ) -> ProfileT | None:
        stmt = select(kind).where(kind.id == entity_id).options(*_loader_options(kind, populate))
        return self.session.execute(stmt).scalar_one_or_none()

    def get_or_fail(
        self,
        kind: type[ProfileT],
        entity_id: int,
        populate: Sequence[Populate] = (),
    ) -> ProfileT:
        entity = self.find_by_id(kind, entity_id, populate)
        if entity is None:
            raise NotFound(f"{_KIND_LABELS[kind]} {entity_id} not found")
        return entity

    def find_by_email(self, kind: type[ProfileT], email: str) -> ProfileT | None:
        stmt = select(kind).where(kind.email == normalize_email(email))
        return self.session.execute(stmt).scalar_one_or_none()

    def list_all(
        self,
        kind: type[ProfileT],
        populate: Sequence[Populate] = (),
        species_id: int | None = None,
    ) -> list[ProfileT]:
        stmt = select(kind).options(*_loader_options(kind, populate)).order_by(kind.id)
        if species_id is not None:
            if kind is not Professional:
                raise ValueError("species filter only applies to professionals")
            stmt = stmt.where(Professional.species.any(Species.id == species_id))
        return list(self.session.execute(stmt).scalars().all())

    def resolve_species(self, species_ids: Iterable[int]) -> tuple[list[Species], list[int]]:
        """Return (found, missing) preserving the requested order."""
        requested = list(dict.fromkeys(species_ids))
        if not requested:
            return [], []

        rows = self.session.execute(select(Species).where(Species.id.in_(requested))).scalars().all()
        by_id = {row.id: row for row in rows}
        found = [by_id[sid] for sid in requested if sid in by_id]
        missing = [sid for sid in requested if sid not in by_id]
        return found, missing

    def lock_professional(self, professional_id: int) -> Professional | None:
        # Row lock for read-then-write maintenance (no-op on SQLite).
        stmt = select(Professional).where(Professional.id == professional_id).with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def ratings_for(self, professional_id: int) -> list[Rating]:
        stmt = select(Rating).where(Rating.professional_id == professional_id).order_by(Rating.id)
        return list(self.session.execute(stmt).scalars().all())

    def add_rating(self, rating: Rating) -> Rating:
        self.session.add(rating)
        self.session.flush()
        return rating

    def save(self, entity):
        """Insert or update ``entity`` and everything cascading from it in one commit."""
        try:
            self.session.add(entity)
            self.session.flush()
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if "email" in str(exc.orig).lower():
                raise DuplicateEmail() from exc
            raise
        except Exception:
            self.session.rollback()
            raise
        return entity

    def commit(self) -> None:
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def rollback(self) -> None:
        self.session.rollback()

    def delete(self, kind: type[ProfileT], entity_id: int) -> None:
        # Delete by reference: no SELECT of the row beforehand.
        result = self.session.execute(delete(kind).where(kind.id == entity_id))
        if result.rowcount == 0:
            self.session.rollback()
            raise NotFound(f"{_KIND_LABELS[kind]} {entity_id} not found")
        self.commit()
        logger.info(f"Deleted {_KIND_LABELS[kind]} {entity_id}")

    def delete_entity(self, entity) -> None:
        self.session.delete(entity)
        self.commit()

    def list_species(self) -> list[Species]:
        return list(self.session.execute(select(Species).order_by(Species.id)).scalars().all())

    def find_species_by_name(self, name: str) -> Species | None:
        return self.session.execute(select(Species).where(Species.name == name)).scalar_one_or_none()
