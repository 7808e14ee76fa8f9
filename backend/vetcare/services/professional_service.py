"""Module: professional_service."""

from typing import Any

from loguru import logger

from vetcare.core.errors import DuplicateEmail, MalformedInput
from vetcare.core.security import hash_password
from vetcare.db.models.professional import Professional
from vetcare.repositories.profiles import ProfileRepository, normalize_email
from vetcare.schemas.professional import ScheduleEntryIn
from vetcare.services.professional_builder import (
    AGGREGATE_POPULATE,
    build_schedule,
    resolve_species,
)

PROFILE_FIELDS = {"license_number", "name", "surname", "address", "phone", "email", "password"}
NULLABLE_FIELDS = {"address", "phone"}


class ProfessionalService:
    def __init__(self, repository: ProfileRepository, strict_species: bool | None = None):
        self.repository = repository
        self.strict_species = strict_species

    def get(self, professional_id: int) -> Professional:
        return self.repository.get_or_fail(Professional, professional_id, populate=AGGREGATE_POPULATE)

    def list_professionals(self, species_id: int | None = None) -> list[Professional]:
        return self.repository.list_all(Professional, populate=AGGREGATE_POPULATE, species_id=species_id)

    def update(self, professional_id: int, fields: dict[str, Any]) -> Professional:
        """
        Apply a partial update.

        Plain fields present in ``fields`` overwrite the stored value. When
        ``schedule`` or ``species`` is present it replaces the whole
        collection, validated the same way as on creation and before any
        attribute of the professional is touched.
        """
        professional = self.get(professional_id)
        changes = {key: value for key, value in fields.items() if key in PROFILE_FIELDS}
        for key, value in changes.items():
            if value is None and key not in NULLABLE_FIELDS:
                raise MalformedInput(f"{key} cannot be null")

        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
            other = self.repository.find_by_email(Professional, changes["email"])
            if other is not None and other.id != professional.id:
                raise DuplicateEmail()

        schedule = None
        if fields.get("schedule") is not None:
            entries = [ScheduleEntryIn.model_validate(entry) for entry in fields["schedule"]]
            # Built detached; attached below only once everything validated.
            schedule = build_schedule(None, entries)

        species = None
        if fields.get("species") is not None:
            species = resolve_species(self.repository, fields["species"], self.strict_species)

        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))
        for key, value in changes.items():
            setattr(professional, key, value)
        if schedule is not None:
            professional.schedule = schedule
        if species is not None:
            professional.species = species

        self.repository.save(professional)
        return professional

    def remove(self, professional_id: int) -> None:
        # ORM delete so schedule entries go through the unit-of-work cascade.
        professional = self.repository.get_or_fail(Professional, professional_id)
        self.repository.delete_entity(professional)
        logger.info(f"Deleted professional {professional_id}")
