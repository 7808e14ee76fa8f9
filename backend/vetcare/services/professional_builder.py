"""Module: professional_builder.

Builds a Professional together with its schedule entries and species links.
The whole aggregate is assembled in memory and handed to the repository in a
single ``save``; any validation failure raises before the session sees a
single row, so a rejected request never leaves partial state behind.
"""

import re
from collections.abc import Iterable

from loguru import logger

from vetcare.core.config import settings
from vetcare.core.errors import DuplicateEmail, InvalidTimeFormat, NotFound
from vetcare.core.security import hash_password
from vetcare.db.models.professional import Professional
from vetcare.db.models.schedule_entry import ScheduleEntry
from vetcare.db.models.species import Species
from vetcare.repositories.profiles import Populate, ProfileRepository, normalize_email
from vetcare.schemas.professional import ProfessionalCreate, ScheduleEntryIn

TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)

AGGREGATE_POPULATE = (Populate.SCHEDULE, Populate.SPECIES)


def normalize_time(value: str) -> str:
    """Trim ``value`` and check it is a zero-padded ``HH:MM`` string."""
    candidate = value.strip()
    if not TIME_PATTERN.fullmatch(candidate):
        raise InvalidTimeFormat(f"Invalid time {value!r}: expected HH:MM")
    return candidate


def build_schedule(professional: Professional, entries: Iterable[ScheduleEntryIn]) -> list[ScheduleEntry]:
    # Validate everything first so a bad entry never leaves earlier ones attached.
    normalized = [
        (entry.day, normalize_time(entry.start_time), normalize_time(entry.end_time))
        for entry in entries
    ]
    return [
        ScheduleEntry(day=day, start_time=start, end_time=end, professional=professional)
        for day, start, end in normalized
    ]


def resolve_species(
    repository: ProfileRepository,
    species_ids: Iterable[int],
    strict: bool | None = None,
) -> list[Species]:
    strict = settings.strict_species_references if strict is None else strict
    found, missing = repository.resolve_species(species_ids)
    if missing:
        if strict:
            raise NotFound(f"Species not found: {', '.join(str(sid) for sid in missing)}")
        logger.warning(f"Skipping unknown species ids {missing}")
    return found


class ProfessionalBuilder:
    def __init__(self, repository: ProfileRepository, strict_species: bool | None = None):
        self.repository = repository
        self.strict_species = strict_species

    def build(self, payload: ProfessionalCreate) -> Professional:
        email = normalize_email(payload.email)
        if self.repository.find_by_email(Professional, email) is not None:
            raise DuplicateEmail()

        professional = Professional(
            license_number=payload.license_number,
            name=payload.name,
            surname=payload.surname,
            address=payload.address,
            phone=payload.phone,
            email=email,
            password_hash=hash_password(payload.password),
            schedule=[],
            species=[],
        )

        # Backrefs link each entry into professional.schedule as it is built.
        build_schedule(professional, payload.schedule)
        professional.species.extend(resolve_species(self.repository, payload.species, self.strict_species))

        self.repository.save(professional)
        logger.info(
            f"Created professional {professional.id} with {len(professional.schedule)} schedule entries "
            f"and {len(professional.species)} species"
        )
        return self.repository.get_or_fail(Professional, professional.id, populate=AGGREGATE_POPULATE)
