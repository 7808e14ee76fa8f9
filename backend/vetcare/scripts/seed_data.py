"""Module: seed_data."""

import random
import string

from faker import Faker
from loguru import logger
from sqlalchemy.orm import Session

from vetcare.core.logging_config import configure_logging
from vetcare.db.init_db import init_db
from vetcare.db.models.account import Account
from vetcare.db.models.pet import Pet
from vetcare.db.models.species import Species
from vetcare.db.session import SessionLocal, engine
from vetcare.repositories.profiles import ProfileRepository
from vetcare.schemas.account import AccountCreate
from vetcare.schemas.professional import ProfessionalCreate, ScheduleEntryIn
from vetcare.services.account_service import AccountService
from vetcare.services.professional_builder import ProfessionalBuilder
from vetcare.services.rating_aggregator import RatingAggregator

fake = Faker()

SPECIES = ["Dog", "Cat", "Rabbit", "Bird", "Reptile"]
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
SHIFTS = [("08:00", "12:00"), ("09:00", "13:00"), ("14:00", "18:00"), ("16:00", "20:00")]


# Shared helpers used by multiple seed builders.
def generate_password(length: int = 12) -> str:
    chars = string.ascii_letters + string.digits
    return "".join(random.choice(chars) for _ in range(length))


def seed_species(session: Session) -> list[Species]:
    repository = ProfileRepository(session)
    rows = []
    for name in SPECIES:
        species = repository.find_species_by_name(name) or repository.save(Species(name=name))
        rows.append(species)
    return rows


def seed_owners(session: Session, species: list[Species], n: int) -> list[Account]:
    service = AccountService(ProfileRepository(session))
    owners = []
    for i in range(n):
        account = service.register(
            AccountCreate(
                name=fake.first_name(),
                surname=fake.last_name(),
                email=f"owner{i}.{fake.user_name()}@example.com",
                phone=fake.phone_number(),
                password=generate_password(),
            )
        )
        for _ in range(random.randint(0, 2)):
            account.pets.append(Pet(name=fake.first_name(), species_id=random.choice(species).id))
        session.commit()
        owners.append(account)
    return owners


def seed_professionals(session: Session, species: list[Species], n: int) -> list[int]:
    builder = ProfessionalBuilder(ProfileRepository(session))
    ids = []
    for i in range(n):
        schedule = []
        for day in random.sample(WEEKDAYS, k=random.randint(1, 3)):
            start, end = random.choice(SHIFTS)
            schedule.append(ScheduleEntryIn(day=day, start_time=start, end_time=end))
        professional = builder.build(
            ProfessionalCreate(
                license_number=f"MP-{fake.unique.random_number(digits=6, fix_len=True)}",
                name=fake.first_name(),
                surname=fake.last_name(),
                address=fake.street_address(),
                phone=fake.phone_number(),
                email=f"vet{i}.{fake.user_name()}@example.com",
                password=generate_password(),
                schedule=schedule,
                species=[s.id for s in random.sample(species, k=random.randint(1, len(species)))],
            )
        )
        ids.append(professional.id)
    return ids


def seed_ratings(session: Session, professional_ids: list[int], owners: list[Account]) -> int:
    aggregator = RatingAggregator(ProfileRepository(session))
    n = 0
    for pid in professional_ids:
        for _ in range(random.randint(0, 5)):
            author = random.choice(owners) if owners else None
            aggregator.record(pid, random.randint(1, 5), author_id=author.id if author else None)
            n += 1
    return n


def run(session: Session, owners_n: int = 20, professionals_n: int = 8) -> dict[str, int]:
    species = seed_species(session)
    owners = seed_owners(session, species, owners_n)
    professional_ids = seed_professionals(session, species, professionals_n)
    ratings_n = seed_ratings(session, professional_ids, owners)
    return {
        "species": len(species),
        "owners": len(owners),
        "professionals": len(professional_ids),
        "ratings": ratings_n,
    }


if __name__ == "__main__":
    # python -m vetcare.scripts.seed_data
    configure_logging()
    init_db(engine)
    session = SessionLocal()
    try:
        counts = run(session)
        logger.info(f"Done. {counts}")
    finally:
        session.close()
