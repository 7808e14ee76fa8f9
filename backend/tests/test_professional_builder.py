"""Unit tests for building and maintaining professional aggregates."""

import pytest
from sqlalchemy import func, select

from vetcare.core.errors import DuplicateEmail, InvalidTimeFormat, MalformedInput, NotFound
from vetcare.core.security import verify_password
from vetcare.db.models.professional import Professional, professional_species
from vetcare.db.models.schedule_entry import ScheduleEntry
from vetcare.repositories.profiles import Populate
from vetcare.schemas.professional import ScheduleEntryIn
from vetcare.services.professional_builder import ProfessionalBuilder, normalize_time
from vetcare.services.professional_service import ProfessionalService


def _count(session, table) -> int:
    return session.execute(select(func.count()).select_from(table)).scalar_one()


@pytest.fixture
def builder(repository) -> ProfessionalBuilder:
    return ProfessionalBuilder(repository)


@pytest.mark.unit
class TestTimeFormat:
    @pytest.mark.parametrize("value, expected", [("09:00", "09:00"), (" 18:30 ", "18:30"), ("00:00", "00:00")])
    def test_valid_times_are_trimmed(self, value, expected):
        assert normalize_time(value) == expected

    @pytest.mark.parametrize("value", ["9:00", "09-00", "0900", "09:00:00", "", "ab:cd", "09:00\n1"])
    def test_invalid_times(self, value):
        with pytest.raises(InvalidTimeFormat):
            normalize_time(value)


@pytest.mark.unit
class TestBuild:
    def test_round_trip_with_schedule_and_species(self, builder, repository, db_session, professional_payload, species):
        created = builder.build(professional_payload)

        db_session.expire_all()
        loaded = repository.find_by_id(
            Professional, created.id, populate=(Populate.SCHEDULE, Populate.SPECIES)
        )
        assert [(e.day, e.start_time, e.end_time) for e in loaded.schedule] == [
            ("Monday", "09:00", "13:00"),
            ("Thursday", "14:00", "18:30"),
        ]
        assert [s.id for s in loaded.species] == [species[0].id]
        assert all(entry.professional is loaded for entry in loaded.schedule)
        assert loaded.rating is None
        assert verify_password("vet-pass", loaded.password_hash)

    def test_lookup_by_email_after_build(self, builder, repository, professional_payload):
        created = builder.build(professional_payload)

        found = repository.find_by_email(Professional, "TOMAS.VET@example.com")
        assert found.id == created.id
        assert found.license_number == "MP-1001"

    def test_duplicate_email_persists_nothing(self, builder, db_session, professional_payload, species):
        builder.build(professional_payload)
        professional_payload.species = [species[1].id, species[2].id]

        with pytest.raises(DuplicateEmail):
            builder.build(professional_payload)

        assert _count(db_session, Professional) == 1
        assert _count(db_session, ScheduleEntry) == 2
        assert _count(db_session, professional_species) == 1

    def test_unique_index_rejects_duplicate_missed_by_lookup(
        self, builder, repository, db_session, professional_payload, monkeypatch
    ):
        builder.build(professional_payload)
        monkeypatch.setattr(repository, "find_by_email", lambda kind, email: None)

        with pytest.raises(DuplicateEmail):
            builder.build(professional_payload)

        assert _count(db_session, Professional) == 1
        assert _count(db_session, ScheduleEntry) == 2

    @pytest.mark.parametrize("bad_time", ["9:00", "09-00"])
    def test_malformed_time_aborts_whole_aggregate(self, builder, db_session, professional_payload, bad_time):
        professional_payload.schedule.append(ScheduleEntryIn(day="Friday", start_time=bad_time, end_time="12:00"))

        with pytest.raises(InvalidTimeFormat):
            builder.build(professional_payload)

        assert _count(db_session, Professional) == 0
        assert _count(db_session, ScheduleEntry) == 0
        assert _count(db_session, professional_species) == 0

        professional_payload.schedule[-1] = ScheduleEntryIn(day="Friday", start_time="09:00", end_time="12:00")
        created = builder.build(professional_payload)
        assert len(created.schedule) == 3

    def test_unknown_species_is_rejected_by_default(self, builder, db_session, professional_payload):
        professional_payload.species = [professional_payload.species[0], 999]

        with pytest.raises(NotFound, match="999"):
            builder.build(professional_payload)
        assert _count(db_session, Professional) == 0

    def test_unknown_species_can_be_skipped(self, repository, professional_payload, species):
        professional_payload.species = [species[1].id, 999]

        created = ProfessionalBuilder(repository, strict_species=False).build(professional_payload)

        assert [s.id for s in created.species] == [species[1].id]

    def test_no_schedule_or_species(self, builder, professional_payload):
        professional_payload.schedule = []
        professional_payload.species = []

        created = builder.build(professional_payload)

        assert created.schedule == []
        assert created.species == []

    def test_populate_is_checked_per_kind(self, repository):
        with pytest.raises(ValueError):
            repository.find_by_id(Professional, 1, populate=(Populate.PETS,))


@pytest.mark.unit
class TestProfessionalService:
    def test_list_filters_by_species(self, builder, repository, professional_payload, species):
        first = builder.build(professional_payload)
        professional_payload.email = "second@example.com"
        professional_payload.species = [species[1].id]
        second = builder.build(professional_payload)
        service = ProfessionalService(repository)

        assert [p.id for p in service.list_professionals(species_id=species[0].id)] == [first.id]
        assert [p.id for p in service.list_professionals(species_id=species[1].id)] == [second.id]
        assert [p.id for p in service.list_professionals()] == [first.id, second.id]

    def test_update_replaces_schedule_and_species(self, builder, repository, db_session, professional_payload, species):
        created = builder.build(professional_payload)
        service = ProfessionalService(repository)

        service.update(
            created.id,
            {
                "phone": "000",
                "schedule": [{"day": "Saturday", "start_time": "10:00", "end_time": "12:00"}],
                "species": [species[2].id],
            },
        )

        db_session.expire_all()
        loaded = service.get(created.id)
        assert loaded.phone == "000"
        assert loaded.name == "Tomas"
        assert [(e.day, e.start_time) for e in loaded.schedule] == [("Saturday", "10:00")]
        assert [s.id for s in loaded.species] == [species[2].id]
        assert _count(db_session, ScheduleEntry) == 1

    def test_update_with_bad_time_changes_nothing(self, builder, repository, db_session, professional_payload):
        created = builder.build(professional_payload)
        service = ProfessionalService(repository)

        with pytest.raises(InvalidTimeFormat):
            service.update(
                created.id,
                {"name": "Changed", "schedule": [{"day": "Monday", "start_time": "7:00", "end_time": "09:00"}]},
            )

        db_session.rollback()
        db_session.expire_all()
        loaded = service.get(created.id)
        assert loaded.name == "Tomas"
        assert len(loaded.schedule) == 2

    def test_update_rejects_null_name(self, builder, repository, professional_payload):
        created = builder.build(professional_payload)

        with pytest.raises(MalformedInput):
            ProfessionalService(repository).update(created.id, {"name": None})

    def test_remove_cascades_schedule(self, builder, repository, db_session, professional_payload, species):
        created = builder.build(professional_payload)

        ProfessionalService(repository).remove(created.id)

        assert _count(db_session, Professional) == 0
        assert _count(db_session, ScheduleEntry) == 0
        assert _count(db_session, professional_species) == 0
        assert len(repository.list_species()) == len(species)

    def test_remove_missing(self, repository):
        with pytest.raises(NotFound):
            ProfessionalService(repository).remove(77)
