"""Module: professional."""

from pydantic import BaseModel, ConfigDict, Field


# Times stay plain strings here; the builder trims and validates them.
class ScheduleEntryIn(BaseModel):
    day: str = Field(min_length=1)
    start_time: str
    end_time: str


class ProfessionalCreate(BaseModel):
    license_number: str = Field(min_length=1)
    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    address: str | None = None
    phone: str | None = None
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    schedule: list[ScheduleEntryIn] = []
    species: list[int] = []


class ProfessionalUpdate(BaseModel):
    license_number: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1)
    surname: str | None = Field(default=None, min_length=1)
    address: str | None = None
    phone: str | None = None
    email: str | None = Field(default=None, min_length=3)
    password: str | None = Field(default=None, min_length=1)
    schedule: list[ScheduleEntryIn] | None = None
    species: list[int] | None = None


class ScheduleEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day: str
    start_time: str
    end_time: str


class SpeciesOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class SpeciesCreate(BaseModel):
    name: str = Field(min_length=1, max_length=80)


class ProfessionalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    license_number: str
    name: str
    surname: str
    address: str | None = None
    phone: str | None = None
    email: str
    rating: float | None = None
    schedule: list[ScheduleEntryOut] = []
    species: list[SpeciesOut] = []
