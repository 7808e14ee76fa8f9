"""Module: account."""

from pydantic import BaseModel, ConfigDict, Field


class AccountCreate(BaseModel):
    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str | None = None
    password: str = Field(min_length=1)


# Every field optional: only the ones the client sends are applied.
class AccountUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    surname: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=3)
    phone: str | None = None
    password: str | None = Field(default=None, min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResult(BaseModel):
    email: str
    token: str
    account_id: int


class PetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    species_id: int | None = None


class AccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    surname: str
    email: str
    phone: str | None = None
    pets: list[PetOut] = []
