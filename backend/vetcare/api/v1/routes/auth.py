"""Module: auth."""

from fastapi import APIRouter, Depends, Header

from vetcare.core.errors import AccountNotFound, InvalidCredential
from vetcare.core.security import decode_access_token
from vetcare.api.v1.routes.deps import get_repository
from vetcare.db.models.account import Account
from vetcare.repositories.profiles import Populate, ProfileRepository
from vetcare.schemas.account import AccountCreate, AccountOut, LoginRequest, LoginResult
from vetcare.schemas.common import ApiResponse
from vetcare.services.account_service import AccountService

router = APIRouter()


def _get_token_value(authorization: str | None) -> str:
    if not authorization:
        raise InvalidCredential("Missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise InvalidCredential("Invalid Authorization header")

    return parts[1].strip()


@router.post("/register", response_model=ApiResponse[AccountOut], status_code=201)
def register(payload: AccountCreate, repository: ProfileRepository = Depends(get_repository)):
    account = AccountService(repository).register(payload)
    return {"message": "Account created", "data": AccountOut.model_validate(account)}


@router.post("/login", response_model=ApiResponse[LoginResult])
def login(payload: LoginRequest, repository: ProfileRepository = Depends(get_repository)):
    result = AccountService(repository).authenticate(payload.email, payload.password)
    return {"message": "Login successful", "data": result}


@router.get("/me", response_model=ApiResponse[AccountOut])
def me(
    authorization: str | None = Header(default=None),
    repository: ProfileRepository = Depends(get_repository),
):
    token = decode_access_token(_get_token_value(authorization))
    account = repository.find_by_id(Account, token.subject_id, populate=(Populate.PETS,))
    if account is None:
        raise AccountNotFound()

    return {"message": "found account", "data": AccountOut.model_validate(account)}
