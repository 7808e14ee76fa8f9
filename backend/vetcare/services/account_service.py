"""Module: account_service."""

from typing import Any

from loguru import logger

from vetcare.core.errors import AccountNotFound, DuplicateEmail, InvalidCredential, MalformedInput
from vetcare.core.security import create_access_token, hash_password, verify_password
from vetcare.db.models.account import Account
from vetcare.repositories.profiles import Populate, ProfileRepository, normalize_email
from vetcare.schemas.account import AccountCreate, LoginResult

ACCOUNT_FIELDS = {"name", "surname", "email", "phone", "password"}
REQUIRED_FIELDS = ACCOUNT_FIELDS - {"phone"}


class AccountService:
    """Owner account lifecycle: registration, login, partial update and removal."""

    def __init__(self, repository: ProfileRepository):
        self.repository = repository

    def register(self, payload: AccountCreate) -> Account:
        email = normalize_email(payload.email)
        if self.repository.find_by_email(Account, email) is not None:
            raise DuplicateEmail()

        account = Account(
            name=payload.name,
            surname=payload.surname,
            email=email,
            phone=payload.phone,
            password_hash=hash_password(payload.password),
            pets=[],
        )
        self.repository.save(account)
        logger.info(f"Registered account {account.id}")
        return account

    def authenticate(self, email: str, password: str) -> LoginResult:
        account = self.repository.find_by_email(Account, email)
        if account is None:
            raise AccountNotFound()

        if not verify_password(password, account.password_hash):
            logger.info(f"Rejected login for account {account.id}")
            raise InvalidCredential("Incorrect password")

        token = create_access_token(account.id, account.email)
        return LoginResult(email=account.email, token=token, account_id=account.id)

    def get(self, account_id: int) -> Account:
        return self.repository.get_or_fail(Account, account_id, populate=(Populate.PETS,))

    def list_accounts(self) -> list[Account]:
        return self.repository.list_all(Account, populate=(Populate.PETS,))

    def update(self, account_id: int, fields: dict[str, Any]) -> Account:
        """Overwrite only the keys present in ``fields``; everything else is left as is."""
        account = self.repository.get_or_fail(Account, account_id, populate=(Populate.PETS,))
        changes = {key: value for key, value in fields.items() if key in ACCOUNT_FIELDS}
        for key in REQUIRED_FIELDS & changes.keys():
            if changes[key] is None:
                raise MalformedInput(f"{key} cannot be null")

        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
            other = self.repository.find_by_email(Account, changes["email"])
            if other is not None and other.id != account.id:
                raise DuplicateEmail()
        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))

        for key, value in changes.items():
            setattr(account, key, value)

        self.repository.save(account)
        return account

    def remove(self, account_id: int) -> None:
        self.repository.delete(Account, account_id)
