"""Module: accounts."""

from fastapi import APIRouter, Depends

from vetcare.api.v1.routes.deps import get_repository, parse_id
from vetcare.repositories.profiles import ProfileRepository
from vetcare.schemas.account import AccountOut, AccountUpdate
from vetcare.schemas.common import ApiResponse
from vetcare.services.account_service import AccountService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[AccountOut]])
def list_accounts(repository: ProfileRepository = Depends(get_repository)):
    accounts = AccountService(repository).list_accounts()
    return {"message": "found all accounts", "data": [AccountOut.model_validate(a) for a in accounts]}


@router.get("/{account_id}", response_model=ApiResponse[AccountOut])
def get_account(account_id: str, repository: ProfileRepository = Depends(get_repository)):
    account = AccountService(repository).get(parse_id(account_id, "account_id"))
    return {"message": "found account", "data": AccountOut.model_validate(account)}


@router.patch("/{account_id}", response_model=ApiResponse[AccountOut])
def update_account(
    account_id: str,
    payload: AccountUpdate,
    repository: ProfileRepository = Depends(get_repository),
):
    # exclude_unset: only fields the client actually sent reach the service.
    fields = payload.model_dump(exclude_unset=True)
    account = AccountService(repository).update(parse_id(account_id, "account_id"), fields)
    return {"message": "account updated", "data": AccountOut.model_validate(account)}


@router.delete("/{account_id}", response_model=ApiResponse[None])
def delete_account(account_id: str, repository: ProfileRepository = Depends(get_repository)):
    AccountService(repository).remove(parse_id(account_id, "account_id"))
    return {"message": "account deleted", "data": None}
