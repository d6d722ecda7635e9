"""
Account endpoints.

Read-only views of accounts and their beneficiaries.
"""

from typing import List

from fastapi import APIRouter

from rewards.api.dependencies import UnitOfWorkFactoryDep
from rewards.exceptions import AccountNotFound, NotFound
from rewards.schemas.account import AccountResponse, AccountSummary, BeneficiaryResponse
from rewards.schemas.error import ErrorResponse

router = APIRouter(tags=["accounts"])


@router.get(
    "/accounts",
    response_model=List[AccountSummary],
    summary="List accounts",
)
async def list_accounts(uow_factory: UnitOfWorkFactoryDep) -> List[AccountSummary]:
    async with uow_factory() as uow:
        accounts = await uow.accounts.find_all()
    return [AccountSummary.model_validate(account) for account in accounts]


@router.get(
    "/accounts/{account_number}",
    response_model=AccountResponse,
    summary="Get an account with its beneficiaries",
    responses={404: {"model": ErrorResponse}},
)
async def get_account(account_number: str, uow_factory: UnitOfWorkFactoryDep) -> AccountResponse:
    async with uow_factory() as uow:
        account = await uow.accounts.find_by_number(account_number)
    if account is None:
        raise AccountNotFound(account_number)
    return AccountResponse.model_validate(account)


@router.get(
    "/accounts/{account_number}/beneficiaries/{name}",
    response_model=BeneficiaryResponse,
    summary="Get one beneficiary of an account",
    responses={404: {"model": ErrorResponse}},
)
async def get_beneficiary(
    account_number: str,
    name: str,
    uow_factory: UnitOfWorkFactoryDep,
) -> BeneficiaryResponse:
    async with uow_factory() as uow:
        account = await uow.accounts.find_by_number(account_number)
    if account is None:
        raise AccountNotFound(account_number)
    try:
        beneficiary = account.get_beneficiary(name)
    except KeyError:
        raise NotFound(f"Account '{account_number}' has no beneficiary named '{name}'")
    return BeneficiaryResponse.model_validate(beneficiary)
