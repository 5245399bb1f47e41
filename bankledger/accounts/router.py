"""FastAPI routes for reading accounts and recording account events.

Core failures (bad account id, position conflicts, corrupt data) are
LedgerError subclasses and are translated by the app-level handler in
bankledger.main; only service-level errors are handled here.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from bankledger.accounts.schemas import (
    AccountEventsResponse,
    MoneyMovementRequest,
    OpenAccountRequest,
    RenameAccountRequest,
)
from bankledger.accounts.service import AccountNotFoundError, AccountService
from bankledger.models import Account

router = APIRouter(prefix="/accounts", tags=["accounts"])


def get_account_service() -> AccountService:
    """Dependency placeholder, replaced at app startup."""
    raise RuntimeError("AccountService not initialized")


@router.get("")
async def list_accounts(
    service: AccountService = Depends(get_account_service),
) -> list[str]:
    return await service.list_accounts()


@router.post("", status_code=status.HTTP_201_CREATED)
async def open_account(
    request: OpenAccountRequest,
    service: AccountService = Depends(get_account_service),
) -> Account:
    return await service.open_account(request)


@router.get("/{account_id}")
async def get_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> Account:
    return await service.get_account(account_id)


@router.get("/{account_id}/events")
async def get_account_events(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountEventsResponse:
    return await service.get_events(account_id)


@router.patch("/{account_id}")
async def rename_account(
    account_id: str,
    request: RenameAccountRequest,
    service: AccountService = Depends(get_account_service),
) -> Account:
    try:
        return await service.rename_account(account_id, request.owner_name)
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail=f"Account not found: {account_id}")


@router.post("/{account_id}/credit", status_code=status.HTTP_201_CREATED)
async def credit_account(
    account_id: str,
    request: MoneyMovementRequest,
    service: AccountService = Depends(get_account_service),
) -> Account:
    try:
        return await service.credit(account_id, request.value)
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail=f"Account not found: {account_id}")


@router.post("/{account_id}/debit", status_code=status.HTTP_201_CREATED)
async def debit_account(
    account_id: str,
    request: MoneyMovementRequest,
    service: AccountService = Depends(get_account_service),
) -> Account:
    try:
        return await service.debit(account_id, request.value)
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail=f"Account not found: {account_id}")
