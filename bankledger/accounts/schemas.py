"""Request and response schemas for account endpoints."""

from pydantic import Field

from bankledger.models import BankAccountEvent, CamelModel

# -- Requests --


class OpenAccountRequest(CamelModel):
    owner_name: str = Field(min_length=1)
    account_id: str | None = None  # generated when omitted


class RenameAccountRequest(CamelModel):
    owner_name: str = Field(min_length=1)


class MoneyMovementRequest(CamelModel):
    """Request body for POST /accounts/{account_id}/credit and /debit."""

    value: float = Field(gt=0, allow_inf_nan=False)


# -- Responses --


class AccountEventsResponse(CamelModel):
    account_id: str
    events: list[BankAccountEvent]
