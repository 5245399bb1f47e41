"""Canonical data structures and event types for bankledger.

Defined once here, referenced everywhere else. Event records are the
immutable, persisted unit of history; the Account is the projection the
projector folds them into and is never written to disk.

Python attributes are snake_case. Every model serializes with camelCase
aliases, which is also the on-disk field naming of event records.
"""

from datetime import UTC, datetime, timedelta
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for all models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Event records, one per event type
# ---------------------------------------------------------------------------


class EventRecord(CamelModel):
    """Fields shared by every event. Records are frozen once built."""

    model_config = ConfigDict(frozen=True)

    account_id: str = Field(min_length=1)
    position: int = Field(ge=0)
    time: datetime


class AccountOpened(EventRecord):
    type: Literal["AccountOpened"] = "AccountOpened"
    owner_name: str

    @field_validator("position")
    @classmethod
    def _opens_at_zero(cls, value: int) -> int:
        if value != 0:
            raise ValueError("AccountOpened must be at position 0")
        return value


class UpdateAccount(EventRecord):
    type: Literal["UpdateAccount"] = "UpdateAccount"
    owner_name: str


class MoneyDebited(EventRecord):
    type: Literal["MoneyDebited"] = "MoneyDebited"
    value: float = Field(gt=0, allow_inf_nan=False)


class MoneyCredited(EventRecord):
    type: Literal["MoneyCredited"] = "MoneyCredited"
    value: float = Field(gt=0, allow_inf_nan=False)


BankAccountEvent = Annotated[
    AccountOpened | UpdateAccount | MoneyDebited | MoneyCredited,
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Event type registry
# ---------------------------------------------------------------------------

EVENT_TYPES: dict[str, type[EventRecord]] = {
    "AccountOpened": AccountOpened,
    "UpdateAccount": UpdateAccount,
    "MoneyDebited": MoneyDebited,
    "MoneyCredited": MoneyCredited,
}

_event_adapter: TypeAdapter[BankAccountEvent] = TypeAdapter(BankAccountEvent)


def parse_event(data: dict[str, Any] | str | bytes) -> BankAccountEvent:
    """Validate one raw record (decoded dict or JSON text) into its event model.

    Raises pydantic.ValidationError for unknown types or bad fields.
    """
    if isinstance(data, (str, bytes)):
        return _event_adapter.validate_json(data)
    return _event_adapter.validate_python(data)


def serialize_event(event: EventRecord) -> str:
    """Serialize an event record to its on-disk JSON form."""
    return event.model_dump_json(by_alias=True, indent=2)


# ---------------------------------------------------------------------------
# Account projection
# ---------------------------------------------------------------------------

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Transaction(CamelModel):
    type: Literal["debit", "credit"]
    value: float
    timestamp: int  # epoch millis


class Account(CamelModel):
    """Current state of an account, derived by folding its events."""

    status: Literal["open"] = "open"
    account_id: str = ""
    owner_name: str = ""
    opened_at: int = 0  # epoch millis
    transactions: list[Transaction] = Field(default_factory=list)
    is_overdrawn: bool = False
    balance: float = 0


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the epoch. Naive datetimes are treated as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - _EPOCH) // timedelta(milliseconds=1)
