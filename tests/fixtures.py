"""Shared test helpers: event builders and raw storage writers."""

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any
from uuid import uuid4

from httpx import AsyncClient

from bankledger.models import (
    AccountOpened,
    MoneyCredited,
    MoneyDebited,
    UpdateAccount,
)

BASE_TIME = datetime(2020, 1, 1, 10, 0, tzinfo=UTC)


def _time(position: int) -> datetime:
    """Deterministic timestamps: one minute apart per position."""
    return BASE_TIME + timedelta(minutes=position)


def make_account_opened(
    account_id: str | None = None,
    owner_name: str = "Alice",
    time: datetime | None = None,
) -> AccountOpened:
    """Create an AccountOpened event at position 0."""
    return AccountOpened(
        account_id=account_id or str(uuid4()),
        position=0,
        time=time or _time(0),
        owner_name=owner_name,
    )


def make_update_account(account_id: str, position: int, owner_name: str = "Bob") -> UpdateAccount:
    return UpdateAccount(
        account_id=account_id, position=position, time=_time(position), owner_name=owner_name
    )


def make_money_credited(account_id: str, position: int, value: float) -> MoneyCredited:
    return MoneyCredited(
        account_id=account_id, position=position, time=_time(position), value=value
    )


def make_money_debited(account_id: str, position: int, value: float) -> MoneyDebited:
    return MoneyDebited(
        account_id=account_id, position=position, time=_time(position), value=value
    )


def make_history(account_id: str, *movements: tuple[str, float]) -> list:
    """AccountOpened followed by ("credit"|"debit", value) movements at positions 1..n."""
    events: list = [make_account_opened(account_id)]
    for position, (kind, value) in enumerate(movements, start=1):
        if kind == "credit":
            events.append(make_money_credited(account_id, position, value))
        else:
            events.append(make_money_debited(account_id, position, value))
    return events


def write_raw_event(events_dir: Path, account_id: str, name: str, content: dict[str, Any] | str) -> Path:
    """Write an entry straight into a bucket, bypassing the store."""
    bucket = events_dir / account_id
    bucket.mkdir(parents=True, exist_ok=True)
    path = bucket / name
    path.write_text(content if isinstance(content, str) else json.dumps(content, indent=2))
    return path


# -- API-level helpers --


async def open_test_account(
    client: AsyncClient,
    owner_name: str = "Alice",
    account_id: str | None = None,
) -> dict:
    """Open an account via the API and return the response JSON."""
    body: dict = {"ownerName": owner_name}
    if account_id is not None:
        body["accountId"] = account_id
    resp = await client.post("/accounts", json=body)
    assert resp.status_code == 201
    return resp.json()
