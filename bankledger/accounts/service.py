"""Account service: coordinates EventStore, position allocation and AccountProjector."""

from datetime import UTC, datetime
from uuid import uuid4

from bankledger.accounts.schemas import (
    AccountEventsResponse,
    OpenAccountRequest,
)
from bankledger.events.positions import next_position
from bankledger.events.projector import AccountProjector
from bankledger.events.store import EventStore
from bankledger.models import (
    Account,
    AccountOpened,
    BankAccountEvent,
    EventRecord,
    MoneyCredited,
    MoneyDebited,
    UpdateAccount,
)


class AccountService:
    """Coordinates event store and projector for account reads and writes.

    Writes do not retry: a PositionTakenError from the store propagates to
    the caller, who may reload and try again.
    """

    def __init__(self, store: EventStore, projector: AccountProjector | None = None) -> None:
        self._store = store
        self._projector = projector or AccountProjector()

    async def list_accounts(self) -> list[str]:
        return await self._store.list_account_ids()

    async def get_account(self, account_id: str) -> Account:
        """Project current state. An unknown account projects to the zero-value Account."""
        events = await self._store.load_events(account_id)
        return self._projector.project(account_id, events)

    async def get_events(self, account_id: str) -> AccountEventsResponse:
        events = await self._store.load_events(account_id)
        return AccountEventsResponse(account_id=account_id, events=events)

    async def open_account(self, request: OpenAccountRequest) -> Account:
        """Open an account. Emits AccountOpened at position 0.

        Opening an id that already has events fails with PositionTakenError.
        """
        account_id = request.account_id or str(uuid4())
        event = AccountOpened(
            account_id=account_id,
            position=0,
            time=datetime.now(UTC),
            owner_name=request.owner_name,
        )
        await self._store.append(event)
        return self._projector.project(account_id, [event])

    async def rename_account(self, account_id: str, owner_name: str) -> Account:
        """Change the owner's name. Emits UpdateAccount."""
        return await self._emit(
            account_id,
            lambda position, now: UpdateAccount(
                account_id=account_id, position=position, time=now, owner_name=owner_name
            ),
        )

    async def credit(self, account_id: str, value: float) -> Account:
        """Emits MoneyCredited."""
        return await self._emit(
            account_id,
            lambda position, now: MoneyCredited(
                account_id=account_id, position=position, time=now, value=value
            ),
        )

    async def debit(self, account_id: str, value: float) -> Account:
        """Emits MoneyDebited."""
        return await self._emit(
            account_id,
            lambda position, now: MoneyDebited(
                account_id=account_id, position=position, time=now, value=value
            ),
        )

    async def _emit(self, account_id, build_event) -> Account:
        """Load the log, append one event at the next position, return the new projection."""
        events: list[BankAccountEvent] = await self._store.load_events(account_id)
        if not events:
            raise AccountNotFoundError(account_id)

        event: EventRecord = build_event(next_position(events), datetime.now(UTC))
        await self._store.append(event)
        return self._projector.project(account_id, [*events, event])


class AccountNotFoundError(Exception):
    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")
