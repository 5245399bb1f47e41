"""Account projector: folds an ordered event log into current account state.

The read side of the ledger. Pure and synchronous: no I/O, no state kept
between calls. Events must already be ordered by position.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from bankledger.events.errors import UnknownEventTypeError
from bankledger.models import (
    Account,
    AccountOpened,
    MoneyCredited,
    MoneyDebited,
    Transaction,
    UpdateAccount,
    epoch_millis,
)

logger = logging.getLogger(__name__)


class AccountProjector:
    """Projects an account's events into an Account."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[Account, Any], None]] = {
            "AccountOpened": self._handle_account_opened,
            "UpdateAccount": self._handle_update_account,
            "MoneyDebited": self._handle_money_debited,
            "MoneyCredited": self._handle_money_credited,
        }

    def project(self, account_id: str, events: Iterable[Any]) -> Account:
        """Fold events left to right starting from the zero-value Account.

        Raises UnknownEventTypeError on an event kind with no handler.
        """
        account = Account()
        for event in events:
            event_type = getattr(event, "type", None)
            handler = self._handlers.get(event_type)
            if handler is None:
                logger.error(
                    "Invalid type %r of event %r when processing account: %s",
                    event_type,
                    event,
                    account_id,
                )
                raise UnknownEventTypeError(account_id, str(event_type))
            handler(account, event)
        return account

    @staticmethod
    def _handle_account_opened(account: Account, event: AccountOpened) -> None:
        account.account_id = event.account_id
        account.owner_name = event.owner_name
        account.opened_at = epoch_millis(event.time)

    @staticmethod
    def _handle_update_account(account: Account, event: UpdateAccount) -> None:
        account.owner_name = event.owner_name

    @staticmethod
    def _handle_money_debited(account: Account, event: MoneyDebited) -> None:
        account.transactions.append(
            Transaction(type="debit", value=event.value, timestamp=epoch_millis(event.time))
        )
        account.balance -= event.value
        if account.balance < 0:
            account.is_overdrawn = True

    @staticmethod
    def _handle_money_credited(account: Account, event: MoneyCredited) -> None:
        """Credits clear the overdraft only once the balance is strictly positive.

        A credit landing exactly on 0 leaves is_overdrawn as it was.
        """
        account.transactions.append(
            Transaction(type="credit", value=event.value, timestamp=epoch_millis(event.time))
        )
        account.balance += event.value
        if account.balance > 0:
            account.is_overdrawn = False
