"""Position allocation for the next event in an account's log."""

from collections.abc import Sequence

from bankledger.models import EventRecord


def next_position(events: Sequence[EventRecord]) -> int:
    """Position for the next event: 0 for an empty log, else last position + 1.

    Advisory only. Two writers can compute the same value; the store's
    create-if-absent append decides which one wins.
    """
    if not events:
        return 0
    return events[-1].position + 1
