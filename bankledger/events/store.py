"""Append-only event store backed by one JSON file per event.

Layout: <root>/<account_id>/<position>.json. A record is written once, in
create-if-absent mode, and never modified or removed afterwards.
"""

import asyncio
import logging
import os
from pathlib import Path
from uuid import uuid4

from pydantic import ValidationError

from bankledger.events.errors import (
    CorruptEventError,
    InvalidAccountIdError,
    PositionTakenError,
    StorageError,
)
from bankledger.models import BankAccountEvent, EventRecord, parse_event, serialize_event

logger = logging.getLogger(__name__)

EVENT_SUFFIX = ".json"

# Longest single path component most filesystems accept, in bytes.
MAX_ACCOUNT_ID_BYTES = 255


class EventStore:
    """Append-only event store. The write side of the ledger."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    async def append(self, event: EventRecord) -> None:
        """Durably write an event at its (account_id, position) key.

        Raises PositionTakenError if a record already exists at that key;
        the existing record is left untouched.
        """
        path = self._bucket(event.account_id) / f"{event.position}{EVENT_SUFFIX}"
        logger.info("Writing new event to %s", path)
        try:
            await asyncio.to_thread(_write_once, path, serialize_event(event))
        except FileExistsError:
            logger.warning(
                "Position %d already taken for account %s",
                event.position,
                event.account_id,
            )
            raise PositionTakenError(event.account_id, event.position) from None
        except OSError:
            logger.exception("Failed to write event to %s", path)
            raise StorageError(event.account_id) from None

    async def load_events(self, account_id: str) -> list[BankAccountEvent]:
        """Get all events for an account, ordered by position.

        An account that was never written to has no bucket and yields [].
        """
        bucket = self._bucket(account_id)
        try:
            entries = await asyncio.to_thread(_read_bucket, bucket)
        except OSError:
            logger.exception("Failed to read events from %s", bucket)
            raise StorageError(account_id) from None

        events: list[BankAccountEvent] = []
        for name, content in entries:
            try:
                event = parse_event(content)
            except (ValidationError, UnicodeDecodeError):
                logger.exception("Corrupt event %s for account %s", name, account_id)
                raise CorruptEventError(account_id) from None
            if name != f"{event.position}{EVENT_SUFFIX}" or event.account_id != account_id:
                logger.error(
                    "Event %s for account %s is stored under the wrong key "
                    "(accountId=%r, position=%d)",
                    name,
                    account_id,
                    event.account_id,
                    event.position,
                )
                raise CorruptEventError(account_id)
            events.append(event)

        # Directory listing order is arbitrary; position is the only order.
        events.sort(key=lambda e: e.position)
        return events

    async def list_account_ids(self) -> list[str]:
        """Names of all account buckets, sorted."""
        try:
            return await asyncio.to_thread(_list_buckets, self._root)
        except OSError:
            logger.exception("Failed to list accounts under %s", self._root)
            raise StorageError() from None

    def _bucket(self, account_id: str) -> Path:
        """Resolve an account's directory. Rejects ids that are not a single path component."""
        if (
            not account_id
            or not account_id.strip()
            or account_id in (".", "..")
            or "/" in account_id
            or "\\" in account_id
            or "\x00" in account_id
            or len(account_id.encode("utf-8", "surrogatepass")) > MAX_ACCOUNT_ID_BYTES
        ):
            raise InvalidAccountIdError(account_id)
        return self._root / account_id


def _write_once(path: Path, content: str) -> None:
    """Write content to path, failing with FileExistsError if path exists.

    The record is written and synced to a temp file first, then hard-linked
    into place, so readers never observe a partially written record.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.stem}.{uuid4().hex}.tmp")
    try:
        with open(tmp, "x", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.link(tmp, path)
    finally:
        tmp.unlink(missing_ok=True)


def _read_bucket(bucket: Path) -> list[tuple[str, bytes]]:
    """Read (file name, content) for every event file in a bucket."""
    try:
        entries = list(bucket.iterdir())
    except FileNotFoundError:
        return []
    return [
        (entry.name, entry.read_bytes())
        for entry in entries
        if entry.is_file() and entry.suffix == EVENT_SUFFIX
    ]


def _list_buckets(root: Path) -> list[str]:
    try:
        entries = list(root.iterdir())
    except FileNotFoundError:
        return []
    return sorted(entry.name for entry in entries if entry.is_dir())
