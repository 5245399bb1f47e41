"""Event sourcing: append-only event store and account projection."""

from bankledger.events.positions import next_position
from bankledger.events.projector import AccountProjector
from bankledger.events.store import EventStore

__all__ = ["AccountProjector", "EventStore", "next_position"]
