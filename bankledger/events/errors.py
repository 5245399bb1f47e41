"""Failure kinds raised by the event store and projector.

Messages are generic on purpose: the underlying cause is logged where the
error is raised and never carried in the exception text.
"""


class LedgerError(Exception):
    kind = "internal_error"


class BadRequestError(LedgerError):
    kind = "bad_request"


class ConflictError(LedgerError):
    kind = "conflict"


class InternalError(LedgerError):
    kind = "internal_error"


class InvalidAccountIdError(BadRequestError):
    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__("Account id not provided or invalid")


class PositionTakenError(ConflictError):
    def __init__(self, account_id: str, position: int) -> None:
        self.account_id = account_id
        self.position = position
        super().__init__(f"Position {position} already taken for account {account_id}")


class CorruptEventError(InternalError):
    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__("Failed to process the data")


class StorageError(InternalError):
    def __init__(self, account_id: str | None = None) -> None:
        self.account_id = account_id
        super().__init__("Failed to access event storage")


class UnknownEventTypeError(InternalError):
    def __init__(self, account_id: str, event_type: str) -> None:
        self.account_id = account_id
        self.event_type = event_type
        super().__init__("Failed when processing account")
