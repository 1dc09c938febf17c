"""Error taxonomy for ledger operations."""

from typing import Any


class LedgerError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Input has the right shape but unacceptable values."""


class NotFoundError(LedgerError):
    """Referenced record does not exist for the current user."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class BackendError(LedgerError):
    """The database failed while serving the request."""
