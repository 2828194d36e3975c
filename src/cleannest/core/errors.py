# src/cleannest/core/errors.py

from __future__ import annotations


class CleanNestError(Exception):
    """Base class for errors raised by the core."""


class SessionScopeError(CleanNestError, RuntimeError):
    """The auth session was used outside of an open scope."""


class ValidationError(CleanNestError, ValueError):
    """Add input or patch failed validation; nothing was changed."""


class RecordNotFoundError(CleanNestError, KeyError):
    """No record with the given id (raised only when strict ids are enabled)."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id

    def __str__(self) -> str:
        # KeyError would quote the message.
        return str(self.args[0])
