# inventory_console/errors.py
"""
Failure taxonomy shared by every storage adapter.

A lookup that finds nothing is not an error: adapters return ``None``.
Everything below is raised with the backend exception chained as ``__cause__``
and also kept on ``.cause`` for callers that log it.
"""
from __future__ import annotations
from typing import Any, Dict, Optional


class StorageError(Exception):
    """Base class for adapter-level failures."""

    def __init__(
        self,
        message: str,
        *,
        collection: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.collection = collection
        self.cause = cause

    def __str__(self) -> str:
        msg = super().__str__()
        if self.collection:
            msg = f"[{self.collection}] {msg}"
        if self.cause is not None:
            msg = f"{msg}: {self.cause}"
        return msg


class InsertFailure(StorageError):
    pass


class UpdateFailure(StorageError):
    pass


class DeleteFailure(StorageError):
    pass


class ConnectionFailure(StorageError):
    """Backend unreachable, timed out, or misconfigured."""


class PersistenceFailure(StorageError):
    """
    The local slot could not be written.

    The mutation was already applied in memory; ``record`` holds the result
    the operation would have returned.
    """

    def __init__(self, message: str, *, record: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.record = record
