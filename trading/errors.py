"""Exceptions raised by the storage and snapshot layers.

Trade validation failures (insufficient funds, unknown symbol, ...) are not
exceptions; they come back as ``TradeRejection`` values on a ``TradeResult``.
"""

from __future__ import annotations

from pathlib import Path


class LedgerError(Exception):
    """Base class for ledger persistence errors."""


class PersistenceIOError(LedgerError):
    """The snapshot file could not be read or written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class MalformedSnapshot(LedgerError):
    """A user record in the snapshot could not be parsed."""

    def __init__(self, message: str, line_no: int | None = None, username: str | None = None) -> None:
        self.line_no = line_no
        self.username = username
        location = f" (line {line_no})" if line_no is not None else ""
        super().__init__(f"{message}{location}")
