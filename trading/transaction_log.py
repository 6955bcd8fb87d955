"""Append-only per-user trade history."""

from __future__ import annotations

from collections.abc import Iterator

from models.transaction import Transaction


class TransactionLog:
    """Ordered record of executed trades.

    Appends happen synchronously at trade time, so insertion order is
    chronological order. Entries are never edited or removed.
    """

    def __init__(self) -> None:
        self._entries: list[Transaction] = []

    def append(self, transaction: Transaction) -> None:
        self._entries.append(transaction)

    def entries(self) -> tuple[Transaction, ...]:
        return tuple(self._entries)

    def render_lines(self) -> list[str]:
        """One rendered line per transaction, oldest first."""
        return [t.render() for t in self._entries]

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
