"""User accounts and the directory that owns them.

The ``UserDirectory`` is the single root that snapshot save/load operate on.
It keeps insertion order, so encoding the same directory twice yields the
same user order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from decimal import Decimal

from trading.portfolio import Portfolio
from trading.transaction_log import TransactionLog

logger = logging.getLogger(__name__)


class User:
    """A username with its exclusively-owned portfolio and trade history."""

    def __init__(self, username: str, initial_balance: Decimal = Decimal("0")) -> None:
        self.username = username
        self.portfolio = Portfolio(initial_balance)
        self.transaction_log = TransactionLog()

    def __repr__(self) -> str:
        return (
            f"User(username={self.username!r}, cash={self.portfolio.cash_balance}, "
            f"holdings={self.portfolio.holdings}, transactions={len(self.transaction_log)})"
        )


class UserDirectory:
    """Mapping username -> ``User``."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def register(self, username: str, initial_balance: Decimal) -> User:
        """Create a fresh user, replacing any existing one with the same name.

        Raises ``ValueError`` for a username the snapshot format cannot hold
        (empty, or containing a line break).
        """
        if not username or "\n" in username or "\r" in username:
            raise ValueError(f"Username must be non-empty and single-line: {username!r}")
        if username in self._users:
            logger.warning("Re-registering '%s'; previous account discarded.", username)
        user = User(username, initial_balance)
        self._users[username] = user
        return user

    def add(self, user: User) -> None:
        """Insert an already-built user (last one wins on name clashes)."""
        self._users[user.username] = user

    def get(self, username: str) -> User | None:
        return self._users.get(username)

    def usernames(self) -> list[str]:
        return list(self._users)

    def __contains__(self, username: object) -> bool:
        return username in self._users

    def __iter__(self) -> Iterator[User]:
        return iter(list(self._users.values()))

    def __len__(self) -> int:
        return len(self._users)
