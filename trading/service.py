"""Trading service: validates, executes, records and persists trades.

The service owns the ``UserDirectory`` and reads prices from an injected
``StockRegistry``. Every state change is routed through it and followed by a
full snapshot save when a store is attached.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from models.portfolio import HoldingView, PortfolioSummary
from models.stock import MarketQuote
from models.transaction import (
    Transaction,
    TransactionKind,
    TradeRejection,
    TradeResult,
    TradeSide,
)
from trading.directory import UserDirectory
from trading.errors import PersistenceIOError
from trading.market import StockRegistry
from trading.store import SnapshotStore, load_directory, save_directory

logger = logging.getLogger(__name__)


class TradingService:
    """Stateful front door to the ledger.

    Trade validation failures come back as rejected ``TradeResult`` objects
    (or ``False`` from ``buy_stock`` / ``sell_stock``); they never raise.
    A failed save is logged and the in-memory state stays authoritative.
    """

    def __init__(
        self,
        registry: StockRegistry,
        directory: UserDirectory | None = None,
        store: SnapshotStore | None = None,
    ) -> None:
        self._registry = registry
        self._directory = directory if directory is not None else UserDirectory()
        self._store = store

    @classmethod
    def from_store(cls, registry: StockRegistry, store: SnapshotStore) -> TradingService:
        """Build a service whose directory is restored from *store*."""
        return cls(registry, load_directory(store, registry), store)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def registry(self) -> StockRegistry:
        return self._registry

    @property
    def directory(self) -> UserDirectory:
        return self._directory

    def has_user(self, username: str) -> bool:
        return username in self._directory

    def register_user(self, username: str, initial_balance: Decimal) -> None:
        """Create *username* with *initial_balance* cash and no holdings.

        An existing user of the same name is replaced, not merged. Raises
        ``ValueError`` if the username is empty or spans more than one line.
        """
        self._directory.register(username, initial_balance)
        logger.info("Registered user '%s' with balance %s.", username, initial_balance)
        self.save()

    def buy_stock(self, username: str, symbol: str, quantity: int) -> bool:
        return self.execute_order(username, "buy", symbol, quantity).accepted

    def sell_stock(self, username: str, symbol: str, quantity: int) -> bool:
        return self.execute_order(username, "sell", symbol, quantity).accepted

    def execute_order(
        self,
        username: str,
        side: TradeSide,
        symbol: str,
        quantity: int,
    ) -> TradeResult:
        """Validate and execute one market order at the current price.

        On success the trade is appended to the user's log and the directory
        is saved. On rejection nothing is recorded or saved.
        """
        if side not in ("buy", "sell"):
            return self._reject(TradeRejection.INVALID_SIDE, f"Unknown order side {side!r}.")

        user = self._directory.get(username)
        if user is None:
            return self._reject(TradeRejection.UNKNOWN_USER, f"Unknown user '{username}'.")

        stock = self._registry.lookup(symbol)
        if stock is None:
            return self._reject(TradeRejection.UNKNOWN_SYMBOL, f"Symbol '{symbol}' is not listed.")

        if quantity <= 0:
            return self._reject(
                TradeRejection.INVALID_QUANTITY,
                f"Order quantity must be positive, got {quantity} for {symbol}.",
            )

        price = stock.price
        portfolio = user.portfolio
        if side == "buy":
            if not portfolio.buy(stock, quantity):
                return self._reject(
                    TradeRejection.INSUFFICIENT_FUNDS,
                    f"Insufficient cash to buy {quantity} shares of {symbol} at {price:.2f} "
                    f"(cost {price * quantity:.2f}, available {portfolio.cash_balance:.2f}).",
                )
            kind = TransactionKind.BUY
        elif side == "sell":
            if not portfolio.sell(stock, quantity):
                return self._reject(
                    TradeRejection.INSUFFICIENT_HOLDINGS,
                    f"Cannot sell {quantity} shares of {symbol} - only {portfolio.quantity(symbol)} held.",
                )
            kind = TransactionKind.SELL

        transaction = Transaction(kind=kind, symbol=symbol, quantity=quantity, price=price)
        user.transaction_log.append(transaction)
        logger.info("%s executed for '%s': %s", kind.value, username, transaction.render())
        self.save()

        return TradeResult(
            status="accepted",
            transaction=transaction,
            message=f"{kind.value} {quantity} {symbol} at {price:.2f}.",
        )

    def get_portfolio_summary(self, username: str) -> PortfolioSummary | None:
        """Read-only view of *username*'s account, or ``None`` if unknown."""
        user = self._directory.get(username)
        if user is None:
            return None

        holdings: list[HoldingView] = []
        for symbol, qty in user.portfolio.holdings.items():
            stock = self._registry.lookup(symbol)
            if stock is None:
                holdings.append(HoldingView(symbol=symbol, quantity=qty))
            else:
                holdings.append(
                    HoldingView(
                        symbol=symbol,
                        quantity=qty,
                        price=stock.price,
                        market_value=stock.price * qty,
                    )
                )

        return PortfolioSummary(
            username=username,
            cash=user.portfolio.cash_balance,
            holdings=holdings,
            total_value=user.portfolio.valuation(self._registry),
            transaction_history=user.transaction_log.render_lines(),
        )

    def get_market_snapshot(self) -> list[MarketQuote]:
        return self._registry.quotes()

    def save(self) -> bool:
        """Persist the whole directory. Returns ``False`` if the write failed."""
        if self._store is None:
            return True
        try:
            save_directory(self._store, self._directory)
        except PersistenceIOError as exc:
            logger.error("Error saving portfolio data: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _reject(reason: TradeRejection, message: str) -> TradeResult:
        logger.info("Trade rejected (%s): %s", reason.value, message)
        return TradeResult(status="rejected", reason=reason, message=message)
