"""Per-user cash and share ledger.

The portfolio validates and applies buys and sells with all-or-nothing
semantics: a rejected order leaves cash and holdings untouched.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from models.portfolio import PortfolioSnapshot
from models.stock import Stock

if TYPE_CHECKING:
    from trading.market import StockRegistry


class Portfolio:
    """Cash balance plus holdings (symbol -> positive share count).

    Invariants: ``cash_balance >= 0`` and every holding quantity is ``> 0``.
    A holding whose quantity reaches zero is removed from the mapping, so
    "does the user hold X" is answered by key presence.
    """

    def __init__(self, initial_balance: Decimal = Decimal("0")) -> None:
        initial_balance = Decimal(str(initial_balance))
        if initial_balance < 0:
            raise ValueError(f"Initial balance must be non-negative, got {initial_balance}.")
        self._cash: Decimal = initial_balance
        self._holdings: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def cash_balance(self) -> Decimal:
        return self._cash

    @property
    def holdings(self) -> dict[str, int]:
        """Copy of the holdings mapping."""
        return dict(self._holdings)

    def quantity(self, symbol: str) -> int:
        return self._holdings.get(symbol, 0)

    def snapshot(self) -> PortfolioSnapshot:
        return PortfolioSnapshot(cash=self._cash, holdings=dict(self._holdings))

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    def buy(self, stock: Stock, quantity: int) -> bool:
        """Buy *quantity* shares at ``stock.price``.

        Returns ``False`` with no state change if the quantity or price is not
        positive, or if the cost exceeds the cash balance.
        """
        if quantity <= 0 or stock.price <= 0:
            return False
        cost = stock.price * quantity
        if cost > self._cash:
            return False
        self._cash -= cost
        self._credit_holding(stock.symbol, quantity)
        return True

    def sell(self, stock: Stock, quantity: int) -> bool:
        """Sell *quantity* shares at ``stock.price``.

        Returns ``False`` with no state change if the quantity is not positive
        or exceeds the current holding (an absent holding counts as zero).
        """
        if quantity <= 0:
            return False
        held = self._holdings.get(stock.symbol, 0)
        if quantity > held:
            return False
        self._cash += stock.price * quantity
        remaining = held - quantity
        if remaining == 0:
            del self._holdings[stock.symbol]
        else:
            self._holdings[stock.symbol] = remaining
        return True

    def valuation(self, registry: StockRegistry) -> Decimal:
        """Cash plus holdings at current registry prices.

        Holdings whose symbol the registry no longer lists contribute zero.
        """
        total = self._cash
        for symbol, qty in self._holdings.items():
            stock = registry.lookup(symbol)
            if stock is not None:
                total += stock.price * qty
        return total

    # ------------------------------------------------------------------
    # Snapshot restoration
    # ------------------------------------------------------------------

    def deposit(self, amount: Decimal) -> None:
        """Credit cash without a trade (used when restoring a snapshot)."""
        amount = Decimal(str(amount))
        if amount < 0:
            raise ValueError(f"Deposit amount must be non-negative, got {amount}.")
        self._cash += amount

    def deposit_shares(self, stock: Stock, quantity: int) -> None:
        """Credit shares at zero cost basis (used when restoring a snapshot).

        Goes through the same holding credit as ``buy`` but skips the price
        check, so zero-price placeholder stocks are accepted.
        """
        if quantity <= 0:
            raise ValueError(f"Share deposit must be positive, got {quantity} for {stock.symbol}.")
        self._credit_holding(stock.symbol, quantity)

    def _credit_holding(self, symbol: str, quantity: int) -> None:
        self._holdings[symbol] = self._holdings.get(symbol, 0) + quantity
