"""Portfolio state models."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class PortfolioSnapshot(BaseModel):
    """Cash and holdings (symbol -> shares) at a point in time.

    Detached copy of a live ``Portfolio``; mutating it has no effect on the
    ledger.
    """

    cash: Decimal
    holdings: dict[str, int]


class HoldingView(BaseModel):
    """One holding with its value at the current registry price.

    ``price`` is ``None`` when the symbol is no longer listed; such holdings
    contribute nothing to the portfolio valuation.
    """

    symbol: str
    quantity: int
    price: Decimal | None = None
    market_value: Decimal = Decimal("0")


class PortfolioSummary(BaseModel):
    """Read-only projection of a user's account for display."""

    username: str
    cash: Decimal
    holdings: list[HoldingView]
    total_value: Decimal
    transaction_history: list[str]
