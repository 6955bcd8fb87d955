"""Listed stock and market quote models."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class Stock(BaseModel):
    """A tradable listing: symbol, display name, and current price.

    The market simulation owns price mutation (``update_price``); the ledger
    only reads ``price`` at transaction time.
    """

    symbol: str
    name: str
    price: Decimal = Field(ge=0)
    change_pct: Decimal = Decimal("0")  # Percent move from the previous price

    @classmethod
    def placeholder(cls, symbol: str) -> Stock:
        """Zero-price stand-in for a symbol the registry does not list."""
        return cls(symbol=symbol, name=symbol, price=Decimal("0"))

    def update_price(self, new_price: Decimal) -> None:
        if self.price:
            self.change_pct = (new_price - self.price) / self.price * 100
        else:
            self.change_pct = Decimal("0")
        self.price = new_price


class MarketQuote(BaseModel):
    """Read-only market row for display."""

    symbol: str
    name: str
    price: Decimal
    change_pct: Decimal
