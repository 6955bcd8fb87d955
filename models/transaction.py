"""Executed trade records and trade results."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Label inside rendered (and therefore persisted) history lines. Fixed so
# snapshot text does not depend on the display currency in PlatformConfig.
CURRENCY = "INR"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

TradeSide = Literal["buy", "sell"]


class TransactionKind(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    LOAD = "LOAD"  # Restored from a snapshot; content was not persisted


class Transaction(BaseModel):
    """One executed trade. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    kind: TransactionKind
    symbol: str
    quantity: int = Field(ge=0)
    price: Decimal = Field(ge=0)
    timestamp: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def _check_trade_fields(self) -> Transaction:
        if self.kind is not TransactionKind.LOAD:
            if self.quantity <= 0:
                raise ValueError(f"{self.kind.value} quantity must be positive, got {self.quantity}.")
            if self.price <= 0:
                raise ValueError(f"{self.kind.value} price must be positive, got {self.price}.")
        return self

    @classmethod
    def restored(cls) -> Transaction:
        """Placeholder appended for each history line read back from a snapshot."""
        return cls(kind=TransactionKind.LOAD, symbol="UNKNOWN", quantity=0, price=Decimal("0"))

    def render(self) -> str:
        """Fixed human-readable line; also the persisted form.

        Always labelled with ``CURRENCY``, whatever currency the console shows.
        """
        return (
            f"{self.kind.value}: {self.symbol} {self.quantity} shares at "
            f"{CURRENCY} {self.price:.2f} on {self.timestamp.strftime(TIMESTAMP_FORMAT)}"
        )

    def __str__(self) -> str:
        return self.render()


class TradeRejection(str, Enum):
    """Expected reasons a trade request does not execute."""

    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_HOLDINGS = "insufficient_holdings"
    UNKNOWN_USER = "unknown_user"
    UNKNOWN_SYMBOL = "unknown_symbol"
    INVALID_QUANTITY = "invalid_quantity"
    INVALID_SIDE = "invalid_side"


class TradeResult(BaseModel):
    """Outcome of a buy/sell request.

    Either the trade executed (``transaction`` set) or it was rejected, in
    which case ``reason`` and ``message`` explain why and no state changed.
    """

    status: Literal["accepted", "rejected"]
    transaction: Transaction | None = None
    reason: TradeRejection | None = None
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.status == "accepted"
