"""Simulated market: the stock registry and its random-walk price updates.

The ledger only reads from the registry (``lookup`` / ``all``); price
mutation is owned by ``MarketSimulator``.
"""

from __future__ import annotations

import logging
import random
from decimal import ROUND_HALF_UP, Decimal

from models.config import ListingConfig, MarketConfig
from models.stock import MarketQuote, Stock

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


class StockRegistry:
    """Symbol -> ``Stock`` for every listed stock."""

    def __init__(self, stocks: list[Stock] | None = None) -> None:
        self._stocks: dict[str, Stock] = {}
        for stock in stocks or []:
            self.add(stock)

    @classmethod
    def from_listings(cls, listings: list[ListingConfig]) -> StockRegistry:
        return cls(
            [Stock(symbol=item.symbol, name=item.name, price=item.price) for item in listings]
        )

    def add(self, stock: Stock) -> None:
        if ":" in stock.symbol:
            raise ValueError(f"Symbol must not contain ':': {stock.symbol!r}")
        self._stocks[stock.symbol] = stock

    def lookup(self, symbol: str) -> Stock | None:
        return self._stocks.get(symbol)

    def all(self) -> list[Stock]:
        return list(self._stocks.values())

    def quotes(self) -> list[MarketQuote]:
        return [
            MarketQuote(symbol=s.symbol, name=s.name, price=s.price, change_pct=s.change_pct)
            for s in self._stocks.values()
        ]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._stocks

    def __len__(self) -> int:
        return len(self._stocks)


class MarketSimulator:
    """Moves every listed price by a uniform random step on each update.

    Steps are drawn from ``[-max_step/2, +max_step/2]``, rounded to cents, and
    prices are floored at one cent so listed stocks stay tradable.
    """

    def __init__(
        self,
        registry: StockRegistry,
        max_step: Decimal = Decimal("10"),
        seed: int | None = None,
    ) -> None:
        self._registry = registry
        self._max_step = Decimal(max_step)
        self._rng = random.Random(seed)

    @classmethod
    def from_config(cls, config: MarketConfig) -> MarketSimulator:
        registry = StockRegistry.from_listings(config.listings)
        return cls(registry, max_step=config.max_step, seed=config.seed)

    @property
    def registry(self) -> StockRegistry:
        return self._registry

    def update_prices(self) -> None:
        for stock in self._registry.all():
            step = Decimal(str(self._rng.random() - 0.5)) * self._max_step
            new_price = (stock.price + step).quantize(_CENT, rounding=ROUND_HALF_UP)
            stock.update_price(max(new_price, _CENT))
        logger.debug("Updated prices for %d stock(s).", len(self._registry))
