"""Platform configuration models, loaded from YAML.

These live in ``models/`` because they are shared data contracts used by the
CLI entrypoint, the market simulation, and the storage layer.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class ListingConfig(BaseModel):
    """One stock listed on the simulated market at startup."""

    symbol: str = Field(pattern=r"^[^:\s]+$", description="Ticker symbol; must not contain ':'.")
    name: str
    price: Decimal = Field(gt=0, description="Opening price.")


def _default_listings() -> list[ListingConfig]:
    return [
        ListingConfig(symbol="AAPL", name="Apple Inc.", price=Decimal("150.00")),
        ListingConfig(symbol="GOOGL", name="Alphabet Inc.", price=Decimal("2800.00")),
        ListingConfig(symbol="MSFT", name="Microsoft Corp.", price=Decimal("300.00")),
        ListingConfig(symbol="AMZN", name="Amazon.com Inc.", price=Decimal("3500.00")),
    ]


class MarketConfig(BaseModel):
    """Configuration for the simulated market."""

    listings: list[ListingConfig] = Field(
        default_factory=_default_listings,
        description="Stocks available for trading.",
    )
    max_step: Decimal = Field(
        default=Decimal("10"),
        gt=0,
        description="Width of the uniform random price step per update (centred on zero).",
    )
    seed: int | None = Field(
        default=None,
        description="Optional RNG seed for reproducible price paths.",
    )


class StorageConfig(BaseModel):
    """Where the portfolio snapshot is persisted."""

    data_file: str = Field(
        default="portfolio_data.txt",
        description="Path of the line-oriented snapshot file.",
    )


class PlatformConfig(BaseModel):
    """Top-level configuration for a trading session, loaded from YAML."""

    default_user: str = Field(
        default="john_doe",
        min_length=1,
        description="Account the interactive menu trades on.",
    )
    initial_balance: Decimal = Field(
        default=Decimal("10000.00"),
        ge=0,
        description="Starting cash when the default user is first registered.",
    )
    currency: str = Field(
        default="INR",
        description="Currency label for cash and value lines; rendered history always says INR.",
    )
    market: MarketConfig = Field(default_factory=MarketConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> PlatformConfig:
        """Load and validate a ``PlatformConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a valid YAML mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)
