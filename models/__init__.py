"""Data models for the stock trading ledger.

Both the ledger (``trading``) and the CLI import from models.
"""

from models.config import ListingConfig, MarketConfig, PlatformConfig, StorageConfig
from models.portfolio import HoldingView, PortfolioSnapshot, PortfolioSummary
from models.stock import MarketQuote, Stock
from models.transaction import (
    Transaction,
    TransactionKind,
    TradeRejection,
    TradeResult,
    TradeSide,
)

__all__ = [
    # config
    "ListingConfig",
    "MarketConfig",
    "PlatformConfig",
    "StorageConfig",
    # portfolio
    "HoldingView",
    "PortfolioSnapshot",
    "PortfolioSummary",
    # stock
    "MarketQuote",
    "Stock",
    # transaction
    "Transaction",
    "TransactionKind",
    "TradeRejection",
    "TradeResult",
    "TradeSide",
]
