"""Plain-text rendering of market and portfolio views for the terminal."""

from __future__ import annotations

from models.portfolio import PortfolioSummary
from models.stock import MarketQuote
from models.transaction import TradeResult


def format_market(quotes: list[MarketQuote], currency: str = "INR") -> str:
    lines = ["", "=== Market Data ==="]
    for q in quotes:
        lines.append(f"{q.symbol} ({q.name}): {currency} {q.price:.2f} ({q.change_pct:.2f}%)")
    return "\n".join(lines)


def format_portfolio(summary: PortfolioSummary, currency: str = "INR") -> str:
    lines = [
        "",
        f"=== Portfolio for {summary.username} ===",
        f"Cash Balance: {currency} {summary.cash:.2f}",
        "Holdings:",
    ]
    for h in summary.holdings:
        if h.price is None:
            lines.append(f"{h.symbol}: {h.quantity} shares (not listed)")
        else:
            lines.append(f"{h.symbol}: {h.quantity} shares (Value: {currency} {h.market_value:.2f})")
    lines.append(f"Total Portfolio Value: {currency} {summary.total_value:.2f}")
    lines.append("")
    lines.append("Transaction History:")
    lines.extend(summary.transaction_history)
    return "\n".join(lines)


def format_trade_result(result: TradeResult, side: str) -> str:
    if result.accepted:
        return "Purchase successful!" if side == "buy" else "Sale successful!"
    headline = "Purchase failed!" if side == "buy" else "Sale failed!"
    return f"{headline} {result.message}".rstrip()
