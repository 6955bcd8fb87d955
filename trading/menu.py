"""Interactive numbered menu over a ``TradingService``.

Input and output streams are injected so the loop can be driven from tests.
"""

from __future__ import annotations

import sys
from typing import TextIO

from trading.console import format_market, format_portfolio, format_trade_result
from trading.market import MarketSimulator
from trading.service import TradingService


MENU = """
=== Stock Trading Platform ===
1. Display Market Data
2. Buy Stock
3. Sell Stock
4. View Portfolio
5. Update Market Prices
6. Exit"""


class TradingMenu:
    """Menu loop trading on behalf of a single user."""

    def __init__(
        self,
        service: TradingService,
        market: MarketSimulator,
        username: str,
        currency: str = "INR",
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._service = service
        self._market = market
        self._username = username
        self._currency = currency
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout

    def run(self) -> None:
        """Loop until the user exits or input ends."""
        while True:
            self._print(MENU)
            choice = self._prompt("Choose an option: ")
            if choice is None or choice == "6":
                self._print("Exiting...")
                return
            if choice == "1":
                self._print(format_market(self._service.get_market_snapshot(), self._currency))
            elif choice in ("2", "3"):
                if not self._trade("buy" if choice == "2" else "sell"):
                    self._print("Exiting...")
                    return
            elif choice == "4":
                self._show_portfolio()
            elif choice == "5":
                self._market.update_prices()
                self._print("Market prices updated!")
            else:
                self._print("Invalid option!")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _trade(self, side: str) -> bool:
        """Prompt for symbol and quantity. Returns ``False`` on end of input."""
        symbol = self._prompt("Enter stock symbol: ")
        if symbol is None:
            return False
        qty_text = self._prompt("Enter quantity: ")
        if qty_text is None:
            return False
        try:
            quantity = int(qty_text)
        except ValueError:
            self._print("Invalid quantity!")
            return True

        result = self._service.execute_order(self._username, side, symbol.upper(), quantity)
        self._print(format_trade_result(result, side))
        return True

    def _show_portfolio(self) -> None:
        summary = self._service.get_portfolio_summary(self._username)
        if summary is None:
            self._print(f"No account found for '{self._username}'.")
            return
        self._print(format_portfolio(summary, self._currency))

    # ------------------------------------------------------------------
    # I/O helpers
    # ------------------------------------------------------------------

    def _prompt(self, text: str) -> str | None:
        self._out.write(text)
        self._out.flush()
        line = self._in.readline()
        if not line:
            return None
        return line.strip()

    def _print(self, text: str) -> None:
        self._out.write(text + "\n")
