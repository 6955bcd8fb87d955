"""Tests for console rendering, the interactive menu, and the CLI entrypoint."""

import io
from decimal import Decimal
from pathlib import Path

import pytest

import run_platform
from models.stock import Stock
from trading.console import format_market, format_portfolio, format_trade_result
from trading.market import MarketSimulator, StockRegistry
from trading.menu import TradingMenu
from trading.service import TradingService
from trading.store import SnapshotStore


@pytest.fixture
def market() -> MarketSimulator:
    registry = StockRegistry([Stock(symbol="AAPL", name="Apple Inc.", price=Decimal("150.00"))])
    return MarketSimulator(registry, seed=0)


@pytest.fixture
def service(market: MarketSimulator) -> TradingService:
    svc = TradingService(market.registry)
    svc.register_user("john_doe", Decimal("10000.00"))
    return svc


def _run(service: TradingService, market: MarketSimulator, script: str) -> str:
    out = io.StringIO()
    TradingMenu(service, market, "john_doe", stdin=io.StringIO(script), stdout=out).run()
    return out.getvalue()


class TestConsole:
    def test_market_lines(self, service: TradingService):
        text = format_market(service.get_market_snapshot())
        assert "=== Market Data ===" in text
        assert "AAPL (Apple Inc.): INR 150.00 (0.00%)" in text

    def test_portfolio_screen(self, service: TradingService):
        service.buy_stock("john_doe", "AAPL", 2)
        text = format_portfolio(service.get_portfolio_summary("john_doe"), currency="USD")
        assert "=== Portfolio for john_doe ===" in text
        assert "Cash Balance: USD 9700.00" in text
        assert "AAPL: 2 shares (Value: USD 300.00)" in text
        assert "Total Portfolio Value: USD 10000.00" in text
        assert "BUY: AAPL 2 shares at INR 150.00" in text

    def test_trade_result_messages(self, service: TradingService):
        ok = service.execute_order("john_doe", "buy", "AAPL", 1)
        bad = service.execute_order("john_doe", "sell", "AAPL", 50)
        assert format_trade_result(ok, "buy") == "Purchase successful!"
        assert format_trade_result(bad, "sell").startswith("Sale failed!")


class TestTradingMenu:
    def test_buy_then_view_then_exit(self, service: TradingService, market: MarketSimulator):
        output = _run(service, market, "2\naapl\n10\n4\n6\n")
        assert "Purchase successful!" in output
        assert "AAPL: 10 shares" in output
        assert output.rstrip().endswith("Exiting...")
        assert service.directory.get("john_doe").portfolio.cash_balance == Decimal("8500.00")

    def test_failed_sale(self, service: TradingService, market: MarketSimulator):
        output = _run(service, market, "3\nAAPL\n1\n6\n")
        assert "Sale failed!" in output

    def test_invalid_input_does_not_crash(self, service: TradingService, market: MarketSimulator):
        output = _run(service, market, "9\nhello\n2\nAAPL\nten\n6\n")
        assert output.count("Invalid option!") == 2
        assert "Invalid quantity!" in output

    def test_update_prices_and_show_market(self, service: TradingService, market: MarketSimulator):
        output = _run(service, market, "5\n1\n6\n")
        assert "Market prices updated!" in output
        assert "=== Market Data ===" in output

    def test_end_of_input_exits(self, service: TradingService, market: MarketSimulator):
        assert "Exiting..." in _run(service, market, "")
        assert "Exiting..." in _run(service, market, "2\nAAPL\n")


class TestEntrypoint:
    def test_first_run_registers_and_persists(self, tmp_path: Path, monkeypatch):
        data_file = tmp_path / "data.txt"
        monkeypatch.setattr("sys.stdin", io.StringIO("2\nMSFT\n1\n6\n"))
        assert run_platform.main(["--data-file", str(data_file), "--user", "alice", "--balance", "500"]) == 0

        lines = SnapshotStore(data_file).read_lines()
        assert lines[:2] == ["USER:alice", "CASH:200.00"]
        assert "MSFT:1" in lines

    def test_existing_account_not_reset(self, tmp_path: Path, monkeypatch):
        data_file = tmp_path / "data.txt"
        data_file.write_text("USER:alice\nCASH:42\nHOLDINGS:\nTRANSACTIONS:\nEND_USER\n", encoding="utf-8")
        monkeypatch.setattr("sys.stdin", io.StringIO("6\n"))
        assert run_platform.main(["--data-file", str(data_file), "--user", "alice"]) == 0
        assert "CASH:42" in data_file.read_text(encoding="utf-8")

    def test_missing_config_file(self, tmp_path: Path):
        assert run_platform.main(["--config", str(tmp_path / "nope.yaml")]) == 2
