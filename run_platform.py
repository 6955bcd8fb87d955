#!/usr/bin/env python3
"""CLI entrypoint for the stock trading platform.

Usage::

    python run_platform.py
    python run_platform.py --config config/default.yaml --user alice --balance 5000

The platform restores the user directory from the snapshot file (starting
empty if there is none), registers the trading user if the snapshot does not
already contain them, and runs the interactive menu. Every successful trade
rewrites the snapshot.
"""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

from models.config import PlatformConfig
from trading.market import MarketSimulator
from trading.menu import TradingMenu
from trading.service import TradingService
from trading.store import SnapshotStore


def _decimal_arg(text: str) -> Decimal:
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a decimal number: {text!r}") from None
    if not value.is_finite() or value < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative amount: {text!r}")
    return value


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Trade simulated stocks from an interactive menu.",
    )
    parser.add_argument(
        "--config",
        default=None,
        type=str,
        help="Path to a YAML configuration file (default: built-in settings).",
    )
    parser.add_argument(
        "--data-file",
        default=None,
        type=str,
        help="Snapshot file path (overrides storage.data_file).",
    )
    parser.add_argument(
        "--user",
        default=None,
        type=str,
        help="Account to trade on (overrides default_user).",
    )
    parser.add_argument(
        "--balance",
        default=None,
        type=_decimal_arg,
        help="Starting cash if the account is new (overrides initial_balance).",
    )
    parser.add_argument(
        "--seed",
        default=None,
        type=int,
        help="RNG seed for market price updates (overrides market.seed).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser.parse_args(argv)


def _setup_logging(level: str) -> None:
    """Configure root logger with a clean format."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_config(args: argparse.Namespace) -> PlatformConfig:
    """Load the YAML config (if any) and apply CLI overrides."""
    config = PlatformConfig.from_yaml(args.config) if args.config else PlatformConfig()
    if args.data_file is not None:
        config.storage.data_file = args.data_file
    if args.user is not None:
        config.default_user = args.user
    if args.balance is not None:
        config.initial_balance = args.balance
    if args.seed is not None:
        config.market.seed = args.seed
    return config


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    market = MarketSimulator.from_config(config.market)
    store = SnapshotStore(config.storage.data_file)
    service = TradingService.from_store(market.registry, store)

    if not service.has_user(config.default_user):
        service.register_user(config.default_user, config.initial_balance)

    TradingMenu(service, market, config.default_user, currency=config.currency).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
