"""Tests for PlatformConfig YAML loading."""

from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from models.config import PlatformConfig

REPO_ROOT = Path(__file__).resolve().parents[2]


class TestPlatformConfig:
    def test_defaults(self):
        config = PlatformConfig()
        assert config.default_user == "john_doe"
        assert config.initial_balance == Decimal("10000.00")
        assert config.storage.data_file == "portfolio_data.txt"
        assert len(config.market.listings) == 4

    def test_shipped_default_yaml(self):
        config = PlatformConfig.from_yaml(REPO_ROOT / "config" / "default.yaml")
        assert config.currency == "INR"
        assert config.market.seed is None
        assert config.market.listings[1].symbol == "GOOGL"
        assert config.market.listings[1].price == Decimal("2800.00")

    def test_partial_yaml_keeps_defaults(self, tmp_path: Path):
        path = tmp_path / "cfg.yaml"
        path.write_text("default_user: alice\nmarket:\n  seed: 3\n", encoding="utf-8")
        config = PlatformConfig.from_yaml(path)
        assert config.default_user == "alice"
        assert config.market.seed == 3
        assert config.market.max_step == Decimal("10")

    def test_empty_yaml_is_all_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert PlatformConfig.from_yaml(path) == PlatformConfig()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PlatformConfig.from_yaml(tmp_path / "absent.yaml")

    def test_non_mapping_yaml(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            PlatformConfig.from_yaml(path)

    def test_symbol_with_colon_invalid(self):
        with pytest.raises(ValidationError):
            PlatformConfig(market={"listings": [{"symbol": "A:B", "name": "x", "price": "1"}]})

    def test_negative_balance_invalid(self):
        with pytest.raises(ValidationError):
            PlatformConfig(initial_balance="-1")
