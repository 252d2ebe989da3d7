"""Tests for eclipseum/integration/config.py — defaults, env overrides, YAML loading."""

import pytest

from eclipseum.integration.config import (
    DECIMAL_FACTOR,
    MAX_DECIMALS,
    MAX_SUPPLY,
    ExchangeConfig,
    config_from_mapping,
    load_config,
)


class TestDefaults:
    def test_values(self):
        cfg = ExchangeConfig()
        assert cfg.exchange_account == "eclipseum"
        assert cfg.initial_supply == 100_000 * DECIMAL_FACTOR
        assert (cfg.token_name, cfg.token_symbol, cfg.token_decimals) == ("Eclipseum", "ECL", 18)

    def test_primary_share_is_one_third(self):
        cfg = ExchangeConfig()
        assert cfg.primary_share_of(3 * DECIMAL_FACTOR // 10) == DECIMAL_FACTOR // 10
        assert cfg.primary_share_of(10) == 3


class TestValidation:
    def test_empty_account(self):
        with pytest.raises(ValueError):
            ExchangeConfig(exchange_account="")

    def test_zero_supply(self):
        with pytest.raises(ValueError):
            ExchangeConfig(initial_supply=0)

    def test_bool_supply(self):
        with pytest.raises(TypeError):
            ExchangeConfig(initial_supply=True)

    def test_zero_denominator(self):
        with pytest.raises(ValueError):
            ExchangeConfig(primary_funding_den=0)

    def test_share_above_one(self):
        with pytest.raises(ValueError, match="within"):
            ExchangeConfig(primary_funding_num=4, primary_funding_den=3)


class TestFromEnv:
    def test_no_env_keeps_defaults(self, monkeypatch):
        for name in ("EXCHANGE_ACCOUNT", "INITIAL_SUPPLY", "PRIMARY_FUNDING_NUM", "PRIMARY_FUNDING_DEN",
                     "TOKEN_NAME", "TOKEN_SYMBOL", "TOKEN_DECIMALS"):
            monkeypatch.delenv("ECLIPSEUM_" + name, raising=False)
        assert ExchangeConfig.from_env() == ExchangeConfig()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("ECLIPSEUM_EXCHANGE_ACCOUNT", " pool ")
        monkeypatch.setenv("ECLIPSEUM_INITIAL_SUPPLY", "1000")
        monkeypatch.setenv("ECLIPSEUM_PRIMARY_FUNDING_NUM", "1")
        monkeypatch.setenv("ECLIPSEUM_PRIMARY_FUNDING_DEN", "2")
        cfg = ExchangeConfig.from_env()
        assert cfg.exchange_account == "pool"
        assert cfg.initial_supply == 1000
        assert cfg.primary_share_of(10) == 5

    def test_bad_int_falls_back(self, monkeypatch):
        monkeypatch.setenv("ECLIPSEUM_INITIAL_SUPPLY", "lots")
        assert ExchangeConfig.from_env().initial_supply == ExchangeConfig().initial_supply

    def test_clamped(self, monkeypatch):
        monkeypatch.setenv("ECLIPSEUM_INITIAL_SUPPLY", str(MAX_SUPPLY * 10))
        assert ExchangeConfig.from_env().initial_supply == MAX_SUPPLY

    def test_token_decimals(self, monkeypatch):
        monkeypatch.setenv("ECLIPSEUM_TOKEN_DECIMALS", "6")
        assert ExchangeConfig.from_env().token_decimals == 6

    def test_token_decimals_clamped(self, monkeypatch):
        monkeypatch.setenv("ECLIPSEUM_TOKEN_DECIMALS", "500")
        assert ExchangeConfig.from_env().token_decimals == MAX_DECIMALS

    def test_base_respected(self, monkeypatch):
        monkeypatch.delenv("ECLIPSEUM_INITIAL_SUPPLY", raising=False)
        base = ExchangeConfig(initial_supply=77)
        assert ExchangeConfig.from_env(base).initial_supply == 77


class TestLoadConfig:
    def test_yaml(self, tmp_path):
        p = tmp_path / "exchange.yaml"
        p.write_text(
            "exchange_account: eclipseum-test\n"
            "initial_supply: 100000000000000000000\n"
            "primary_funding_num: 1\n"
            "primary_funding_den: 2\n",
            encoding="utf-8",
        )
        cfg = load_config(p)
        assert cfg.exchange_account == "eclipseum-test"
        assert cfg.initial_supply == 100 * DECIMAL_FACTOR
        assert cfg.primary_funding_den == 2

    def test_empty_file_gives_defaults(self, tmp_path):
        p = tmp_path / "empty.yaml"
        p.write_text("", encoding="utf-8")
        assert load_config(p) == ExchangeConfig()

    def test_unknown_key(self, tmp_path):
        p = tmp_path / "bad.yaml"
        p.write_text("fee_numerator: 990\n", encoding="utf-8")
        with pytest.raises(ValueError, match="fee_numerator"):
            load_config(p)

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            config_from_mapping(["initial_supply", 1])
