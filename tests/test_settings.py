"""Tests for settings configuration loading."""

from __future__ import annotations

import logging
from textwrap import dedent

import pytest
from pydantic import ValidationError

from polymesh_tvl.settings import TvlSettings, load_settings


def test_defaults():
    settings = TvlSettings()

    assert settings.rpc_endpoint == "wss://mainnet-rpc.polymesh.network/"
    assert settings.demo_mode is False
    assert settings.silent_mode is False
    assert settings.decimals == 6
    assert settings.fallback_price == 0.3
    assert settings.treasury_account is None
    assert settings.price_timeout == 5.0
    assert settings.launch_timestamp == 1639612800
    assert settings.chain_name == "polymesh"


def test_env_flags(monkeypatch):
    monkeypatch.setenv("RPC_ENDPOINT", "wss://archive.example/")
    monkeypatch.setenv("DEMO_MODE", "true")
    monkeypatch.setenv("SILENT_MODE", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = TvlSettings()

    assert settings.rpc_endpoint == "wss://archive.example/"
    assert settings.demo_mode is True
    assert settings.silent_mode is True
    assert settings.log_level == "DEBUG"


def test_polymesh_rpc_alias(monkeypatch):
    monkeypatch.setenv("POLYMESH_RPC", "wss://alias.example/")

    assert TvlSettings().rpc_endpoint == "wss://alias.example/"


def test_init_kwargs_override_env(monkeypatch):
    monkeypatch.setenv("DEMO_MODE", "true")

    settings = TvlSettings(demo_mode=False, rpc_endpoint="wss://cli.example/")

    assert settings.demo_mode is False
    assert settings.rpc_endpoint == "wss://cli.example/"


def test_blank_treasury_account_is_unset(monkeypatch):
    monkeypatch.setenv("TREASURY_ACCOUNT", "  ")

    assert TvlSettings().treasury_account is None


def test_treasury_account_from_env(monkeypatch):
    monkeypatch.setenv("TREASURY_ACCOUNT", "5Treasury")

    settings = TvlSettings()

    assert settings.treasury_account == "5Treasury"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"fallback_price": -0.1},
        {"price_timeout": 0},
        {"price_max_tries": 0},
        {"decimals": -1},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        TvlSettings(**kwargs)


def test_toml_config_is_lowest_precedence(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        dedent(
            """
            [polymesh_tvl]
            rpc_endpoint = "wss://file.example/"
            treasury_account = "5FromFile"
            fallback_price = 0.25
            """
        ).strip()
    )
    monkeypatch.setenv("POLYMESH_TVL_CONFIG", str(config_path))
    monkeypatch.setenv("RPC_ENDPOINT", "wss://env.example/")

    settings = TvlSettings()

    assert settings.rpc_endpoint == "wss://env.example/"
    assert settings.treasury_account == "5FromFile"
    assert settings.fallback_price == 0.25


def test_local_toml_file_is_discovered(tmp_path):
    (tmp_path / "polymesh-tvl.toml").write_text('demo_mode = true\n')

    assert TvlSettings().demo_mode is True


def test_unprefixed_generic_env_names_are_ignored(monkeypatch):
    monkeypatch.setenv("DECIMALS", "18")
    monkeypatch.setenv("CHAIN_NAME", "other")
    monkeypatch.setenv("FALLBACK_PRICE", "99")

    settings = TvlSettings()

    assert settings.decimals == 6
    assert settings.chain_name == "polymesh"
    assert settings.fallback_price == 0.3


def test_prefixed_env_names(monkeypatch):
    monkeypatch.setenv("POLYMESH_TVL_DECIMALS", "18")
    monkeypatch.setenv("POLYMESH_TVL_DEMO_MODE", "true")

    settings = TvlSettings()

    assert settings.decimals == 18
    assert settings.demo_mode is True


def test_load_settings_passes_overrides():
    settings = load_settings(treasury_account="5Treasury")

    assert settings.treasury_account == "5Treasury"
    assert settings.demo_mode is False


def test_load_settings_falls_back_to_demo_on_invalid_env(monkeypatch, caplog):
    monkeypatch.setenv("DEMO_MODE", "enabled")

    with caplog.at_level(logging.ERROR):
        settings = load_settings()

    assert settings.demo_mode is True
    assert settings.decimals == 6
    assert settings.fallback_price == 0.3
    assert settings.chain_name == "polymesh"
    assert any(
        "Invalid configuration" in r.getMessage()
        for r in caplog.records
        if r.levelno == logging.ERROR
    )
