"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    CHAIN_NAME,
    COINGECKO_POLYX_ID,
    COINGECKO_SIMPLE_PRICE_URL,
    DEFAULT_RPC_ENDPOINT,
    MAINNET_LAUNCH_TIMESTAMP,
    POLYX_DECIMALS,
    POLYX_FALLBACK_PRICE,
    PRICE_TIMEOUT_SECONDS,
    PRICE_VS_CURRENCY,
)
from .logger import get_logger

load_dotenv()

logger = get_logger(__name__)

ENV_PREFIX = "POLYMESH_TVL_"
CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"
CONFIG_TABLE = "polymesh_tvl"


class TomlConfigSource(PydanticBaseSettingsSource):
    """Lowest-precedence source reading a TOML file.

    The file is taken from ``POLYMESH_TVL_CONFIG`` or ``./polymesh-tvl.toml``.
    Keys may live at the top level or under a ``[polymesh_tvl]`` table.
    """

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
        super().__init__(settings_cls)
        self._path = path

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        if not self._path:
            local_config = Path("polymesh-tvl.toml")
            if not local_config.exists():
                return {}
            self._path = local_config

        if not self._path.exists():
            return {}

        with self._path.open("rb") as f:
            data = tomllib.load(f)
        body = data.get(CONFIG_TABLE, data)
        if not isinstance(body, dict):
            return {}
        return body


def _aliases(name: str, *extra: str) -> AliasChoices:
    """Field name (also read bare from the environment), prefixed env name, extras."""
    return AliasChoices(name, f"{ENV_PREFIX}{name}".lower(), *extra)


class TvlSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env: RPC_ENDPOINT, DEMO_MODE, SILENT_MODE, LOG_LEVEL and
      TREASURY_ACCOUNT unprefixed; everything else only as POLYMESH_TVL_<FIELD>
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- global toggles ---
    demo_mode: bool = Field(default=False, validation_alias=_aliases("demo_mode"))
    silent_mode: bool = Field(default=False, validation_alias=_aliases("silent_mode"))

    # --- network ---
    rpc_endpoint: str = Field(
        default=DEFAULT_RPC_ENDPOINT,
        validation_alias=_aliases("rpc_endpoint", "polymesh_rpc"),
    )
    connect_timeout: float = Field(default=30.0, gt=0)
    chain_name: str = CHAIN_NAME
    launch_timestamp: int = MAINNET_LAUNCH_TIMESTAMP

    # --- token ---
    decimals: int = Field(default=POLYX_DECIMALS, ge=0)
    fallback_price: float = Field(default=POLYX_FALLBACK_PRICE, ge=0)

    # Set to None to skip the treasury query
    treasury_account: str | None = Field(
        default=None, validation_alias=_aliases("treasury_account")
    )

    # --- price feed ---
    price_api_url: str = COINGECKO_SIMPLE_PRICE_URL
    price_asset_id: str = COINGECKO_POLYX_ID
    price_vs_currency: str = PRICE_VS_CURRENCY
    price_timeout: float = Field(default=PRICE_TIMEOUT_SECONDS, gt=0)
    price_max_tries: int = Field(default=2, ge=1)
    price_retry_interval: float = Field(default=1.0, ge=0)

    # --- logging ---
    log_level: str = Field(default="INFO", validation_alias=_aliases("log_level"))

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("treasury_account", mode="before")
    @classmethod
    def blank_treasury_is_unset(cls, v: Any) -> Any:
        """Treat an empty treasury account as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
        )


def load_settings(**overrides: Any) -> TvlSettings:
    """Load settings without ever raising.

    Invalid configuration is logged as an error and the run is switched to
    demo mode on built-in defaults, so callers always get a usable result.
    """
    try:
        return TvlSettings(**overrides)
    except ValidationError as e:
        logger.error("Invalid configuration, falling back to DEMO MODE: %s", e)
        defaults = TvlSettings.model_construct()
        return defaults.model_copy(update={"demo_mode": True})
