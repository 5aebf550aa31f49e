"""Client configuration loading and validation."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, ClassVar, Dict, Iterable, Literal

import yaml
from pydantic import Field, PositiveFloat, PositiveInt
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_LOCATIONS: tuple[Path, ...] = (
    Path("./config/webrcon.yaml"),
    Path("./config/webrcon.yml"),
    Path("/etc/webrcon/webrcon.yaml"),
    Path("/etc/webrcon/webrcon.yml"),
)


class RconSettings(BaseSettings):
    """Validated settings for an RCON client session."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="WEBRCON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Endpoint + credential
    address: str = Field(
        default="127.0.0.1",
        description="IP address of the game server's RCON listener.",
    )
    port: int = Field(
        default=28016,
        description="TCP port of the RCON listener.",
    )
    password: str = Field(
        default="",
        description="RCON password; sent as the URI path during the websocket handshake.",
        repr=False,
    )
    scheme: Literal["ws", "wss"] = Field(
        default="ws",
        description="WebSocket URI scheme.",
    )
    transport: Literal["dummy", "websocket"] = Field(
        default="websocket",
        description="Transport implementation to use.",
    )

    # Timing & limits
    command_timeout_seconds: PositiveFloat = Field(
        default=10.0,
        description="Seconds to wait for the reply correlated with a command.",
    )
    open_timeout_seconds: PositiveFloat = Field(
        default=10.0,
        description="Seconds allowed for the websocket opening handshake.",
    )
    max_frame_bytes: PositiveInt = Field(
        default=1 << 22,
        description="Largest inbound websocket message accepted.",
    )
    identifier_min: PositiveInt = Field(
        default=1,
        description="Lowest correlation identifier handed out to commands.",
    )
    identifier_max: PositiveInt = Field(
        default=1000,
        description="Highest correlation identifier handed out to commands.",
    )
    serialize_dispatch: bool = Field(
        default=False,
        description="Route inbound frames one at a time in receive order instead of concurrently.",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level for the console process.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        if isinstance(value, str):
            return value.upper()
        return value

    @model_validator(mode="after")
    def _check_identifier_range(self) -> "RconSettings":
        if self.identifier_min > self.identifier_max:
            raise ValueError("identifier_min must not exceed identifier_max")
        return self

    config_path: Path | None = Field(
        default=None,
        description="Resolved path to the on-disk config that seeded the settings.",
        exclude=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[RconSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._yaml_settings_source,
            file_secret_settings,
        )

    @staticmethod
    def _yaml_settings_source(settings_cls: type[RconSettings] | None = None) -> Dict[str, Any]:
        for path in RconSettings._resolve_candidate_paths():
            data = RconSettings._load_file(path)
            if data is not None:
                data.setdefault("config_path", path)
                return data
        return {}

    @staticmethod
    def _resolve_candidate_paths() -> Iterable[Path]:
        explicit = os.getenv("WEBRCON_CONFIG_FILE")
        if explicit:
            yield Path(explicit).expanduser()
        yield from DEFAULT_CONFIG_LOCATIONS

    @staticmethod
    def _load_file(path: Path) -> Dict[str, Any] | None:
        if not path.is_file():
            return None
        suffix = path.suffix.lower()
        try:
            with path.open("r", encoding="utf-8") as handle:
                if suffix in {".yaml", ".yml"}:
                    raw = yaml.safe_load(handle)
                elif suffix == ".json":
                    raw = json.load(handle)
                else:
                    return None
        except OSError as exc:
            raise RuntimeError(f"Failed to read RCON config file {path}") from exc
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ValueError(f"Invalid RCON config file {path}") from exc

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ValueError(f"RCON config file {path} must contain a mapping at top level.")
        return raw


@lru_cache()
def get_settings() -> RconSettings:
    """Return memoized client settings."""

    return RconSettings()
