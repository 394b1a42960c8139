"""Configuration loading utilities for ccrypt-kdf."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .encoding import PassphrasePolicy
from .exceptions import ConfigError
from .paths import default_config_path

CONFIG_ENV = "CCRYPT_KDF_CONFIG"

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        if value.upper() not in _LEVELS:
            raise ValueError(f"Unknown log level '{value}'")
        return value


class KdfConfig(BaseModel):
    passphrase_policy: PassphrasePolicy = Field(
        default=PassphrasePolicy.STRICT,
        description="How passphrase characters become key bytes: strict|truncate|utf8",
    )

    @field_validator("passphrase_policy", mode="before")
    @classmethod
    def _parse_policy(cls, value: object) -> PassphrasePolicy:
        return PassphrasePolicy.parse(value)  # type: ignore[arg-type]


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    kdf: KdfConfig = Field(default_factory=KdfConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    env_path = os.getenv(CONFIG_ENV)
    if env_path:
        yield Path(env_path).expanduser()
    yield Path.cwd() / ".ccrypt" / "config.yaml"
    yield default_config_path()


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is not None and not Path(path).is_file():
        raise ConfigError(f"Configuration file not found: {path}")
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                try:
                    data = yaml.safe_load(handle) or {}
                except yaml.YAMLError as exc:
                    raise ConfigError(f"Invalid YAML in {candidate}: {exc}") from exc
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ConfigError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)


__all__ = [
    "AppConfig",
    "CONFIG_ENV",
    "DEFAULT_CONFIG",
    "KdfConfig",
    "LoggingConfig",
    "config_search_paths",
    "dump_default_config",
    "load_config",
]
