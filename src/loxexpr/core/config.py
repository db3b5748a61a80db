"""
Interpreter configuration.

Parses loxexpr.toml and provides typed configuration for the pipeline and
the interactive prompt:

    log_level = "INFO"

    [interpreter]
    max_depth = 64
    allow_trailing = false
    halt_on_scan_errors = true

    [repl]
    prompt = "> "
    show_tokens = false
"""

from __future__ import annotations

import logging
import os
import tomllib
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from loxexpr.core.errors import ConfigError
from loxexpr.core.expression_lang.parser import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "loxexpr.toml"
LOG_LEVEL_ENV = "LOXEXPR_LOG_LEVEL"


class LogLevel(StrEnum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class InterpreterConfig(BaseModel):
    """Scan/parse/evaluate settings."""

    model_config = ConfigDict(extra="forbid")

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=DEFAULT_MAX_DEPTH)
    allow_trailing: bool = False
    halt_on_scan_errors: bool = True


class ReplConfig(BaseModel):
    """Interactive prompt settings."""

    model_config = ConfigDict(extra="forbid")

    prompt: str = "> "
    show_tokens: bool = False


class LoxConfig(BaseModel):
    """Complete loxexpr configuration."""

    model_config = ConfigDict(extra="forbid")

    log_level: LogLevel = LogLevel.WARNING
    interpreter: InterpreterConfig = Field(default_factory=InterpreterConfig)
    repl: ReplConfig = Field(default_factory=ReplConfig)


def load_config(toml_path: Path | None = None) -> LoxConfig:
    """
    Load configuration from loxexpr.toml.

    Args:
        toml_path: Explicit config file. When omitted, ./loxexpr.toml is used
            if it exists, otherwise defaults.

    Returns:
        LoxConfig with parsed values or defaults

    Raises:
        ConfigError: If an explicit file is missing, or any file is not
            valid TOML or does not match the schema
    """
    data: dict[str, Any] = {}

    if toml_path is not None and not toml_path.exists():
        raise ConfigError(f"Config file not found: {toml_path}")

    path = toml_path if toml_path is not None else Path.cwd() / CONFIG_FILENAME
    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        data["log_level"] = env_level.upper()

    try:
        return LoxConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
