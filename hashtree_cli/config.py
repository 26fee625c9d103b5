"""
CLI Configuration

Configuration management for the hashtree CLI.
Supports environment variables (and a .env file) plus JSON or YAML
configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from hashtree.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "HASHTREE_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
OUTPUT_FORMATS = ("human", "json")
ROOT_FORMS = ("display", "raw")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"
    root_form: str = "display"  # "display" or "raw"

    # Input
    encoding: str = "utf-8"

    def validate(self) -> "CLIConfig":
        """
        Check field values, normalizing case where it is free to do so.

        Raises:
            ConfigurationException: If a value is not supported
        """
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationException(
                f"Unsupported log level: {self.log_level}",
                field_path="log_level",
            )
        if self.default_output_format not in OUTPUT_FORMATS:
            raise ConfigurationException(
                f"Unsupported output format: {self.default_output_format}",
                field_path="default_output_format",
            )
        if self.root_form not in ROOT_FORMS:
            raise ConfigurationException(
                f"Unsupported root form: {self.root_form}",
                field_path="root_form",
            )
        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ConfigurationException(
                f"Unknown encoding: {self.encoding}",
                field_path="encoding",
            ) from e
        return self

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _env_overrides() -> dict[str, Any]:
    """
    Get configuration overrides from environment variables.

    Supported variables:
    - HASHTREE_LOG_LEVEL: Log level
    - HASHTREE_LOG_FILE: Log file path
    - HASHTREE_OUTPUT_FORMAT: "human" or "json"
    - HASHTREE_ROOT_FORM: "display" or "raw"
    - HASHTREE_ENCODING: Encoding used for string items
    """
    overrides: dict[str, Any] = {}

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        overrides["default_output_format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")
    if os.getenv(f"{ENV_PREFIX}ROOT_FORM"):
        overrides["root_form"] = os.getenv(f"{ENV_PREFIX}ROOT_FORM")
    if os.getenv(f"{ENV_PREFIX}ENCODING"):
        overrides["encoding"] = os.getenv(f"{ENV_PREFIX}ENCODING")

    return overrides


def load_config_from_dict(data: dict[str, Any]) -> CLIConfig:
    """Load configuration from a dictionary (supports partial data)."""
    unknown = set(data) - set(CLIConfig.__dataclass_fields__)
    if unknown:
        raise ConfigurationException(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
        )
    return CLIConfig(**data).validate()


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    return load_config_from_dict(_env_overrides())


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        if path.suffix in (".yaml", ".yml"):
            import yaml
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ConfigurationException(f"Config file must contain a mapping: {path}")

    return load_config_from_dict(data)


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "hashtree.json",
        Path.cwd() / ".hashtree.json",
        Path.home() / ".config" / "hashtree" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    overrides = _env_overrides()
    if overrides:
        merged = config.to_dict()
        merged.update(overrides)
        config = load_config_from_dict(merged)

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"
