"""
Configuration management for debrelease.

This module provides Pydantic models for configuration validation and
YAML-based configuration loading.
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from debrelease.release.architectures import DEFAULT_ARCHITECTURES, load_architectures

CONFIG_ENV_VAR = "DEBRELEASE_CONFIG"


class ArchitecturesConfig(BaseModel):
    """Set of architecture names accepted by the validator."""

    include_defaults: bool = True  # Start from the packaged dpkg-architecture list
    extra: List[str] = Field(default_factory=list)  # e.g. ["my-custom-arch"]
    file: Optional[str] = None  # One name per line, e.g. `dpkg-architecture -L` output

    @field_validator("extra")
    @classmethod
    def validate_extra(cls, v: List[str]) -> List[str]:
        """Validate extra architecture names."""
        for name in v:
            if not name or " " in name:
                raise ValueError(f"Invalid architecture name: {name!r}")
        return v

    def resolve(self, base_dir: Optional[Path] = None) -> frozenset[str]:
        """Build the architecture set.

        Args:
            base_dir: Directory relative file paths are resolved against

        Returns:
            Known architecture names

        Raises:
            FileNotFoundError: If the configured file does not exist
        """
        names: set[str] = set()
        if self.include_defaults:
            names.update(DEFAULT_ARCHITECTURES)
        if self.file:
            path = Path(self.file)
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            names.update(load_architectures(path))
        names.update(self.extra)
        return frozenset(names)


class OutputConfig(BaseModel):
    """CLI output configuration."""

    format: str = "table"  # table, json
    verbose: bool = False

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate output format."""
        valid_formats = ["table", "json"]
        if v not in valid_formats:
            raise ValueError(f"Invalid output format: {v}. Must be one of {valid_formats}")
        return v


class GlobalConfig(BaseModel):
    """Global debrelease configuration."""

    architectures: ArchitecturesConfig = Field(default_factory=ArchitecturesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # Directory of the loaded config file, used for relative paths
    config_dir: Optional[Path] = None

    def known_architectures(self) -> frozenset[str]:
        """Return the architecture set for validation."""
        return self.architectures.resolve(self.config_dir)


class ConfigLoader:
    """Configuration file loader."""

    def __init__(self, config_path: Path):
        """Initialize config loader.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = config_path

    def load(self) -> GlobalConfig:
        """Load configuration from YAML file.

        Returns:
            GlobalConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"YAML syntax error in {self.config_path}:\n{e}")

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration in {self.config_path} must be a mapping")

        config_data.setdefault("config_dir", self.config_path.parent)

        # Validate and create GlobalConfig
        try:
            return GlobalConfig(**config_data)
        except Exception as e:
            raise ValueError(f"Configuration validation error in {self.config_path}:\n{e}")


def load_config(config_path: Optional[Path] = None) -> GlobalConfig:
    """Load configuration from file.

    Priority:
    1. Explicit config_path parameter (--config CLI flag)
    2. DEBRELEASE_CONFIG environment variable
    3. Default locations (/etc/debrelease/config.yaml, ~/.config/debrelease/config.yaml,
       ./config.yaml)

    Args:
        config_path: Path to config file. If None, tries DEBRELEASE_CONFIG env or default
            locations.

    Returns:
        GlobalConfig instance

    Raises:
        FileNotFoundError: If an explicitly requested config file is missing
    """
    # Default config locations
    default_paths = [
        Path("/etc/debrelease/config.yaml"),
        Path.home() / ".config" / "debrelease" / "config.yaml",
        Path("config.yaml"),
    ]

    if config_path:
        # Explicit path from CLI flag
        paths_to_try = [config_path]
    elif os.environ.get(CONFIG_ENV_VAR):
        paths_to_try = [Path(os.environ[CONFIG_ENV_VAR])]
    else:
        paths_to_try = default_paths

    for path in paths_to_try:
        if path.exists():
            loader = ConfigLoader(path)
            return loader.load()

    # No config found
    if config_path:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    elif os.environ.get(CONFIG_ENV_VAR):
        raise FileNotFoundError(
            f"Configuration file not found: {os.environ[CONFIG_ENV_VAR]} (from {CONFIG_ENV_VAR})"
        )
    else:
        # Return default config if no file found
        return GlobalConfig()


def create_example_config(output_path: Path) -> None:
    """Create an example configuration file.

    Args:
        output_path: Path to write example config
    """
    example_config = {
        "architectures": {
            "include_defaults": True,
            "extra": [],
            "file": None,
        },
        "output": {
            "format": "table",
            "verbose": False,
        },
    }

    with open(output_path, "w") as f:
        yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
