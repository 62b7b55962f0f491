"""
Core functionality for debrelease.

This package provides configuration management and console output for the
command-line interface.
"""

from debrelease.core.config import (
    ArchitecturesConfig,
    ConfigLoader,
    GlobalConfig,
    OutputConfig,
    create_example_config,
    load_config,
)
from debrelease.core.output import OutputLevel, Outputter

__all__ = [
    "ArchitecturesConfig",
    "ConfigLoader",
    "GlobalConfig",
    "OutputConfig",
    "OutputLevel",
    "Outputter",
    "create_example_config",
    "load_config",
]
