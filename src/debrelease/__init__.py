from __future__ import annotations

"""
debrelease - Debian Release/InRelease codec

Parses the Release metadata of APT repositories into validated Pydantic
models and writes them back as canonical, byte-reproducible text.
"""

__version__ = "0.1.0"
__author__ = "Simon Lauger"
__license__ = "MIT"

# Make version accessible
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

try:
    __version__ = _version("debrelease")
except PackageNotFoundError:
    # Package not installed yet
    pass
