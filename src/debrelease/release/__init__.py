from __future__ import annotations

"""
Release/InRelease codec.

Parses the Release metadata of an APT repository into a ReleaseMetadata,
validates it and serializes it back to canonical text.
"""

from debrelease.release.architectures import DEFAULT_ARCHITECTURES, load_architectures
from debrelease.release.errors import (
    MalformedFieldError,
    ReleaseError,
    ReleaseValidationError,
    SerializeError,
    StreamError,
)
from debrelease.release.models import (
    ChecksumAlgorithm,
    FileChecksum,
    MD5FileChecksum,
    ReleaseMetadata,
    SHA1FileChecksum,
    SHA256FileChecksum,
)
from debrelease.release.parser import parse_release, parse_release_bytes, parse_release_file
from debrelease.release.serializer import serialize_release, write_release
from debrelease.release.validator import ReleaseValidator, validate_release

__all__ = [
    "DEFAULT_ARCHITECTURES",
    "ChecksumAlgorithm",
    "FileChecksum",
    "MD5FileChecksum",
    "MalformedFieldError",
    "ReleaseError",
    "ReleaseMetadata",
    "ReleaseValidationError",
    "ReleaseValidator",
    "SHA1FileChecksum",
    "SHA256FileChecksum",
    "SerializeError",
    "StreamError",
    "load_architectures",
    "parse_release",
    "parse_release_bytes",
    "parse_release_file",
    "serialize_release",
    "validate_release",
    "write_release",
]
