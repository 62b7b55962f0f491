from __future__ import annotations

"""
Pydantic models for Debian Release/InRelease metadata.

See: https://wiki.debian.org/DebianRepository/Format#A.22Release.22_files
"""

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

FINGERPRINT_SIZE = 20


class FileChecksum(BaseModel):
    """Size and digest of one index file listed in a checksum section."""

    model_config = ConfigDict(frozen=True)

    digest_size: ClassVar[int] = 0

    length: int = Field(..., ge=0, description="File size in bytes")
    digest: bytes = Field(..., description="Raw digest bytes")

    @field_validator("digest")
    @classmethod
    def validate_digest_size(cls, v: bytes) -> bytes:
        """Validate that the digest has the size of the algorithm."""
        if len(v) != cls.digest_size:
            raise ValueError(f"digest must be {cls.digest_size} bytes, got {len(v)}")
        return v

    @field_serializer("digest", when_used="json")
    def serialize_digest(self, v: bytes) -> str:
        return v.hex()

    @property
    def hexdigest(self) -> str:
        """Lowercase hex form of the digest."""
        return self.digest.hex()


class MD5FileChecksum(FileChecksum):
    """Entry of the MD5Sum section."""

    digest_size: ClassVar[int] = 16


class SHA1FileChecksum(FileChecksum):
    """Entry of the SHA1 section."""

    digest_size: ClassVar[int] = 20


class SHA256FileChecksum(FileChecksum):
    """Entry of the SHA256 section."""

    digest_size: ClassVar[int] = 32


class ChecksumAlgorithm(Enum):
    """Checksum sections of a Release file, valued by their section label."""

    MD5 = "MD5Sum"
    SHA1 = "SHA1"
    SHA256 = "SHA256"

    @property
    def header(self) -> str:
        """Section header line, e.g. ``MD5Sum:``."""
        return f"{self.value}:"

    @property
    def attribute(self) -> str:
        """Name of the ReleaseMetadata field holding this section."""
        return _ALGORITHM_ATTRIBUTES[self]

    @property
    def entry_type(self) -> type[FileChecksum]:
        return _ALGORITHM_ENTRY_TYPES[self]

    @property
    def digest_size(self) -> int:
        return self.entry_type.digest_size


_ALGORITHM_ATTRIBUTES = {
    ChecksumAlgorithm.MD5: "md5sum",
    ChecksumAlgorithm.SHA1: "sha1",
    ChecksumAlgorithm.SHA256: "sha256",
}

_ALGORITHM_ENTRY_TYPES: dict[ChecksumAlgorithm, type[FileChecksum]] = {
    ChecksumAlgorithm.MD5: MD5FileChecksum,
    ChecksumAlgorithm.SHA1: SHA1FileChecksum,
    ChecksumAlgorithm.SHA256: SHA256FileChecksum,
}


class ReleaseMetadata(BaseModel):
    """
    Pydantic model for one APT Release/InRelease document.

    Instances are immutable once built. Semantic rules (known architectures,
    single-word suite, expiry...) are not enforced here; see
    debrelease.release.validator.
    """

    model_config = ConfigDict(frozen=True)

    # Optional descriptive fields
    description: str = Field("", description="Free-text description (single line)")
    origin: str = Field("", description="Distribution origin (Debian, Ubuntu)")
    label: str = Field("", description="Distribution label (single line)")
    version: str = Field("", description="Release version (single word)")
    suite: str = Field("", description="Suite name (stable, jammy, bookworm)")
    codename: str = Field("", description="Codename (bookworm, jammy)")
    no_support_for_architecture_all: str = Field(
        "", description="Empty or 'Packages' (No-Support-for-Architecture-all)"
    )

    # Repository layout
    components: tuple[str, ...] = Field(
        default_factory=tuple, description="Repository components (main, contrib, non-free)"
    )
    architectures: tuple[str, ...] = Field(
        default_factory=tuple, description="Supported architectures"
    )

    # Timestamps
    date: datetime | None = Field(None, description="Creation time of the Release file")
    valid_until: datetime | None = Field(None, description="Expiration time, if any")

    # Checksums for index files: {relative path: entry}
    md5sum: dict[str, MD5FileChecksum] = Field(default_factory=dict, description="MD5Sum section")
    sha1: dict[str, SHA1FileChecksum] = Field(default_factory=dict, description="SHA1 section")
    sha256: dict[str, SHA256FileChecksum] = Field(
        default_factory=dict, description="SHA256 section"
    )

    # Package manager hints
    not_automatic: bool = Field(False, description="NotAutomatic flag")
    but_automatic_upgrades: bool = Field(False, description="ButAutomaticUpgrades flag")
    acquire_by_hash: bool = Field(False, description="Acquire-By-Hash support enabled")

    # Signed-By key fingerprints
    signed_by: tuple[bytes, ...] = Field(
        default_factory=tuple, description="Fingerprints of keys allowed to sign the next Release"
    )

    @field_validator("date", "valid_until")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Interpret naive timestamps as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("signed_by")
    @classmethod
    def validate_fingerprints(cls, v: tuple[bytes, ...]) -> tuple[bytes, ...]:
        for fingerprint in v:
            if len(fingerprint) != FINGERPRINT_SIZE:
                raise ValueError(
                    f"fingerprint must be {FINGERPRINT_SIZE} bytes, got {len(fingerprint)}"
                )
        return v

    @field_serializer("signed_by", when_used="json")
    def serialize_fingerprints(self, v: tuple[bytes, ...]) -> list[str]:
        return [fingerprint.hex() for fingerprint in v]

    def checksums(self, algorithm: ChecksumAlgorithm) -> dict[str, FileChecksum]:
        """Return the checksum map for one algorithm."""
        return getattr(self, algorithm.attribute)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether Valid-Until is set and lies before ``now``."""
        if self.valid_until is None:
            return False
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now > self.valid_until
