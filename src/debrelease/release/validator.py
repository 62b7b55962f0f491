from __future__ import annotations

"""
Semantic validation of parsed Release records.

See: https://wiki.debian.org/DebianRepository/Format#A.22Release.22_files
"""

import logging
from datetime import datetime

from debrelease.release.architectures import DEFAULT_ARCHITECTURES
from debrelease.release.errors import ReleaseValidationError
from debrelease.release.models import ChecksumAlgorithm, ReleaseMetadata

logger = logging.getLogger(__name__)

NO_SUPPORT_FOR_ARCHITECTURE_ALL_VALUES = ("", "Packages")


def _has_whitespace(value: str) -> bool:
    return any(char.isspace() for char in value)


class ReleaseValidator:
    """
    Validates the field values of a ReleaseMetadata.

    Each check raises ReleaseValidationError; validate() runs them in a fixed
    order, so the first violated rule is the one reported.
    """

    def __init__(
        self,
        release: ReleaseMetadata,
        architectures: frozenset[str] | None = None,
        now: datetime | None = None,
    ):
        """Initialize validator.

        Args:
            release: Record to validate
            architectures: Known architecture names (defaults to DEFAULT_ARCHITECTURES)
            now: Reference time for the expiry check (defaults to current time)
        """
        self.release = release
        self.architectures = DEFAULT_ARCHITECTURES if architectures is None else architectures
        self.now = now

    def validate(self) -> None:
        """Run all checks.

        Raises:
            ReleaseValidationError: For the first rule that is violated
        """
        try:
            self.validate_components()
            self.validate_architectures()
            self.validate_no_support_for_architecture_all()
            self.validate_single_line_fields()
            self.validate_single_word_fields()
            self.validate_date()
            self.validate_valid_until()
            self.validate_file_sums()
            self.validate_automatic()
        except ReleaseValidationError as e:
            logger.debug(f"Release validation failed: {e}")
            raise

    def validate_components(self) -> None:
        if not self.release.components:
            raise ReleaseValidationError("Components", "field is empty")
        if any(not component for component in self.release.components):
            raise ReleaseValidationError("Components", "empty component name")
        for component in self.release.components:
            if _has_whitespace(component):
                raise ReleaseValidationError(
                    "Components", f"component name contains whitespace: {component!r}"
                )

    def validate_architectures(self) -> None:
        if not self.release.architectures:
            raise ReleaseValidationError("Architectures", "field is empty")
        for architecture in self.release.architectures:
            if not architecture or _has_whitespace(architecture):
                raise ReleaseValidationError(
                    "Architectures", f"invalid architecture name: {architecture!r}"
                )
            if architecture not in self.architectures:
                raise ReleaseValidationError(
                    "Architectures", f"unsupported architecture: {architecture!r}"
                )

    def validate_no_support_for_architecture_all(self) -> None:
        value = self.release.no_support_for_architecture_all
        if value not in NO_SUPPORT_FOR_ARCHITECTURE_ALL_VALUES:
            raise ReleaseValidationError(
                "No-Support-for-Architecture-all", f"invalid value: {value!r}"
            )

    def validate_single_line_fields(self) -> None:
        """Description, Origin and Label may contain spaces but not newlines."""
        for field, value in (
            ("Description", self.release.description),
            ("Origin", self.release.origin),
            ("Label", self.release.label),
        ):
            if "\n" in value:
                raise ReleaseValidationError(field, "can not contain multiple lines")

    def validate_single_word_fields(self) -> None:
        """Suite, Codename and Version must be a single word."""
        for field, value in (
            ("Suite", self.release.suite),
            ("Codename", self.release.codename),
            ("Version", self.release.version),
        ):
            if "\n" in value or " " in value:
                raise ReleaseValidationError(field, "can contain only a single word")

    def validate_date(self) -> None:
        if self.release.date is None:
            raise ReleaseValidationError("Date", "field can not be empty")

    def validate_valid_until(self) -> None:
        if self.release.is_expired(self.now):
            raise ReleaseValidationError(
                "Valid-Until", f"release file expired at {self.release.valid_until.isoformat()}"
            )

    def validate_file_sums(self) -> None:
        release = self.release
        if not release.md5sum and not release.sha1 and not release.sha256:
            raise ReleaseValidationError("MD5Sum/SHA1/SHA256", "no files in release file")
        for algorithm in ChecksumAlgorithm:
            for path in release.checksums(algorithm):
                if not path:
                    raise ReleaseValidationError(algorithm.value, "empty filename")
                if _has_whitespace(path):
                    raise ReleaseValidationError(
                        algorithm.value, f"filename contains whitespace: {path!r}"
                    )

    def validate_automatic(self) -> None:
        if self.release.but_automatic_upgrades and not self.release.not_automatic:
            raise ReleaseValidationError(
                "ButAutomaticUpgrades", "can not be set without NotAutomatic"
            )


def validate_release(
    release: ReleaseMetadata,
    architectures: frozenset[str] | None = None,
    now: datetime | None = None,
) -> None:
    """
    Validate a Release record.

    Args:
        release: Record to validate
        architectures: Known architecture names (defaults to DEFAULT_ARCHITECTURES)
        now: Reference time for the Valid-Until check (defaults to current time)

    Raises:
        ReleaseValidationError: For the first rule that is violated
    """
    ReleaseValidator(release, architectures=architectures, now=now).validate()
