from __future__ import annotations

"""
Table of the scalar Release fields understood by this package.

The order of RELEASE_FIELDS is the canonical output order used by the
serializer; the checksum sections always follow it.
"""

from dataclasses import dataclass
from enum import Enum


class FieldKind(Enum):
    """How a field value is encoded on the wire."""

    TEXT = "text"  # rest of the line, verbatim
    WORD_LIST = "word-list"  # space separated list
    DATE = "date"  # RFC 1123 timestamp
    BOOLEAN = "boolean"  # literal yes/no
    FINGERPRINTS = "fingerprints"  # comma separated hex key fingerprints


@dataclass(frozen=True)
class FieldSpec:
    """One recognized ``Label: value`` line."""

    label: str
    attribute: str
    kind: FieldKind

    @property
    def token(self) -> str:
        """Leading token of the line, e.g. ``Origin:``."""
        return f"{self.label}:"


RELEASE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("Origin", "origin", FieldKind.TEXT),
    FieldSpec("Label", "label", FieldKind.TEXT),
    FieldSpec("Suite", "suite", FieldKind.TEXT),
    FieldSpec("Version", "version", FieldKind.TEXT),
    FieldSpec("Codename", "codename", FieldKind.TEXT),
    FieldSpec("Date", "date", FieldKind.DATE),
    FieldSpec("Architectures", "architectures", FieldKind.WORD_LIST),
    FieldSpec("Components", "components", FieldKind.WORD_LIST),
    FieldSpec("Description", "description", FieldKind.TEXT),
    FieldSpec(
        "No-Support-for-Architecture-all", "no_support_for_architecture_all", FieldKind.TEXT
    ),
    FieldSpec("Valid-Until", "valid_until", FieldKind.DATE),
    FieldSpec("NotAutomatic", "not_automatic", FieldKind.BOOLEAN),
    FieldSpec("ButAutomaticUpgrades", "but_automatic_upgrades", FieldKind.BOOLEAN),
    FieldSpec("Acquire-By-Hash", "acquire_by_hash", FieldKind.BOOLEAN),
    FieldSpec("Signed-By", "signed_by", FieldKind.FINGERPRINTS),
)

FIELDS_BY_TOKEN: dict[str, FieldSpec] = {spec.token: spec for spec in RELEASE_FIELDS}
