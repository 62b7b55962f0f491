from __future__ import annotations

"""
Serializer for APT Release files.

Output is canonical: fields in RELEASE_FIELDS order, checksum entries sorted
by path, lengths right-justified to LENGTH_WIDTH columns (the layout written
by apt-ftparchive and dak), trailing whitespace trimmed and blank lines
dropped. Parsing the output and serializing again yields the same bytes.
"""

import logging
from typing import Any, BinaryIO

from debrelease.release.dates import format_release_date
from debrelease.release.errors import SerializeError, StreamError
from debrelease.release.fields import RELEASE_FIELDS, FieldKind, FieldSpec
from debrelease.release.models import ChecksumAlgorithm, FileChecksum, ReleaseMetadata

logger = logging.getLogger(__name__)

LENGTH_WIDTH = 8


def format_checksum_entry(path: str, entry: FileChecksum) -> str:
    """Format one checksum line, e.g. `` <digest>  1194094 main/binary-amd64/Packages``."""
    return f" {entry.hexdigest} {entry.length:{LENGTH_WIDTH}d} {path}"


def format_field(spec: FieldSpec, value: Any) -> str | None:
    """
    Format one ``Label: value`` line.

    Returns:
        The line, or None if the field is unset and must be omitted
    """
    if spec.kind == FieldKind.TEXT:
        text = value
    elif spec.kind == FieldKind.WORD_LIST:
        text = " ".join(value)
    elif spec.kind == FieldKind.DATE:
        text = format_release_date(value) if value is not None else ""
    elif spec.kind == FieldKind.BOOLEAN:
        # "no" is the default and never written
        text = "yes" if value else ""
    elif spec.kind == FieldKind.FINGERPRINTS:
        text = ",".join(fingerprint.hex() for fingerprint in value)
    else:
        raise SerializeError(f"Unhandled field kind: {spec.kind}")

    if not text:
        return None
    return f"{spec.label}: {text}"


def release_lines(release: ReleaseMetadata) -> list[str]:
    """
    Build the lines of a Release file, without terminators.

    Raises:
        SerializeError: If the record has no Date
    """
    if release.date is None:
        raise SerializeError("Release record has no Date")

    lines = []
    for spec in RELEASE_FIELDS:
        line = format_field(spec, getattr(release, spec.attribute))
        if line is not None:
            lines.append(line)

    for algorithm in ChecksumAlgorithm:
        entries = release.checksums(algorithm)
        if not entries:
            continue
        lines.append(algorithm.header)
        for path in sorted(entries):
            lines.append(format_checksum_entry(path, entries[path]))

    # Values may carry trailing blanks or be blank themselves
    normalized = []
    for line in lines:
        line = line.rstrip()
        if line:
            normalized.append(line)
    return normalized


def serialize_release(release: ReleaseMetadata) -> bytes:
    """
    Serialize a Release record to canonical bytes.

    Args:
        release: Record to serialize (not modified)

    Returns:
        UTF-8 encoded Release text, one ``\\n``-terminated line per field

    Raises:
        SerializeError: If the record has no Date
    """
    content = "".join(f"{line}\n" for line in release_lines(release))
    return content.encode("utf-8")


def write_release(release: ReleaseMetadata, stream: BinaryIO) -> int:
    """
    Write a Release record to a binary stream.

    Args:
        release: Record to serialize
        stream: Writable binary stream (not closed)

    Returns:
        Number of bytes written

    Raises:
        SerializeError: If the record has no Date
        StreamError: If writing to the stream fails
    """
    data = serialize_release(release)
    try:
        stream.write(data)
        stream.flush()
    except OSError as e:
        raise StreamError(f"Failed to write Release data: {e}") from e

    logger.debug(f"Wrote {len(data)} bytes of Release data")
    return len(data)
