from __future__ import annotations

"""
Parser for APT Release and InRelease files.

A Release file is a single RFC822-style stanza::

    Origin: Debian
    Suite: stable
    Architectures: amd64 i386
    Date: Sat, 25 Apr 2015 11:29:38 UTC
    MD5Sum:
     0b5ac7b6ea1d6b4c4acaf6f2e41a1f0a  1194094 main/binary-amd64/Packages

Lines starting with a space belong to the checksum section opened by the
last ``MD5Sum:``, ``SHA1:`` or ``SHA256:`` header. Unknown fields, and the
PGP armour around an InRelease body, are skipped.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO

from debrelease.release.dates import parse_release_date
from debrelease.release.errors import MalformedFieldError, StreamError
from debrelease.release.fields import FIELDS_BY_TOKEN, FieldKind, FieldSpec
from debrelease.release.models import (
    FINGERPRINT_SIZE,
    ChecksumAlgorithm,
    FileChecksum,
    ReleaseMetadata,
)
from debrelease.release.validator import validate_release

logger = logging.getLogger(__name__)

SECTIONS_BY_TOKEN: dict[str, ChecksumAlgorithm] = {
    algorithm.header: algorithm for algorithm in ChecksumAlgorithm
}

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")

_BOOLEANS = {"yes": True, "no": False}


def iter_lines(stream: BinaryIO) -> Iterator[tuple[int, str]]:
    """
    Yield ``(line_number, text)`` for each line of a binary stream.

    Line terminators and trailing blanks are removed. Lines have no length
    limit.

    Raises:
        StreamError: If reading from the stream fails
        MalformedFieldError: If a line is not valid UTF-8
    """
    line_number = 0
    while True:
        try:
            raw = stream.readline()
        except OSError as e:
            raise StreamError(f"Failed to read Release data: {e}") from e
        if not raw:
            return

        line_number += 1
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedFieldError(
                "line", raw.decode("utf-8", "replace"), "not valid UTF-8", line_number
            ) from e

        yield line_number, text.rstrip("\r\n").rstrip(" \t")


def tokenize_line(line: str) -> list[str]:
    """
    Split a line on single spaces.

    Empty tokens are kept so the value can be rejoined verbatim; a line
    starting with a space has an empty first token.
    """
    return line.split(" ")


def decode_hex(field: str, text: str, line_number: int | None = None) -> bytes:
    """Decode a hex string, rejecting odd lengths and non-hex characters."""
    if not _HEX_RE.fullmatch(text):
        raise MalformedFieldError(field, text, "invalid hex string", line_number)
    return bytes.fromhex(text)


def decode_checksum_entry(
    tokens: Iterable[str], algorithm: ChecksumAlgorithm, line_number: int | None = None
) -> tuple[str, FileChecksum]:
    """
    Decode one ``<digest> <length> <path>`` line of a checksum section.

    Args:
        tokens: Tokens of the line; empty tokens are skipped
        algorithm: Section the line belongs to
        line_number: Line number for error messages

    Returns:
        Tuple of (path, checksum entry)

    Raises:
        MalformedFieldError: If the digest, length or token count is invalid
    """
    field = algorithm.value
    words = [token for token in tokens if token]
    if len(words) != 3:
        raise MalformedFieldError(
            field, " ".join(words), "expected digest, length and path", line_number
        )

    hexdigest, length_text, path = words

    digest = decode_hex(field, hexdigest, line_number)
    if len(digest) != algorithm.digest_size:
        raise MalformedFieldError(
            field,
            hexdigest,
            f"digest must be {algorithm.digest_size} bytes, got {len(digest)}",
            line_number,
        )

    if not (length_text.isascii() and length_text.isdigit()):
        raise MalformedFieldError(field, length_text, "invalid file length", line_number)

    return path, algorithm.entry_type(length=int(length_text), digest=digest)


def decode_field(spec: FieldSpec, tokens: list[str], line_number: int | None = None) -> Any:
    """
    Decode the value tokens of a recognized field.

    Args:
        spec: Field being decoded
        tokens: Tokens after the ``Label:`` token
        line_number: Line number for error messages

    Returns:
        Decoded value for the ReleaseMetadata attribute

    Raises:
        MalformedFieldError: If the value does not match the field's grammar
    """
    value = " ".join(tokens)

    if spec.kind == FieldKind.TEXT:
        return value

    if spec.kind == FieldKind.WORD_LIST:
        return tuple(tokens)

    if spec.kind == FieldKind.DATE:
        try:
            return parse_release_date(value, spec.label)
        except MalformedFieldError as e:
            raise MalformedFieldError(spec.label, value, e.reason, line_number) from e

    if spec.kind == FieldKind.BOOLEAN:
        if value not in _BOOLEANS:
            raise MalformedFieldError(spec.label, value, "expected 'yes' or 'no'", line_number)
        return _BOOLEANS[value]

    if spec.kind == FieldKind.FINGERPRINTS:
        fingerprints = []
        for item in "".join(tokens).split(","):
            item = item.strip()
            fingerprint = decode_hex(spec.label, item, line_number)
            if len(fingerprint) != FINGERPRINT_SIZE:
                raise MalformedFieldError(
                    spec.label,
                    item,
                    f"fingerprint must be {FINGERPRINT_SIZE} bytes, got {len(fingerprint)}",
                    line_number,
                )
            fingerprints.append(fingerprint)
        return tuple(fingerprints)

    raise ValueError(f"Unhandled field kind: {spec.kind}")


class ReleaseParser:
    """
    Line-by-line parser for a single Release document.

    Field lines overwrite earlier occurrences of the same field; checksum
    lines accumulate into the map of the open section. Use one instance per
    document.
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}
        self._checksums: dict[ChecksumAlgorithm, dict[str, FileChecksum]] = {
            algorithm: {} for algorithm in ChecksumAlgorithm
        }
        self._section: ChecksumAlgorithm | None = None

    def feed_line(self, line: str, line_number: int | None = None) -> None:
        """
        Process one line (without terminator).

        Raises:
            MalformedFieldError: If a recognized line cannot be decoded
        """
        if not line:
            return

        tokens = tokenize_line(line)
        head = tokens[0]

        if head == "" or line[0] == "\t":
            if self._section is None:
                logger.debug(f"Ignoring continuation line {line_number} outside checksum section")
                return
            path, entry = decode_checksum_entry(line.split(), self._section, line_number)
            self._checksums[self._section][path] = entry
            return

        if head in SECTIONS_BY_TOKEN:
            self._section = SECTIONS_BY_TOKEN[head]
            logger.debug(f"Entering {self._section.value} section at line {line_number}")
            return

        self._section = None

        spec = FIELDS_BY_TOKEN.get(head)
        if spec is None:
            logger.debug(f"Ignoring unknown field at line {line_number}: {head}")
            return

        self._fields[spec.attribute] = decode_field(spec, tokens[1:], line_number)

    def build(self) -> ReleaseMetadata:
        """Build the (not yet validated) record from the lines seen so far."""
        checksums = {
            algorithm.attribute: entries for algorithm, entries in self._checksums.items()
        }
        return ReleaseMetadata(**self._fields, **checksums)


def parse_release(
    stream: BinaryIO,
    architectures: frozenset[str] | None = None,
    now: datetime | None = None,
) -> ReleaseMetadata:
    """
    Parse and validate a Release or InRelease file.

    The signature of an InRelease file is not checked; armour lines are
    skipped like unknown fields.

    Args:
        stream: Binary stream positioned at the start of the document
        architectures: Known architecture names (defaults to DEFAULT_ARCHITECTURES)
        now: Reference time for the Valid-Until check (defaults to current time)

    Returns:
        Validated ReleaseMetadata

    Raises:
        StreamError: If reading the stream fails
        MalformedFieldError: If a field value cannot be decoded
        ReleaseValidationError: If the document violates a Release format rule

    Example:
        >>> import io
        >>> data = b'''Origin: Debian
        ... Suite: stable
        ... Architectures: amd64
        ... Components: main
        ... Date: Sat, 25 Apr 2015 11:29:38 UTC
        ... MD5Sum:
        ...  0b5ac7b6ea1d6b4c4acaf6f2e41a1f0a  1194094 main/binary-amd64/Packages
        ... '''
        >>> release = parse_release(io.BytesIO(data))
        >>> release.md5sum["main/binary-amd64/Packages"].length
        1194094
    """
    parser = ReleaseParser()
    for line_number, line in iter_lines(stream):
        parser.feed_line(line, line_number)

    release = parser.build()
    validate_release(release, architectures=architectures, now=now)

    logger.debug(
        f"Parsed Release {release.origin} {release.suite}: "
        f"{len(release.md5sum)} MD5Sum, {len(release.sha1)} SHA1, "
        f"{len(release.sha256)} SHA256 entries"
    )
    return release


def parse_release_bytes(
    data: bytes,
    architectures: frozenset[str] | None = None,
    now: datetime | None = None,
) -> ReleaseMetadata:
    """Parse a Release file held in memory."""
    return parse_release(BytesIO(data), architectures=architectures, now=now)


def parse_release_file(
    file_path: Path,
    architectures: frozenset[str] | None = None,
    now: datetime | None = None,
) -> ReleaseMetadata:
    """
    Parse a Release or InRelease file from disk.

    Args:
        file_path: Path to the file

    Returns:
        Validated ReleaseMetadata
    """
    try:
        f = open(file_path, "rb")
    except OSError as e:
        raise StreamError(f"Failed to open {file_path}: {e}") from e

    with f:
        return parse_release(f, architectures=architectures, now=now)
