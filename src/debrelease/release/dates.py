from __future__ import annotations

"""
RFC 1123 timestamps as used by the Date and Valid-Until fields.

Two variants are accepted on input::

    Sat, 25 Apr 2015 11:29:38 UTC
    Sat, 25 Apr 2015 11:29:38 +0000

Month and weekday names are always English, independent of the process
locale, so strptime/strftime are not used here.
"""

import re
from datetime import datetime, timedelta, timezone

from debrelease.release.errors import MalformedFieldError

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_DATE_RE = re.compile(
    r"^(?P<weekday>[A-Z][a-z]{2}), "
    r"(?P<day>\d{2}) (?P<month>[A-Z][a-z]{2}) (?P<year>\d{4}) "
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
    r"(?:(?P<zone>[A-Za-z]+)|(?P<sign>[+-])(?P<offset_h>\d{2})(?P<offset_m>\d{2}))$"
)


def parse_release_date(value: str, field: str = "Date") -> datetime:
    """
    Parse an RFC 1123 timestamp into a timezone-aware datetime.

    Named zones are taken as UTC offset zero and keep their name, so that
    formatting the result reproduces the original text.

    Args:
        value: Timestamp text
        field: Field name used in error messages

    Returns:
        Timezone-aware datetime

    Raises:
        MalformedFieldError: If the text does not match either variant
    """
    match = _DATE_RE.match(value)
    if match is None:
        raise MalformedFieldError(field, value, "not an RFC 1123 timestamp")

    if match["weekday"] not in WEEKDAYS:
        raise MalformedFieldError(field, value, "unknown weekday")
    if match["month"] not in MONTHS:
        raise MalformedFieldError(field, value, "unknown month")

    if match["zone"] is not None:
        zone = match["zone"].upper()
        tz = timezone.utc if zone == "UTC" else timezone(timedelta(0), zone)
    else:
        minutes = int(match["offset_h"]) * 60 + int(match["offset_m"])
        if minutes >= 24 * 60:
            raise MalformedFieldError(field, value, "UTC offset out of range")
        offset = timedelta(minutes=minutes)
        tz = timezone(-offset if match["sign"] == "-" else offset)

    try:
        return datetime(
            int(match["year"]),
            MONTHS.index(match["month"]) + 1,
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            tzinfo=tz,
        )
    except ValueError as e:
        raise MalformedFieldError(field, value, str(e)) from e


def format_release_date(value: datetime) -> str:
    """
    Format a datetime the way parse_release_date reads it (naive means UTC).

    Zone names are only written for offset zero; any other offset is written
    numerically, since named zones are read back as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    zone = value.tzname() or ""
    if value.utcoffset() != timedelta(0) or not zone.isalpha():
        zone = value.strftime("%z")

    return (
        f"{WEEKDAYS[value.weekday()]}, {value.day:02d} {MONTHS[value.month - 1]} "
        f"{value.year:04d} {value.hour:02d}:{value.minute:02d}:{value.second:02d} {zone}"
    )
