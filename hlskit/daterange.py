"""
Rendering of #EXT-X-DATERANGE attribute lists.

Date ranges are carried through the encoder as opaque values; this module
checks the attribute constraints of RFC 8216 section 4.4.5.1 and writes the
attribute list in the order the RFC lists the attributes.
"""

import logging
from datetime import timedelta
from typing import NoReturn

from .errors import DateRangeFormatError
from .models import DateRange
from .utils import as_utc, format_seconds, format_timestamp

logger = logging.getLogger(__name__)


def validate_date_range(date_range: DateRange) -> None:
    """
    Check a date range against the RFC 8216 attribute rules.

    Raises:
        DateRangeFormatError: Naming the first attribute that is invalid
    """
    def fail(message: str, field: str, value) -> NoReturn:
        raise DateRangeFormatError(
            f"date range {date_range.id!r}: {message}", field=field, value=value
        )

    if not date_range.id:
        fail("ID is required", "id", date_range.id)
    if date_range.start_date is None:
        fail("START-DATE is required", "start_date", None)
    if date_range.end_on_next:
        if not date_range.class_name:
            fail("END-ON-NEXT requires CLASS", "class_name", date_range.class_name)
        if date_range.duration is not None or date_range.end_date is not None:
            fail("END-ON-NEXT excludes DURATION and END-DATE", "end_on_next", True)
    if date_range.end_date is not None and as_utc(date_range.end_date) < as_utc(date_range.start_date):
        fail(
            f"END-DATE {date_range.end_date} before START-DATE {date_range.start_date}",
            "end_date",
            date_range.end_date,
        )
    for name in ("duration", "planned_duration"):
        value = getattr(date_range, name)
        if value is not None and value < timedelta(0):
            fail(f"negative {name}", name, value)
    for name in date_range.client_attributes:
        if not name.startswith("X-"):
            fail(f"client attribute {name!r} must start with X-", "client_attributes", name)


def format_date_range(date_range: DateRange) -> str:
    """
    Render a date range as an attribute list.

    Example:
        >>> format_date_range(DateRange(id="ad-1", start_date=datetime(2024, 1, 15)))
        'ID="ad-1",START-DATE="2024-01-15T00:00:00.000Z"'
    """
    try:
        validate_date_range(date_range)
    except DateRangeFormatError:
        logger.debug(f"Rejected date range: {date_range!r}")
        raise

    attrs = [f'ID="{date_range.id}"']
    if date_range.class_name:
        attrs.append(f'CLASS="{date_range.class_name}"')
    attrs.append(f'START-DATE="{format_timestamp(date_range.start_date)}"')
    if date_range.end_date is not None:
        attrs.append(f'END-DATE="{format_timestamp(date_range.end_date)}"')
    if date_range.duration is not None:
        attrs.append(f"DURATION={format_seconds(date_range.duration)}")
    if date_range.planned_duration is not None:
        attrs.append(f"PLANNED-DURATION={format_seconds(date_range.planned_duration)}")
    for name, value in date_range.client_attributes.items():
        if isinstance(value, str) and not value.lower().startswith("0x"):
            attrs.append(f'{name}="{value}"')
        else:
            attrs.append(f"{name}={value}")
    if date_range.end_on_next:
        attrs.append("END-ON-NEXT=YES")
    return ",".join(attrs)
