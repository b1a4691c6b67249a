"""
Shared utility functions for HLSKit.

Provides the duration codec used by both the segment decoder and encoder,
plus byte range and timestamp helpers.
"""

import re
from datetime import datetime, timedelta, timezone
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from .errors import InvalidByteRangeError, InvalidDurationError
from .models import ByteRange, Token, TokenType

_DURATION_RE = re.compile(r"(?P<whole>\d*)(?:\.(?P<frac>\d*))?", re.ASCII)
_BYTE_RANGE_RE = re.compile(r"(?P<length>\d+)(?:@(?P<offset>\d+))?", re.ASCII)

_MICROSECOND = timedelta(microseconds=1)
_MILLISECOND = Decimal("0.001")
_MICROSECOND_DIGITS = Decimal("0.000001")


def parse_duration(token: Optional[Token]) -> timedelta:
    """
    Convert an #EXTINF operand to a duration.

    Some literals convert straight to whole seconds, e.g. "10" or "10.000".
    Others, e.g. "9.967", go through a decimal conversion that is truncated
    to whole microseconds, which is enough to represent timestamps derived
    from a 90kHz media clock.

    Args:
        token: NUMBER or ATTR_NAME token holding the literal

    Returns:
        Duration with microsecond resolution

    Raises:
        InvalidDurationError: If the token is missing, of the wrong type or
            not a non-negative decimal literal

    Example:
        >>> parse_duration(Token(TokenType.NUMBER, "9.967"))
        datetime.timedelta(seconds=9, microseconds=967000)
    """
    if token is None:
        raise InvalidDurationError("parse segment duration: missing duration")
    if token.type not in (TokenType.NUMBER, TokenType.ATTR_NAME):
        raise InvalidDurationError(
            f"parse segment duration: got {token}: want attribute name or number", token
        )

    literal = token.value
    match = _DURATION_RE.fullmatch(literal)
    if match is None or not literal.strip("."):
        raise InvalidDurationError(f"parse segment duration: invalid literal {token}", token)

    whole, frac = match.group("whole"), match.group("frac")
    try:
        # 10
        if frac is None:
            return timedelta(seconds=int(whole))

        # 10.000
        if not frac.strip("0"):
            if not whole:
                raise InvalidDurationError(
                    f"parse segment duration: invalid literal {token}", token
                )
            return timedelta(seconds=int(whole))

        # 9.967
        seconds = Decimal(literal).quantize(_MICROSECOND_DIGITS, rounding=ROUND_DOWN)
        microseconds = int(seconds * 1_000_000)
        return timedelta(microseconds=microseconds)
    except (OverflowError, InvalidOperation) as e:
        raise InvalidDurationError(
            f"parse segment duration: {token}: {e}", token
        ) from e


def format_duration(duration: timedelta) -> str:
    """
    Render a duration as seconds with exactly three decimals.

    Three decimals match the precision of widely used reference playlists.
    Sub-millisecond remainders are rounded half up.

    Example:
        >>> format_duration(timedelta(microseconds=9967000))
        '9.967'
        >>> format_duration(timedelta(seconds=10))
        '10.000'
    """
    microseconds = duration // _MICROSECOND
    seconds = (Decimal(microseconds) / 1_000_000).quantize(_MILLISECOND, rounding=ROUND_HALF_UP)
    return f"{seconds:f}"


def parse_byte_range(value: str, token: Optional[Token] = None) -> ByteRange:
    """
    Parse a byte range of the form "length" or "length@offset".

    Args:
        value: Byte range text
        token: Token the text came from, reported on failure

    Returns:
        ByteRange, with offset None when omitted

    Example:
        >>> parse_byte_range("1000@200")
        ByteRange(length=1000, offset=200)
    """
    match = _BYTE_RANGE_RE.fullmatch(value)
    if match is None:
        where = token if token is not None else repr(value)
        raise InvalidByteRangeError(f"parse byte range: {where}: want length[@offset]", token)
    offset = match.group("offset")
    return ByteRange(int(match.group("length")), int(offset) if offset is not None else None)


def format_timestamp(moment: datetime) -> str:
    """
    Format a datetime as RFC 3339 with millisecond precision in UTC.

    Naive datetimes are taken to be UTC already.

    Example:
        >>> format_timestamp(datetime(2024, 1, 15, 10, 30))
        '2024-01-15T10:30:00.000Z'
    """
    moment = as_utc(moment)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def format_seconds(duration: timedelta) -> str:
    """Render a duration as decimal seconds without trailing zeros."""
    microseconds = duration // _MICROSECOND
    seconds = Decimal(microseconds) / 1_000_000
    text = f"{seconds:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def as_utc(moment: datetime) -> datetime:
    """Return an aware UTC datetime, taking naive datetimes to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
