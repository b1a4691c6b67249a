"""
Exception hierarchy for HLSKit.

Decode errors carry the token that caused them, encode errors the segment
and field that failed validation. All of them subclass ValueError so that
callers treating malformed input generically keep working.
"""

from typing import Any, Optional

from .models import Segment, Token


class HLSError(Exception):
    """Base class for all HLSKit errors."""


class DecodeError(HLSError, ValueError):
    """A segment or playlist could not be decoded."""

    def __init__(self, message: str, token: Optional[Token] = None):
        super().__init__(message)
        self.token = token


class InvalidDurationError(DecodeError):
    """An #EXTINF operand is not a valid duration literal."""


class InvalidByteRangeError(DecodeError):
    """An #EXT-X-BYTERANGE operand is not of the form length[@offset]."""


class MissingURIError(DecodeError):
    """The token stream ended before the segment URI."""


class UnsupportedTagError(DecodeError):
    """A tag the segment decoder does not handle."""

    def __init__(self, token: Token):
        super().__init__(f"parsing {token} unsupported", token)
        self.tag = token.value


class UpstreamError(DecodeError):
    """The lexer reported an error token."""

    def __init__(self, token: Token):
        super().__init__(token.value, token)
        self.message = token.value


class PlaylistFormatError(DecodeError):
    """The text is not a media playlist."""


class EncodeError(HLSError, ValueError):
    """A segment could not be encoded."""

    def __init__(self, message: str, segment: Optional[Segment] = None,
                 field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.segment = segment
        self.field = field
        self.value = value


class SegmentMissingURIError(EncodeError):
    """A segment without a URI."""


class ZeroDurationError(EncodeError):
    """A segment with zero duration."""


class InvalidURIError(EncodeError):
    """A segment URI that would not fit on one playlist line."""


class DateRangeFormatError(EncodeError):
    """A date range whose attributes violate RFC 8216."""


class FetchError(HLSError):
    """A playlist could not be retrieved."""
