"""
Segment decoder for HLSKit.

Assembles media segments (RFC 8216 section 4.4.4) from a token stream. A
segment starts at a tag, accumulates the effect of each tag that follows,
and ends at the URL token.

Only the duration, byte range and discontinuity tags are handled. Every
other tag fails with UnsupportedTagError rather than being dropped, so that
playlists using features the decoder does not model are never silently
truncated.
"""

import logging
from typing import Iterable, Iterator, Optional

from .errors import (
    InvalidByteRangeError,
    MissingURIError,
    UnsupportedTagError,
    UpstreamError,
)
from .lexer import TokenStream
from .models import Segment, Token, TokenType
from .tags import TAG_BYTE_RANGE, TAG_DISCONTINUITY, TAG_DURATION, TAG_KEY
from .utils import parse_byte_range, parse_duration

logger = logging.getLogger(__name__)


def _operand(tokens: TokenStream) -> Optional[Token]:
    token = tokens.pull()
    if token is not None and token.type is TokenType.ERROR:
        raise UpstreamError(token)
    return token


def _apply_tag(seg: Segment, tag: Token, tokens: TokenStream) -> None:
    if tag.value == TAG_DURATION:
        # Last one wins if the tag repeats before the URI.
        seg.duration = parse_duration(_operand(tokens))
    elif tag.value == TAG_BYTE_RANGE:
        token = _operand(tokens)
        if token is None or token.type is not TokenType.STRING:
            got = token if token is not None else "end of playlist"
            raise InvalidByteRangeError(
                f"parse byte range: got {got}, want {TokenType.STRING.value}", token
            )
        seg.byte_range = parse_byte_range(token.value, token)
    elif tag.value == TAG_DISCONTINUITY:
        seg.discontinuity = True
    elif tag.value == TAG_KEY:
        raise UnsupportedTagError(tag)
    else:
        raise UnsupportedTagError(tag)


def _as_stream(tokens: Iterable[Token]) -> TokenStream:
    if isinstance(tokens, TokenStream):
        return tokens
    return TokenStream(tokens)


def decode_segment(tokens: Iterable[Token], leading: Optional[Token] = None) -> Segment:
    """
    Decode the next segment from a token stream.

    Args:
        tokens: Token sequence positioned after the leading tag. Pass a
            TokenStream to keep the cursor shared with the caller.
        leading: Tag that signaled the start of the segment, already
            removed from the stream

    Returns:
        The decoded segment

    Raises:
        InvalidDurationError: If an #EXTINF operand is malformed
        InvalidByteRangeError: If an #EXT-X-BYTERANGE operand is malformed
        UnsupportedTagError: For any tag other than #EXTINF,
            #EXT-X-BYTERANGE and #EXT-X-DISCONTINUITY
        UpstreamError: If the stream yields an ERROR token
        MissingURIError: If the stream ends before the URI

    Example:
        >>> tokens = [Token(TokenType.NUMBER, "10"), Token(TokenType.URL, "a.ts")]
        >>> seg = decode_segment(tokens, Token(TokenType.TAG, "#EXTINF"))
        >>> seg.uri, seg.duration.total_seconds()
        ('a.ts', 10.0)
    """
    stream = _as_stream(tokens)
    seg = Segment()

    if leading is not None:
        if leading.type is TokenType.ERROR:
            raise UpstreamError(leading)
        if leading.type is TokenType.URL:
            seg.uri = leading.value
            return seg
        if leading.type is TokenType.TAG:
            _apply_tag(seg, leading, stream)

    for token in stream:
        if token.type is TokenType.ERROR:
            raise UpstreamError(token)
        if token.type is TokenType.URL:
            seg.uri = token.value
            logger.debug(
                f"Decoded segment {seg.uri} ({seg.duration.total_seconds():.3f}s) "
                f"ending on line {token.line}"
            )
            return seg
        if token.type is TokenType.TAG:
            _apply_tag(seg, token, stream)
        # Stray operands, e.g. an #EXTINF title, are skipped.

    raise MissingURIError(f"no url after line {stream.line}")


class SegmentDecoder:
    """
    Decoder for consecutive segments of one token stream.

    Example:
        >>> decoder = SegmentDecoder(tokenize("#EXTINF:10,\\na.ts\\n#EXTINF:9.967,\\nb.ts"))
        >>> [seg.uri for seg in decoder]
        ['a.ts', 'b.ts']
    """

    def __init__(self, tokens: Iterable[Token]):
        self.tokens = _as_stream(tokens)

    def decode(self, leading: Optional[Token] = None) -> Segment:
        """Decode one segment, see decode_segment()."""
        return decode_segment(self.tokens, leading)

    def __iter__(self) -> Iterator[Segment]:
        while self.tokens.peek() is not None:
            yield self.decode(self.tokens.pull())
