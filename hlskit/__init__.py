"""
HLSKit - HLS Media Segment Codec

A library for decoding and encoding the media segments of HLS (HTTP Live
Streaming) playlists as described in RFC 8216 section 4.4.4.

Features:
- Tokenize playlist text into typed tokens
- Decode segments (#EXTINF, #EXT-X-BYTERANGE, #EXT-X-DISCONTINUITY)
- Encode segments with key, map, date range and program date time tags
- Exact duration handling with microsecond resolution
- Decode, encode, load and fetch media playlists

Example usage:
    >>> from hlskit import decode_playlist, encode_playlist
    >>>
    >>> playlist = decode_playlist(open("index.m3u8").read())
    >>> for seg in playlist.segments:
    ...     print(seg.uri, seg.duration)
    >>>
    >>> text = encode_playlist(playlist)
"""

import logging

__version__ = "0.1.0"
__author__ = "HLSKit Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Data models
from .models import (
    TokenType,
    Token,
    ByteRange,
    Key,
    Map,
    DateRange,
    Segment,
    MediaPlaylist,
    FetchConfig,
)

# Errors
from .errors import (
    HLSError,
    DecodeError,
    InvalidDurationError,
    InvalidByteRangeError,
    MissingURIError,
    UnsupportedTagError,
    UpstreamError,
    PlaylistFormatError,
    EncodeError,
    SegmentMissingURIError,
    ZeroDurationError,
    InvalidURIError,
    DateRangeFormatError,
    FetchError,
)

# Duration codec and helpers
from .utils import parse_duration, format_duration, parse_byte_range, format_timestamp

# Tokenizer
from .lexer import tokenize, TokenStream

# Segment codec
from .decoder import decode_segment, SegmentDecoder
from .encoder import encode_segments, dumps_segments, render_segment, validate_segment
from .daterange import format_date_range, validate_date_range

# Playlists
from .playlist import decode_playlist, encode_playlist, load_playlist, dump_playlist
from .fetch import (
    fetch_playlist_text,
    fetch_media_playlist,
    fetch_from_config,
    resolve_segment_uri,
    is_m3u8_url,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Models
    "TokenType",
    "Token",
    "ByteRange",
    "Key",
    "Map",
    "DateRange",
    "Segment",
    "MediaPlaylist",
    "FetchConfig",

    # Errors
    "HLSError",
    "DecodeError",
    "InvalidDurationError",
    "InvalidByteRangeError",
    "MissingURIError",
    "UnsupportedTagError",
    "UpstreamError",
    "PlaylistFormatError",
    "EncodeError",
    "SegmentMissingURIError",
    "ZeroDurationError",
    "InvalidURIError",
    "DateRangeFormatError",
    "FetchError",

    # Duration codec and helpers
    "parse_duration",
    "format_duration",
    "parse_byte_range",
    "format_timestamp",

    # Tokenizer
    "tokenize",
    "TokenStream",

    # Segment codec
    "decode_segment",
    "SegmentDecoder",
    "encode_segments",
    "dumps_segments",
    "render_segment",
    "validate_segment",
    "format_date_range",
    "validate_date_range",

    # Playlists
    "decode_playlist",
    "encode_playlist",
    "load_playlist",
    "dump_playlist",
    "fetch_playlist_text",
    "fetch_media_playlist",
    "fetch_from_config",
    "resolve_segment_uri",
    "is_m3u8_url",
]
