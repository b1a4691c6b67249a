"""
Media playlist decoding and encoding for HLSKit.

Handles the playlist header tags (RFC 8216 section 4.4.3) and hands the
body to the segment decoder and encoder. Multivariant (master) playlists
are not supported; their tags fail as unsupported segment tags.
"""

import logging
from typing import Callable, Dict, List

from .decoder import decode_segment
from .encoder import dumps_segments
from .errors import PlaylistFormatError, UpstreamError
from .lexer import TokenStream, tokenize
from .models import MediaPlaylist, Token, TokenType
from .tags import (
    TAG_DISCONTINUITY_SEQUENCE,
    TAG_END_LIST,
    TAG_HEADER,
    TAG_INDEPENDENT_SEGMENTS,
    TAG_MEDIA_SEQUENCE,
    TAG_PLAYLIST_TYPE,
    TAG_TARGET_DURATION,
    TAG_VERSION,
)

logger = logging.getLogger(__name__)

PLAYLIST_TYPES = ("EVENT", "VOD")


def _operand(tokens: TokenStream, tag: Token, want: TokenType) -> Token:
    token = tokens.pull()
    if token is not None and token.type is TokenType.ERROR:
        raise UpstreamError(token)
    if token is None or token.type is not want:
        got = token if token is not None else "end of playlist"
        raise PlaylistFormatError(f"parse {tag.value}: got {got}, want {want.value}", token)
    return token


def _int_setter(name: str) -> Callable[[MediaPlaylist, TokenStream, Token], None]:
    def setter(playlist: MediaPlaylist, tokens: TokenStream, tag: Token) -> None:
        setattr(playlist, name, int(_operand(tokens, tag, TokenType.NUMBER).value))
    return setter


def _set_playlist_type(playlist: MediaPlaylist, tokens: TokenStream, tag: Token) -> None:
    token = _operand(tokens, tag, TokenType.STRING)
    if token.value not in PLAYLIST_TYPES:
        raise PlaylistFormatError(f"parse {tag.value}: unknown type {token}", token)
    playlist.playlist_type = token.value


def _set_independent_segments(playlist: MediaPlaylist, tokens: TokenStream, tag: Token) -> None:
    playlist.independent_segments = True


def _set_end_list(playlist: MediaPlaylist, tokens: TokenStream, tag: Token) -> None:
    playlist.end_list = True


_HEADER_TAGS: Dict[str, Callable[[MediaPlaylist, TokenStream, Token], None]] = {
    TAG_VERSION: _int_setter("version"),
    TAG_TARGET_DURATION: _int_setter("target_duration"),
    TAG_MEDIA_SEQUENCE: _int_setter("media_sequence"),
    TAG_DISCONTINUITY_SEQUENCE: _int_setter("discontinuity_sequence"),
    TAG_PLAYLIST_TYPE: _set_playlist_type,
    TAG_INDEPENDENT_SEGMENTS: _set_independent_segments,
    TAG_END_LIST: _set_end_list,
}


def decode_playlist(text: str) -> MediaPlaylist:
    """
    Decode a media playlist.

    Decoding stops at the first error; no partial playlist is returned.

    Args:
        text: Playlist content starting with #EXTM3U

    Returns:
        MediaPlaylist with header attributes and segments

    Raises:
        PlaylistFormatError: If the header is missing or a header tag is malformed
        DecodeError: Any segment decode failure

    Example:
        >>> playlist = decode_playlist("#EXTM3U\\n#EXTINF:10,\\na.ts\\n#EXT-X-ENDLIST\\n")
        >>> len(playlist.segments), playlist.end_list
        (1, True)
    """
    tokens = TokenStream(tokenize(text))

    first = tokens.pull()
    if first is None or first.type is not TokenType.TAG or first.value != TAG_HEADER:
        got = first if first is not None else "empty playlist"
        raise PlaylistFormatError(f"got {got}, want {TAG_HEADER}", first)

    playlist = MediaPlaylist()
    for token in tokens:
        if token.type is TokenType.ERROR:
            raise UpstreamError(token)
        if token.type is TokenType.TAG and token.value in _HEADER_TAGS:
            _HEADER_TAGS[token.value](playlist, tokens, token)
            continue
        if token.type in (TokenType.TAG, TokenType.URL):
            playlist.segments.append(decode_segment(tokens, token))

    logger.info(
        f"Decoded playlist: {len(playlist.segments)} segments, "
        f"{playlist.total_duration.total_seconds():.3f}s"
    )
    return playlist


def _target_duration(playlist: MediaPlaylist) -> int:
    if playlist.target_duration is not None:
        return playlist.target_duration
    longest = max((seg.duration.total_seconds() for seg in playlist.segments), default=0.0)
    seconds = int(longest)
    return seconds + 1 if longest > seconds else seconds


def encode_playlist(playlist: MediaPlaylist) -> str:
    """
    Encode a media playlist to text.

    #EXT-X-TARGETDURATION is always written; when the playlist does not set
    it, the longest segment duration rounded up is used.

    Raises:
        EncodeError: If any segment fails validation
    """
    lines: List[str] = [TAG_HEADER]
    if playlist.version is not None:
        lines.append(f"{TAG_VERSION}:{playlist.version}")
    lines.append(f"{TAG_TARGET_DURATION}:{_target_duration(playlist)}")
    if playlist.media_sequence is not None:
        lines.append(f"{TAG_MEDIA_SEQUENCE}:{playlist.media_sequence}")
    if playlist.discontinuity_sequence is not None:
        lines.append(f"{TAG_DISCONTINUITY_SEQUENCE}:{playlist.discontinuity_sequence}")
    if playlist.playlist_type is not None:
        lines.append(f"{TAG_PLAYLIST_TYPE}:{playlist.playlist_type}")
    if playlist.independent_segments:
        lines.append(TAG_INDEPENDENT_SEGMENTS)

    header = "".join(f"{line}\n" for line in lines)
    body = dumps_segments(playlist.segments)
    footer = f"{TAG_END_LIST}\n" if playlist.end_list else ""
    return header + body + footer


def load_playlist(path: str) -> MediaPlaylist:
    """Read and decode a media playlist file."""
    logger.info(f"Loading playlist: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return decode_playlist(f.read())


def dump_playlist(playlist: MediaPlaylist, path: str) -> int:
    """
    Encode a media playlist and write it to a file.

    The playlist is encoded before the file is opened, so an encode error
    leaves any existing file untouched.

    Returns:
        Number of characters written
    """
    text = encode_playlist(playlist)
    with open(path, 'w', encoding='utf-8') as f:
        written = f.write(text)
    logger.info(f"Wrote playlist with {len(playlist.segments)} segments to {path}")
    return written
