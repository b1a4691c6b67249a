"""
Playlist lexer for HLSKit.

Turns playlist text into the flat token sequence consumed by the segment
decoder. Each line yields either a URL token or a TAG token followed by the
tokens of its operand. Lexing stops at the first ERROR token.
"""

import re
from typing import Iterable, Iterator, Optional

from .models import Token, TokenType
from .tags import (
    TAG_BITRATE,
    TAG_BYTE_RANGE,
    TAG_DISCONTINUITY_SEQUENCE,
    TAG_DURATION,
    TAG_MEDIA_SEQUENCE,
    TAG_PLAYLIST_TYPE,
    TAG_PROGRAM_DATE_TIME,
    TAG_TARGET_DURATION,
    TAG_VERSION,
)

# Tags whose operand is a single integer.
INTEGER_TAGS = frozenset({
    TAG_VERSION,
    TAG_TARGET_DURATION,
    TAG_MEDIA_SEQUENCE,
    TAG_DISCONTINUITY_SEQUENCE,
})

# Tags whose operand is kept as a single string.
STRING_TAGS = frozenset({
    TAG_BYTE_RANGE,
    TAG_PROGRAM_DATE_TIME,
    TAG_PLAYLIST_TYPE,
    TAG_BITRATE,
})

_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)
_INTEGER_RE = re.compile(r"\d+", re.ASCII)


def _number_or_string(value: str, line: int) -> Token:
    if _NUMBER_RE.fullmatch(value):
        return Token(TokenType.NUMBER, value, line)
    return Token(TokenType.STRING, value, line)


def _lex_duration(value: str, line: int) -> Iterator[Token]:
    duration, _, title = value.partition(",")
    yield _number_or_string(duration.strip(), line)
    title = title.strip()
    if title:
        yield Token(TokenType.STRING, title, line)


def _lex_attributes(text: str, line: int) -> Iterator[Token]:
    pos = 0
    while pos < len(text):
        eq = text.find("=", pos)
        if eq < 0:
            yield Token(TokenType.ERROR, f"line {line}: attribute {text[pos:]!r} has no value", line)
            return
        yield Token(TokenType.ATTR_NAME, text[pos:eq].strip(), line)
        pos = eq + 1

        if text.startswith('"', pos):
            end = text.find('"', pos + 1)
            if end < 0:
                yield Token(TokenType.ERROR, f"line {line}: unterminated quoted string", line)
                return
            yield Token(TokenType.STRING, text[pos + 1:end], line)
            pos = end + 1
        else:
            end = text.find(",", pos)
            if end < 0:
                end = len(text)
            yield _number_or_string(text[pos:end].strip(), line)
            pos = end

        if pos < len(text):
            if text[pos] != ",":
                yield Token(TokenType.ERROR, f"line {line}: expected ',' at column {pos + 1}", line)
                return
            pos += 1


def _lex_operand(tag: str, value: str, line: int) -> Iterator[Token]:
    if tag == TAG_DURATION:
        yield from _lex_duration(value, line)
    elif tag in INTEGER_TAGS:
        value = value.strip()
        kind = TokenType.NUMBER if _INTEGER_RE.fullmatch(value) else TokenType.STRING
        yield Token(kind, value, line)
    elif tag in STRING_TAGS:
        yield Token(TokenType.STRING, value.strip(), line)
    else:
        yield from _lex_attributes(value, line)


def tokenize(text: str) -> Iterator[Token]:
    """
    Split playlist text into tokens.

    Blank lines and comments are skipped. Lexing stops after the first
    ERROR token.

    Args:
        text: Playlist content

    Yields:
        Tokens in source order

    Example:
        >>> [t.value for t in tokenize("#EXTINF:10,\\na.ts\\n")]
        ['#EXTINF', '10', 'a.ts']
    """
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if not line.startswith("#"):
            yield Token(TokenType.URL, line, number)
            continue
        if not line.startswith("#EXT"):
            continue

        tag, sep, value = line.partition(":")
        yield Token(TokenType.TAG, tag, number)
        if not sep:
            continue
        for token in _lex_operand(tag, value, number):
            yield token
            if token.type is TokenType.ERROR:
                return


class TokenStream:
    """
    Single-reader cursor over a finite token sequence.

    pull() consumes the next token, peek() looks at it without consuming.
    Both return None once the sequence is exhausted.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._peeked: Optional[Token] = None
        self._has_peeked = False
        self.line = 0

    def peek(self) -> Optional[Token]:
        if not self._has_peeked:
            self._peeked = next(self._tokens, None)
            self._has_peeked = True
        return self._peeked

    def pull(self) -> Optional[Token]:
        token = self.peek()
        self._peeked = None
        self._has_peeked = False
        if token is not None:
            self.line = token.line
        return token

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> Token:
        token = self.pull()
        if token is None:
            raise StopIteration
        return token
