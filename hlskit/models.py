"""
Data models for HLSKit.

Defines the tokens exchanged with the lexer, the segment records produced by
the decoder and consumed by the encoder, and the pass-through structures
(key, map, date range) that segments carry.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Union


class TokenType(Enum):
    """Kinds of token produced by the playlist lexer."""
    TAG = "tag"
    URL = "url"
    STRING = "string"
    NUMBER = "number"
    ATTR_NAME = "attribute name"
    ERROR = "error"


@dataclass(frozen=True)
class Token:
    """A single lexical item of a playlist."""
    type: TokenType
    value: str
    line: int = 0  # 1-based source line, 0 when unknown

    def __str__(self) -> str:
        where = f" on line {self.line}" if self.line else ""
        return f"{self.type.value} {self.value!r}{where}"


@dataclass(frozen=True)
class ByteRange:
    """
    Sub-range of a resource.

    An offset of None means the range starts right after the previous
    range of the same resource.
    """
    length: int
    offset: Optional[int] = None

    def __str__(self) -> str:
        if self.offset is None:
            return str(self.length)
        return f"{self.length}@{self.offset}"


def _quote(value: str) -> str:
    return f'"{value}"'


@dataclass
class Key:
    """Encryption key attributes of an #EXT-X-KEY tag."""
    method: str
    uri: Optional[str] = None
    iv: Optional[str] = None
    key_format: Optional[str] = None
    key_format_versions: Optional[str] = None

    def format(self) -> str:
        attrs = [f"METHOD={self.method}"]
        if self.uri is not None:
            attrs.append(f"URI={_quote(self.uri)}")
        if self.iv is not None:
            attrs.append(f"IV={self.iv}")
        if self.key_format is not None:
            attrs.append(f"KEYFORMAT={_quote(self.key_format)}")
        if self.key_format_versions is not None:
            attrs.append(f"KEYFORMATVERSIONS={_quote(self.key_format_versions)}")
        return ",".join(attrs)

    def __str__(self) -> str:
        return self.format()


@dataclass
class Map:
    """Media initialization section of an #EXT-X-MAP tag."""
    uri: str
    byte_range: Optional[ByteRange] = None

    def format(self) -> str:
        attrs = [f"URI={_quote(self.uri)}"]
        if self.byte_range is not None:
            attrs.append(f"BYTERANGE={_quote(str(self.byte_range))}")
        return ",".join(attrs)

    def __str__(self) -> str:
        return self.format()


@dataclass
class DateRange:
    """
    Attributes of an #EXT-X-DATERANGE tag.

    Rendering is delegated to hlskit.daterange.format_date_range, which
    enforces the attribute constraints of RFC 8216 section 4.4.5.1.
    """
    id: str
    start_date: Optional[datetime] = None
    class_name: Optional[str] = None
    end_date: Optional[datetime] = None
    duration: Optional[timedelta] = None
    planned_duration: Optional[timedelta] = None
    end_on_next: bool = False
    client_attributes: Dict[str, Union[str, int, float]] = field(default_factory=dict)

    def format(self) -> str:
        from .daterange import format_date_range
        return format_date_range(self)


@dataclass
class Segment:
    """
    One media segment of a playlist.

    A zero duration and an empty URI both mean "not set"; the encoder
    rejects either.
    """
    uri: str = ""
    duration: timedelta = field(default_factory=timedelta)
    byte_range: Optional[ByteRange] = None
    discontinuity: bool = False
    key: Optional[Key] = None
    map: Optional[Map] = None
    date_range: Optional[DateRange] = None
    program_date_time: Optional[datetime] = None


@dataclass
class MediaPlaylist:
    """A media playlist: header attributes followed by its segments."""
    version: Optional[int] = None
    target_duration: Optional[int] = None
    media_sequence: Optional[int] = None
    discontinuity_sequence: Optional[int] = None
    playlist_type: Optional[str] = None  # EVENT or VOD
    independent_segments: bool = False
    end_list: bool = False
    segments: List[Segment] = field(default_factory=list)

    @property
    def total_duration(self) -> timedelta:
        return sum((seg.duration for seg in self.segments), timedelta())


@dataclass
class FetchConfig:
    """Configuration for playlist fetch operations."""
    url: str
    timeout: int = 30
    verify_ssl: bool = True
    headers: Dict[str, str] = field(default_factory=dict)
