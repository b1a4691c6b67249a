"""
Segment encoder for HLSKit.

Renders segments to playlist text. Each segment is validated before it is
rendered, and the whole batch is rendered before anything reaches the sink,
so a failure never leaves a partially written segment behind.
"""

import io
import logging
from typing import IO, Iterable, List, Union

from .errors import (
    DateRangeFormatError,
    InvalidURIError,
    SegmentMissingURIError,
    ZeroDurationError,
)
from .models import Segment
from .tags import (
    TAG_BYTE_RANGE,
    TAG_DATE_RANGE,
    TAG_DISCONTINUITY,
    TAG_DURATION,
    TAG_KEY,
    TAG_MAP,
    TAG_PROGRAM_DATE_TIME,
)
from .utils import format_duration, format_timestamp

logger = logging.getLogger(__name__)


def validate_segment(seg: Segment) -> None:
    """
    Check the fields every encoded segment needs.

    Raises:
        SegmentMissingURIError: If the URI is empty
        InvalidURIError: If the URI contains a line break
        ZeroDurationError: If the duration is zero
    """
    if not seg.uri:
        raise SegmentMissingURIError("empty URI", segment=seg, field="uri", value=seg.uri)
    if "\n" in seg.uri or "\r" in seg.uri:
        raise InvalidURIError(
            f"line break in URI {seg.uri!r}", segment=seg, field="uri", value=seg.uri
        )
    if not seg.duration:
        raise ZeroDurationError(
            f"zero duration for {seg.uri}", segment=seg, field="duration", value=seg.duration
        )


def render_segment(seg: Segment) -> List[str]:
    """
    Render one segment as playlist lines, without line terminators.

    Example:
        >>> render_segment(Segment(uri="a.ts", duration=timedelta(seconds=10)))
        ['#EXTINF:10.000', 'a.ts']
    """
    validate_segment(seg)

    lines = []
    if seg.discontinuity:
        lines.append(TAG_DISCONTINUITY)
    if seg.date_range is not None:
        try:
            lines.append(f"{TAG_DATE_RANGE}:{seg.date_range.format()}")
        except DateRangeFormatError as e:
            raise DateRangeFormatError(
                f"write date range: {e}", segment=seg, field=e.field, value=e.value
            ) from e
    if seg.byte_range is not None:
        lines.append(f"{TAG_BYTE_RANGE}:{seg.byte_range}")
    if seg.key is not None:
        lines.append(f"{TAG_KEY}:{seg.key.format()}")
    if seg.map is not None:
        lines.append(f"{TAG_MAP}:{seg.map.format()}")
    if seg.program_date_time is not None:
        lines.append(f"{TAG_PROGRAM_DATE_TIME}:{format_timestamp(seg.program_date_time)}")
    lines.append(f"{TAG_DURATION}:{format_duration(seg.duration)}")
    lines.append(seg.uri)
    return lines


def dumps_segments(segments: Iterable[Segment]) -> str:
    """
    Render segments to playlist text.

    Args:
        segments: Segments in playlist order

    Returns:
        One line per tag and URI, each terminated by a newline

    Example:
        >>> dumps_segments([Segment(uri="a.ts", duration=timedelta(seconds=10))])
        '#EXTINF:10.000\\na.ts\\n'
    """
    lines = []
    for seg in segments:
        lines.extend(render_segment(seg))
    return "".join(f"{line}\n" for line in lines)


def encode_segments(sink: Union[IO[bytes], IO[str]], segments: Iterable[Segment]) -> int:
    """
    Write segments to a sink as UTF-8 playlist text.

    The batch is fully rendered first; if any segment fails, nothing is
    written.

    Args:
        sink: Binary or text file-like object
        segments: Segments in playlist order

    Returns:
        Number of UTF-8 bytes written

    Raises:
        SegmentMissingURIError: If a segment has no URI
        InvalidURIError: If a segment URI contains a line break
        ZeroDurationError: If a segment has zero duration
        DateRangeFormatError: If a segment's date range cannot be rendered
    """
    text = dumps_segments(segments)
    data = text.encode("utf-8")
    if isinstance(sink, io.TextIOBase):
        sink.write(text)
    else:
        sink.write(data)
    logger.debug(f"Wrote {len(data)} bytes of segments")
    return len(data)
