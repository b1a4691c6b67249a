from datetime import timedelta

import pytest

from hlskit.errors import MissingURIError, PlaylistFormatError, UnsupportedTagError, UpstreamError
from hlskit.models import ByteRange, MediaPlaylist, Segment
from hlskit.playlist import decode_playlist, dump_playlist, encode_playlist, load_playlist

VOD_PLAYLIST = """#EXTM3U
#EXT-X-VERSION:4
#EXT-X-TARGETDURATION:10
#EXT-X-MEDIA-SEQUENCE:1234
#EXT-X-PLAYLIST-TYPE:VOD
#EXTINF:9.967
seg0.ts
#EXT-X-DISCONTINUITY
#EXTINF:10.000
seg1.ts
#EXT-X-BYTERANGE:1000@200
#EXTINF:4.004
seg2.ts
#EXT-X-ENDLIST
"""


def test_decode_playlist_header_and_segments():
    playlist = decode_playlist(VOD_PLAYLIST)

    assert playlist.version == 4
    assert playlist.target_duration == 10
    assert playlist.media_sequence == 1234
    assert playlist.playlist_type == "VOD"
    assert playlist.end_list is True
    assert [seg.uri for seg in playlist.segments] == ["seg0.ts", "seg1.ts", "seg2.ts"]
    assert playlist.segments[1].discontinuity is True
    assert playlist.segments[2].byte_range == ByteRange(1000, 200)
    assert playlist.total_duration == timedelta(microseconds=9967000 + 10000000 + 4004000)


def test_playlist_round_trip():
    assert encode_playlist(decode_playlist(VOD_PLAYLIST)) == VOD_PLAYLIST


def test_decode_playlist_with_titles_and_comments():
    text = "#EXTM3U\n# generated\n#EXT-X-TARGETDURATION:6\n#EXTINF:5.005,Intro\nhttps://cdn.example.com/a.ts\n"
    playlist = decode_playlist(text)
    assert playlist.segments == [Segment(uri="https://cdn.example.com/a.ts", duration=timedelta(microseconds=5005000))]
    assert playlist.end_list is False


def test_decode_playlist_requires_header():
    with pytest.raises(PlaylistFormatError):
        decode_playlist("#EXTINF:10,\na.ts\n")
    with pytest.raises(PlaylistFormatError):
        decode_playlist("")


def test_decode_playlist_rejects_bad_header_operand():
    with pytest.raises(PlaylistFormatError):
        decode_playlist("#EXTM3U\n#EXT-X-VERSION:abc\n")
    with pytest.raises(PlaylistFormatError):
        decode_playlist("#EXTM3U\n#EXT-X-PLAYLIST-TYPE:LIVE\n")


def test_decode_master_playlist_is_unsupported():
    text = "#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=1280000\nlow/index.m3u8\n"
    with pytest.raises(UnsupportedTagError) as exc_info:
        decode_playlist(text)
    assert exc_info.value.tag == "#EXT-X-STREAM-INF"


def test_decode_playlist_with_program_date_time_is_unsupported():
    text = "#EXTM3U\n#EXT-X-PROGRAM-DATE-TIME:2024-01-15T10:30:00.000Z\n#EXTINF:10,\na.ts\n"
    with pytest.raises(UnsupportedTagError):
        decode_playlist(text)


def test_decode_playlist_lexer_error():
    with pytest.raises(UpstreamError) as exc_info:
        decode_playlist("#EXTM3U\n#EXT-X-INDEPENDENT-SEGMENTS:FOO\n#EXTINF:10,\na.ts\n")
    assert "line 2" in exc_info.value.message


def test_decode_playlist_segment_without_uri():
    with pytest.raises(MissingURIError):
        decode_playlist("#EXTM3U\n#EXTINF:10,\n")


def test_encode_playlist_computes_target_duration():
    playlist = MediaPlaylist(segments=[
        Segment(uri="a.ts", duration=timedelta(microseconds=9967000)),
        Segment(uri="b.ts", duration=timedelta(microseconds=10500000)),
    ], end_list=True)
    assert encode_playlist(playlist) == (
        "#EXTM3U\n"
        "#EXT-X-TARGETDURATION:11\n"
        "#EXTINF:9.967\na.ts\n"
        "#EXTINF:10.500\nb.ts\n"
        "#EXT-X-ENDLIST\n"
    )


def test_encode_playlist_optional_header_tags():
    playlist = MediaPlaylist(
        target_duration=6,
        discontinuity_sequence=2,
        independent_segments=True,
        segments=[Segment(uri="a.ts", duration=timedelta(seconds=6))],
    )
    assert encode_playlist(playlist) == (
        "#EXTM3U\n"
        "#EXT-X-TARGETDURATION:6\n"
        "#EXT-X-DISCONTINUITY-SEQUENCE:2\n"
        "#EXT-X-INDEPENDENT-SEGMENTS\n"
        "#EXTINF:6.000\na.ts\n"
    )


def test_load_and_dump_playlist(tmp_path):
    source = tmp_path / "in.m3u8"
    source.write_text(VOD_PLAYLIST, encoding="utf-8")
    target = tmp_path / "out.m3u8"

    playlist = load_playlist(str(source))
    written = dump_playlist(playlist, str(target))

    assert target.read_text(encoding="utf-8") == VOD_PLAYLIST
    assert written == len(VOD_PLAYLIST)


def test_dump_playlist_encode_error_leaves_file_untouched(tmp_path):
    target = tmp_path / "out.m3u8"
    target.write_text("existing", encoding="utf-8")
    playlist = MediaPlaylist(segments=[Segment(uri="a.ts")])

    with pytest.raises(ValueError):
        dump_playlist(playlist, str(target))
    assert target.read_text(encoding="utf-8") == "existing"
