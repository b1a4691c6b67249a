from hlskit.lexer import TokenStream, tokenize
from hlskit.models import Token, TokenType


def _pairs(text):
    return [(t.type, t.value) for t in tokenize(text)]


def test_tokenize_media_segments():
    text = "#EXTM3U\n#EXTINF:10,\na.ts\n#EXT-X-DISCONTINUITY\n#EXTINF:9.967,Intro\nb.ts\n"
    assert _pairs(text) == [
        (TokenType.TAG, "#EXTM3U"),
        (TokenType.TAG, "#EXTINF"),
        (TokenType.NUMBER, "10"),
        (TokenType.URL, "a.ts"),
        (TokenType.TAG, "#EXT-X-DISCONTINUITY"),
        (TokenType.TAG, "#EXTINF"),
        (TokenType.NUMBER, "9.967"),
        (TokenType.STRING, "Intro"),
        (TokenType.URL, "b.ts"),
    ]


def test_tokenize_records_line_numbers():
    tokens = list(tokenize("#EXTM3U\n\n#EXTINF:10,\na.ts\n"))
    assert [t.line for t in tokens] == [1, 3, 3, 4]


def test_tokenize_skips_comments_and_blank_lines():
    text = "#EXTM3U\n# a comment\n\n   \nhttps://example.com/a.ts\r\n"
    assert _pairs(text) == [
        (TokenType.TAG, "#EXTM3U"),
        (TokenType.URL, "https://example.com/a.ts"),
    ]


def test_tokenize_non_numeric_duration_is_string():
    assert _pairs("#EXTINF:ten,")[1] == (TokenType.STRING, "ten")


def test_tokenize_byte_range_is_always_string():
    assert _pairs("#EXT-X-BYTERANGE:1000")[1] == (TokenType.STRING, "1000")
    assert _pairs("#EXT-X-BYTERANGE:1000@200")[1] == (TokenType.STRING, "1000@200")


def test_tokenize_program_date_time_keeps_colons():
    assert _pairs("#EXT-X-PROGRAM-DATE-TIME:2024-01-15T10:30:00.000Z") == [
        (TokenType.TAG, "#EXT-X-PROGRAM-DATE-TIME"),
        (TokenType.STRING, "2024-01-15T10:30:00.000Z"),
    ]


def test_tokenize_integer_tags():
    assert _pairs("#EXT-X-VERSION:3")[1] == (TokenType.NUMBER, "3")
    assert _pairs("#EXT-X-TARGETDURATION:abc")[1] == (TokenType.STRING, "abc")


def test_tokenize_attribute_list():
    text = '#EXT-X-KEY:METHOD=AES-128,URI="https://example.com/k?a=1,b=2",IV=0x1234'
    assert _pairs(text) == [
        (TokenType.TAG, "#EXT-X-KEY"),
        (TokenType.ATTR_NAME, "METHOD"),
        (TokenType.STRING, "AES-128"),
        (TokenType.ATTR_NAME, "URI"),
        (TokenType.STRING, "https://example.com/k?a=1,b=2"),
        (TokenType.ATTR_NAME, "IV"),
        (TokenType.STRING, "0x1234"),
    ]


def test_tokenize_attribute_numbers():
    assert _pairs("#EXT-X-STREAM-INF:BANDWIDTH=1280000,FRAME-RATE=29.97")[1:] == [
        (TokenType.ATTR_NAME, "BANDWIDTH"),
        (TokenType.NUMBER, "1280000"),
        (TokenType.ATTR_NAME, "FRAME-RATE"),
        (TokenType.NUMBER, "29.97"),
    ]


def test_tokenize_unterminated_string_stops_with_error():
    tokens = list(tokenize('#EXT-X-MAP:URI="init.mp4\nseg.ts\n'))
    assert tokens[-1].type is TokenType.ERROR
    assert "unterminated" in tokens[-1].value
    assert "line 1" in tokens[-1].value
    assert all(t.type is not TokenType.URL for t in tokens)


def test_tokenize_attribute_without_value_is_error():
    tokens = list(tokenize("#EXT-X-INDEPENDENT-SEGMENTS:FOO"))
    assert tokens[-1].type is TokenType.ERROR


def test_token_stream_peek_and_pull():
    first = Token(TokenType.TAG, "#EXTINF", 1)
    second = Token(TokenType.NUMBER, "10", 1)
    stream = TokenStream([first, second])

    assert stream.peek() is first
    assert stream.peek() is first
    assert stream.pull() is first
    assert stream.pull() is second
    assert stream.line == 1
    assert stream.peek() is None
    assert stream.pull() is None


def test_token_stream_is_single_pass():
    stream = TokenStream(tokenize("a.ts\nb.ts\n"))
    assert [t.value for t in stream] == ["a.ts", "b.ts"]
    assert list(stream) == []


def test_tokenize_non_ascii_digits_are_strings():
    assert _pairs("#EXTINF:\u0661\u0660,")[1] == (TokenType.STRING, "\u0661\u0660")
    assert _pairs("#EXT-X-VERSION:\uff13")[1] == (TokenType.STRING, "\uff13")
