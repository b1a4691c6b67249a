"""Playlist tag names used by HLSKit (RFC 8216 section 4.3)."""

# Basic tags
TAG_HEADER = "#EXTM3U"
TAG_VERSION = "#EXT-X-VERSION"

# Media segment tags (section 4.4.4)
TAG_DURATION = "#EXTINF"
TAG_BYTE_RANGE = "#EXT-X-BYTERANGE"
TAG_DISCONTINUITY = "#EXT-X-DISCONTINUITY"
TAG_KEY = "#EXT-X-KEY"
TAG_MAP = "#EXT-X-MAP"
TAG_PROGRAM_DATE_TIME = "#EXT-X-PROGRAM-DATE-TIME"
TAG_BITRATE = "#EXT-X-BITRATE"
TAG_DATE_RANGE = "#EXT-X-DATERANGE"

# Media playlist tags (section 4.4.3)
TAG_TARGET_DURATION = "#EXT-X-TARGETDURATION"
TAG_MEDIA_SEQUENCE = "#EXT-X-MEDIA-SEQUENCE"
TAG_DISCONTINUITY_SEQUENCE = "#EXT-X-DISCONTINUITY-SEQUENCE"
TAG_END_LIST = "#EXT-X-ENDLIST"
TAG_PLAYLIST_TYPE = "#EXT-X-PLAYLIST-TYPE"
TAG_INDEPENDENT_SEGMENTS = "#EXT-X-INDEPENDENT-SEGMENTS"
