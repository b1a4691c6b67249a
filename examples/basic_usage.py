"""
Basic HLSKit usage example.

Demonstrates fetching a media playlist, inspecting its segments and writing
the segments back out.
"""

import sys

from hlskit import fetch_media_playlist, encode_segments, resolve_segment_uri

def main():
    url = "https://example.com/live/index.m3u8"

    # Fetch and decode the playlist
    print("Fetching playlist...")
    playlist = fetch_media_playlist(url)
    print(f"Found {len(playlist.segments)} segments ({playlist.total_duration} total)")

    for seg in playlist.segments:
        marker = " (discontinuity)" if seg.discontinuity else ""
        print(f"  {seg.duration.total_seconds():7.3f}s  {resolve_segment_uri(url, seg.uri)}{marker}")

    # Write the segments back out
    print("\nRe-encoded segments:")
    sys.stdout.flush()
    written = encode_segments(sys.stdout.buffer, playlist.segments)
    print(f"\nWrote {written} bytes")

if __name__ == "__main__":
    main()
