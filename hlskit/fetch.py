"""
Playlist retrieval for HLSKit.

Downloads media playlists over HTTP and decodes them.
"""

import logging
from typing import Dict, Optional
from urllib.parse import urljoin

import requests

from .errors import FetchError
from .models import FetchConfig, MediaPlaylist
from .playlist import decode_playlist

logger = logging.getLogger(__name__)


def fetch_playlist_text(
    url: str,
    timeout: int = 30,
    verify_ssl: bool = True,
    headers: Optional[Dict[str, str]] = None,
) -> str:
    """
    Download playlist text.

    Args:
        url: URL to M3U8 playlist
        timeout: Request timeout in seconds (default: 30)
        verify_ssl: Whether to verify SSL certificates (default: True)
        headers: Extra request headers

    Returns:
        Playlist content as string

    Raises:
        FetchError: If the request fails or returns an error status
    """
    try:
        response = requests.get(url, timeout=timeout, verify=verify_ssl, headers=headers)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Failed to fetch playlist {url}: {str(e)}")
        raise FetchError(f"fetch {url}: {e}") from e

    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.text


def fetch_media_playlist(
    url: str,
    timeout: int = 30,
    verify_ssl: bool = True,
    headers: Optional[Dict[str, str]] = None,
) -> MediaPlaylist:
    """
    Download and decode a media playlist.

    Segment URIs are kept as written in the playlist; use
    resolve_segment_uri() to make relative ones absolute.

    Example:
        >>> playlist = fetch_media_playlist("https://example.com/stream.m3u8")
        >>> print(len(playlist.segments), playlist.total_duration)
        3 0:00:29.967000
    """
    text = fetch_playlist_text(url, timeout=timeout, verify_ssl=verify_ssl, headers=headers)
    playlist = decode_playlist(text)
    logger.info(f"Fetched playlist {url}: {len(playlist.segments)} segments")
    return playlist


def fetch_from_config(config: FetchConfig) -> MediaPlaylist:
    """Fetch a media playlist using a FetchConfig object."""
    return fetch_media_playlist(
        config.url,
        timeout=config.timeout,
        verify_ssl=config.verify_ssl,
        headers=config.headers or None,
    )


def resolve_segment_uri(playlist_url: str, uri: str) -> str:
    """
    Resolve a segment URI against the playlist URL.

    Example:
        >>> resolve_segment_uri("https://example.com/live/index.m3u8", "seg1.ts")
        'https://example.com/live/seg1.ts'
    """
    return urljoin(playlist_url, uri)


def is_m3u8_url(url: str) -> bool:
    """
    Check if a URL points to an M3U8 playlist.

    Args:
        url: URL to check

    Returns:
        True if URL appears to be an M3U8 playlist, False otherwise
    """
    return url.lower().endswith('.m3u8') or '.m3u8?' in url.lower()
