"""HTTP client for the Android Studio release feed."""

import logging

import httpx

from astudios.core.errors import FeedError


logger = logging.getLogger(__name__)


class FeedClient:
    """Client for fetching the raw release feed."""

    def __init__(self, url: str, timeout: float, user_agent: str, transport=None):
        self.url = url
        self.client = httpx.Client(
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        self.client.close()

    def fetch_release_feed(self) -> bytes:
        """Download the feed and return its raw bytes."""
        logger.info("Fetching release feed from %s", self.url)
        try:
            response = self.client.get(self.url)
        except httpx.HTTPError as e:
            raise FeedError(f"Failed to fetch release feed: {e}")

        if response.status_code != 200:
            raise FeedError(
                f"Failed to fetch release feed: HTTP {response.status_code}"
            )

        logger.debug("Fetched %d bytes", len(response.content))
        return response.content
