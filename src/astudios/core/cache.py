"""On-disk cache of the parsed release catalog."""

import json
import logging
import time
from pathlib import Path
from typing import Callable

from astudios.core.errors import AstudiosError, ParseError
from astudios.core.feed import FeedClient
from astudios.models.release import ReleaseCatalog


logger = logging.getLogger(__name__)


class FeedCache:
    """JSON file holding the last parsed catalog, reused while younger than ``ttl``."""

    def __init__(self, path: Path, ttl: int):
        self.path = path
        self.ttl = ttl

    def age(self) -> float | None:
        """Seconds since the cache file was written, or None if absent."""
        if not self.path.exists():
            return None
        return max(0.0, time.time() - self.path.stat().st_mtime)

    def load(self) -> ReleaseCatalog | None:
        """Return the cached catalog, or None when missing, stale or unreadable."""
        age = self.age()
        if age is None:
            logger.debug("No release cache at %s", self.path)
            return None
        if age >= self.ttl:
            logger.debug("Release cache is stale (%.0fs old)", age)
            return None

        try:
            with open(self.path) as f:
                data = json.load(f)
            catalog = ReleaseCatalog.from_dict(data)
        except (OSError, ValueError, ParseError) as e:
            logger.warning("Ignoring unreadable release cache %s: %s", self.path, e)
            return None

        logger.debug("Loaded %d releases from cache", len(catalog))
        return catalog

    def store(self, catalog: ReleaseCatalog) -> None:
        """Write the catalog to the cache file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(catalog.to_dict(), f, indent=2)
        logger.debug("Cached %d releases at %s", len(catalog), self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class CatalogLoader:
    """Returns the cached catalog when fresh, otherwise fetches and caches it."""

    def __init__(self, cache: FeedCache, client_factory: Callable[[], FeedClient]):
        self.cache = cache
        self.client_factory = client_factory

    def load(self, refresh: bool = False) -> ReleaseCatalog:
        if not refresh:
            cached = self.cache.load()
            if cached is not None:
                return cached

        with self.client_factory() as client:
            data = client.fetch_release_feed()

        catalog = ReleaseCatalog.parse(data)
        try:
            self.cache.store(catalog)
        except OSError as e:
            logger.warning("Could not write release cache %s: %s", self.cache.path, e)
        logger.info("Fetched %d releases", len(catalog))
        return catalog


def get_loader(config) -> CatalogLoader:
    """CatalogLoader wired to the configured cache file and feed URL."""
    return CatalogLoader(
        FeedCache(config.cache_path, config.cache_ttl),
        lambda: FeedClient(
            config.feed_url, timeout=config.network_timeout, user_agent=config.user_agent
        ),
    )


def load_catalog_or_none(config) -> ReleaseCatalog | None:
    """Catalog used to map installed build numbers back to display versions.

    Best effort: without network or cache, installed versions still match by
    their own metadata.
    """
    try:
        return get_loader(config).load()
    except AstudiosError as e:
        logger.warning("Release catalog unavailable, using installed metadata only: %s", e)
        return None
