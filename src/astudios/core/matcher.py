"""Resolve free-form version queries against the release catalog.

Queries arrive in many shapes ("2024.3.2.14", "Meerkat Feature Drop",
"2023.3.1 Canary 8"). Resolution is a fixed cascade of stages; each stage
scans the catalog in feed order and the first stage with any hit wins. There
is no scoring across stages.
"""

import logging
from typing import Callable, Iterable

from astudios.core.errors import VersionNotFound
from astudios.models.release import Release, ReleaseCatalog


logger = logging.getLogger(__name__)


def _exact_version(query: str) -> Callable[[Release], bool]:
    return lambda release: release.version == query


def _version_contains(query: str) -> Callable[[Release], bool]:
    needle = query.lower()
    return lambda release: needle in release.version.lower()


def _name_contains(query: str) -> Callable[[Release], bool]:
    needle = query.lower()
    return lambda release: needle in release.display_name.lower()


def _build_contains(query: str) -> Callable[[Release], bool]:
    needle = query.lower()
    return lambda release: needle in release.build_id.lower()


def _channel_query(query: str, strict_build: bool) -> Callable[[Release], bool] | None:
    """``"<version> <channel> [<build>]"``; None when the query has one token."""
    parts = query.split()
    if len(parts) < 2:
        return None

    version_part = parts[0]
    channel_part = parts[1].lower()
    build_part = parts[2].lower() if strict_build and len(parts) >= 3 else None

    def predicate(release: Release) -> bool:
        if version_part not in release.version:
            return False
        if release.channel.lower() != channel_part:
            return False
        if build_part is not None and build_part not in release.build_id.lower():
            return False
        return True

    return predicate


def _catch_all(query: str) -> Callable[[Release], bool]:
    needle = query.lower()
    return lambda release: (
        needle in f"{release.version} {release.channel} {release.build_id}".lower()
    )


class VersionMatcher:
    """Resolves queries to exactly one release of a catalog."""

    def __init__(self, catalog: ReleaseCatalog):
        self.catalog = catalog

    def stages(
        self, query: str, strict_build: bool = False
    ) -> list[tuple[str, Callable[[Release], bool]]]:
        """The ordered (name, predicate) cascade for ``query``."""
        stages = [
            ("exact version", _exact_version(query)),
            ("version substring", _version_contains(query)),
            ("name substring", _name_contains(query)),
            ("build substring", _build_contains(query)),
        ]
        channel = _channel_query(query, strict_build)
        if channel is not None:
            stages.append(("version and channel", channel))
        stages.append(("version, channel and build", _catch_all(query)))
        return stages

    def find(self, query: str, strict_build: bool = False) -> Release:
        """Resolve ``query`` or raise VersionNotFound.

        With ``strict_build`` a third whitespace-separated token must also
        appear in the build id for the channel stage to match.
        """
        query = query.strip()
        if not query:
            raise VersionNotFound(query)

        for stage, predicate in self.stages(query, strict_build):
            release = _first(self.catalog, predicate)
            if release is not None:
                logger.debug(
                    "Query %r matched %s by %s", query, release.build_id, stage
                )
                return release

        raise VersionNotFound(query)

    def get_latest_release(self) -> Release:
        """First stable release in feed order."""
        release = _first(self.catalog, Release.is_release)
        if release is None:
            raise VersionNotFound("latest release")
        return release

    def get_latest_prerelease(self) -> Release:
        """First Beta or Canary release in feed order."""
        release = _first(
            self.catalog, lambda item: item.is_beta() or item.is_canary()
        )
        if release is None:
            raise VersionNotFound("latest pre-release")
        return release


def _first(
    releases: Iterable[Release], predicate: Callable[[Release], bool]
) -> Release | None:
    for release in releases:
        if predicate(release):
            return release
    return None


def select_release(
    catalog: ReleaseCatalog,
    query: str | None,
    latest: bool = False,
    latest_prerelease: bool = False,
) -> Release:
    """Pick a release from command options: --latest, --latest-prerelease or a query."""
    matcher = VersionMatcher(catalog)
    if latest:
        return matcher.get_latest_release()
    if latest_prerelease:
        return matcher.get_latest_prerelease()
    if query:
        return matcher.find(query)
    raise ValueError("Please specify a version or use --latest or --latest-prerelease")
