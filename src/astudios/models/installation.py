"""Installed Android Studio data models."""

from dataclasses import dataclass
from functools import total_ordering
from pathlib import Path

from astudios.core.versioning import version_key


@total_ordering
@dataclass(frozen=True)
class InstalledVersion:
    """Version identity read from an installed bundle's metadata."""

    short_version: str  # CFBundleShortVersionString, e.g. "2025.1"
    build_version: str  # CFBundleVersion, e.g. "AI-251.26094.121.2513.14007798"
    product_code: str  # e.g. "AI"
    build_number: str  # e.g. "251.26094.121.2513.14007798"
    product_name: str  # e.g. "Android Studio"

    def sort_key(self) -> tuple:
        """Numeric-segment ordering: build version first, then short version."""
        return (
            version_key(self.build_version),
            version_key(self.short_version),
            self.product_code,
            version_key(self.build_number),
            self.product_name,
        )

    def __lt__(self, other: "InstalledVersion") -> bool:
        if not isinstance(other, InstalledVersion):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    @property
    def identifier(self) -> str:
        return self.build_version

    @property
    def display_version(self) -> str:
        return f"{self.short_version} ({self.build_version})"

    def __str__(self) -> str:
        return self.display_version


@total_ordering
@dataclass(frozen=True)
class Installation:
    """An installed bundle: its path plus the version read from it."""

    path: Path
    version: InstalledVersion

    def __lt__(self, other: "Installation") -> bool:
        if not isinstance(other, Installation):
            return NotImplemented
        return (self.version, str(self.path)) < (other.version, str(other.path))

    @property
    def identifier(self) -> str:
        return self.version.identifier

    @property
    def display_name(self) -> str:
        return f"{self.version.product_name} {self.version.short_version}"

    @property
    def channel_hint(self) -> str:
        """Channel guessed from the bundle file name."""
        name = self.path.name
        for marker in ("Patch", "Feature Drop", "Beta", "Canary", "RC"):
            if marker in name:
                return marker
        return "Release"

    def is_valid(self) -> bool:
        return self.path.exists() and (self.path / "Contents").exists()
