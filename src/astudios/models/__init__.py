"""Data models for astudios."""

from astudios.models.installation import Installation, InstalledVersion
from astudios.models.release import Download, Release, ReleaseCatalog, ReleaseChannel

__all__ = [
    "Download",
    "Installation",
    "InstalledVersion",
    "Release",
    "ReleaseCatalog",
    "ReleaseChannel",
]
