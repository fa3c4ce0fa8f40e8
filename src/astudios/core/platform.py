"""Platform detection and download selection."""

import platform
from dataclasses import dataclass

from astudios.models.release import Download, Release


@dataclass
class PlatformInfo:
    """Current platform information."""

    os: str  # darwin, linux, windows
    arch: str  # amd64, arm64

    @classmethod
    def detect(cls) -> "PlatformInfo":
        """Detect current platform."""
        system = platform.system().lower()
        machine = platform.machine().lower()

        # Normalize architecture
        if machine in ("x86_64", "amd64"):
            arch = "amd64"
        elif machine in ("arm64", "aarch64"):
            arch = "arm64"
        else:
            arch = machine

        return cls(os=system, arch=arch)

    @property
    def download_marker(self) -> str:
        """Substring identifying this platform's artifact in a download URL."""
        return DOWNLOAD_MARKERS.get(self.os, self.os)

    @property
    def is_macos(self) -> bool:
        return self.os == "darwin"


# Substrings the vendor uses in artifact URLs, e.g. android-studio-...-mac.dmg
DOWNLOAD_MARKERS = {
    "darwin": "mac",
    "linux": "linux",
    "windows": "windows",
}

PLATFORM_LABELS = {
    "mac": "macOS",
    "windows": "Windows",
    "linux": "Linux",
}


def get_platform_info() -> PlatformInfo:
    """Get current platform information."""
    return PlatformInfo.detect()


def download_for_current_platform(
    release: Release, platform_info: PlatformInfo | None = None
) -> Download | None:
    """Find the release's artifact for the current platform, if any."""
    if platform_info is None:
        platform_info = PlatformInfo.detect()
    return release.get_download(platform_info.download_marker)
