"""Release feed data models."""

from dataclasses import dataclass, field
from enum import Enum
import xml.etree.ElementTree as ET

from astudios.core.errors import ParseError


class ReleaseChannel(Enum):
    """Release maturity classification used by the vendor feed."""

    RELEASE = "Release"
    BETA = "Beta"
    CANARY = "Canary"
    RELEASE_CANDIDATE = "RC"
    PATCH = "Patch"

    @classmethod
    def from_feed(cls, value: str) -> "ReleaseChannel | None":
        try:
            return cls(value)
        except ValueError:
            return None


CHANNEL_SUFFIXES = {
    ReleaseChannel.RELEASE: "",
    ReleaseChannel.BETA: " (Beta)",
    ReleaseChannel.CANARY: " (Canary)",
    ReleaseChannel.RELEASE_CANDIDATE: " (RC)",
    ReleaseChannel.PATCH: " (Patch)",
}


def _text(element: ET.Element, tag: str, required: bool = True) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        if required:
            raise ParseError(f"<{element.tag}> is missing required <{tag}>")
        return ""
    return child.text.strip()


def _field(data: dict, key: str, kind: str):
    try:
        return data[key]
    except (KeyError, TypeError):
        raise ParseError(f"{kind} entry is missing '{key}'")


@dataclass(frozen=True)
class Download:
    """One platform-specific installer artifact.

    The checksum is whatever the feed publishes; it is only verified when it
    looks like a SHA-256 digest (see ``astudios.core.checksum``).
    """

    url: str
    human_size: str
    checksum: str = ""

    @classmethod
    def from_element(cls, element: ET.Element) -> "Download":
        return cls(
            url=_text(element, "link"),
            human_size=_text(element, "size"),
            checksum=_text(element, "checksum", required=False),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Download":
        return cls(
            url=_field(data, "link", "Download"),
            human_size=_field(data, "size", "Download"),
            checksum=data.get("checksum", ""),
        )

    def to_dict(self) -> dict:
        return {"link": self.url, "size": self.human_size, "checksum": self.checksum}

    @property
    def filename(self) -> str:
        return self.url.rstrip("/").split("/")[-1]


@dataclass(frozen=True)
class Release:
    """One entry of the Android Studio release feed."""

    display_name: str  # e.g. "Android Studio Otter | 2025.2.1 Canary 1"
    build_id: str  # e.g. "AI-252.23892.248.2521.14025588"
    version: str  # e.g. "2025.2.1.1"
    channel: str  # raw feed value, see ReleaseChannel
    release_date: str
    downloads: tuple[Download, ...] = ()
    platform_build: str = ""
    platform_version: str = ""

    @classmethod
    def from_element(cls, element: ET.Element) -> "Release":
        """Create Release from a feed <item> element."""
        return cls(
            display_name=_text(element, "name"),
            build_id=_text(element, "build"),
            version=_text(element, "version"),
            channel=_text(element, "channel"),
            release_date=_text(element, "date"),
            downloads=tuple(
                Download.from_element(d) for d in element.findall("download")
            ),
            platform_build=_text(element, "platformBuild", required=False),
            platform_version=_text(element, "platformVersion", required=False),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Release":
        """Create Release from its cached dictionary form."""
        downloads = data.get("download", []) if isinstance(data, dict) else []
        if not isinstance(downloads, list):
            raise ParseError("Release entry has a non-list 'download'")
        return cls(
            display_name=_field(data, "name", "Release"),
            build_id=_field(data, "build", "Release"),
            version=_field(data, "version", "Release"),
            channel=_field(data, "channel", "Release"),
            release_date=_field(data, "date", "Release"),
            downloads=tuple(Download.from_dict(d) for d in downloads),
            platform_build=data.get("platformBuild", ""),
            platform_version=data.get("platformVersion", ""),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for the JSON cache."""
        return {
            "name": self.display_name,
            "build": self.build_id,
            "version": self.version,
            "channel": self.channel,
            "platformBuild": self.platform_build,
            "platformVersion": self.platform_version,
            "date": self.release_date,
            "download": [d.to_dict() for d in self.downloads],
        }

    @property
    def channel_type(self) -> ReleaseChannel | None:
        return ReleaseChannel.from_feed(self.channel)

    def is_release(self) -> bool:
        return self.channel_type is ReleaseChannel.RELEASE

    def is_beta(self) -> bool:
        return self.channel_type is ReleaseChannel.BETA

    def is_canary(self) -> bool:
        return self.channel_type is ReleaseChannel.CANARY

    def is_rc(self) -> bool:
        return self.channel_type is ReleaseChannel.RELEASE_CANDIDATE

    def is_patch(self) -> bool:
        return self.channel_type is ReleaseChannel.PATCH

    @property
    def title(self) -> str:
        """Display name with a channel indicator, e.g. "... (Canary)"."""
        suffix = CHANNEL_SUFFIXES.get(self.channel_type, f" ({self.channel})")
        return f"{self.display_name}{suffix}"

    @property
    def bundle_name(self) -> str:
        """Name of the versioned .app bundle this release installs as."""
        return f"{self.display_name.replace(' | ', ' ')}.app"

    def get_download(self, marker: str) -> Download | None:
        """Return the first download whose URL contains ``marker``."""
        for download in self.downloads:
            if marker in download.url:
                return download
        return None


@dataclass(frozen=True)
class ReleaseCatalog:
    """The parsed release feed, in feed order (newest first)."""

    feed_version: str
    releases: tuple[Release, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, data: bytes) -> "ReleaseCatalog":
        """Parse raw feed XML. Either the whole feed parses or ParseError."""
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise ParseError(f"Malformed release feed: {e}")

        if root.tag != "content":
            raise ParseError(f"Unexpected feed root element <{root.tag}>")

        releases = tuple(Release.from_element(item) for item in root.findall("item"))
        return cls(feed_version=root.get("version", ""), releases=releases)

    @classmethod
    def from_dict(cls, data: dict) -> "ReleaseCatalog":
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise ParseError("Cached catalog has no 'items' list")
        return cls(
            feed_version=str(data.get("version", "")),
            releases=tuple(Release.from_dict(item) for item in data["items"]),
        )

    def to_dict(self) -> dict:
        return {
            "version": self.feed_version,
            "items": [release.to_dict() for release in self.releases],
        }

    def __len__(self) -> int:
        return len(self.releases)

    def __iter__(self):
        return iter(self.releases)

    def filter_by_channel(
        self,
        release_only: bool = False,
        beta_only: bool = False,
        canary_only: bool = False,
    ) -> list[Release]:
        """Apply each set flag as a separate retain filter.

        Flags compose with AND: setting two of them yields nothing, since a
        release has exactly one channel.
        """
        items = list(self.releases)
        if release_only:
            items = [item for item in items if item.is_release()]
        if beta_only:
            items = [item for item in items if item.is_beta()]
        if canary_only:
            items = [item for item in items if item.is_canary()]
        return items

    def find_by_build(self, build_id: str) -> Release | None:
        """Return the first release with exactly this build id."""
        for release in self.releases:
            if release.build_id == build_id:
                return release
        return None
