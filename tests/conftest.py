"""
Shared test fixtures: a sample release feed, bundle factory and config.
"""

import json
import plistlib
import textwrap
from pathlib import Path

import pytest

from astudios.core.config import AstudiosConfig, set_config
from astudios.models.release import ReleaseCatalog

INSTALLER_BYTES = b"installer-bytes"
INSTALLER_SHA256 = "204676736cea68d6411da9d3aa3fab0a5e70b023ba30cd560cfa9c8e7250f4df"

DL = "https://redirector.gvt1.com/edgedl/android/studio"

SAMPLE_FEED = textwrap.dedent(f"""\
    <?xml version="1.0" encoding="UTF-8"?>
    <content version="1">
      <item>
        <name>Android Studio Otter | 2025.2.1 Canary 2</name>
        <build>AI-252.23892.201.2521.14100000</build>
        <version>2025.2.1.2</version>
        <channel>Canary</channel>
        <platformBuild>252.23892.201</platformBuild>
        <platformVersion>2025.2</platformVersion>
        <date>2025-07-24</date>
        <download>
          <link>{DL}/ide-zips/2025.2.1.2/android-studio-2025.2.1.2-linux.tar.gz</link>
          <size>1.4 GB</size>
          <checksum>aaaa</checksum>
        </download>
        <download>
          <link>{DL}/install/2025.2.1.2/android-studio-2025.2.1.2-mac_arm.dmg</link>
          <size>1.3 GB</size>
          <checksum>bbbb</checksum>
        </download>
      </item>
      <item>
        <name>Android Studio Narwhal Feature Drop | 2025.1.2 Beta 1</name>
        <build>AI-251.26094.121.2512.13900000</build>
        <version>2025.1.2.9</version>
        <channel>Beta</channel>
        <date>2025-07-10</date>
      </item>
      <item>
        <name>Android Studio Narwhal | 2025.1.1</name>
        <build>AI-251.25410.109.2511.13752376</build>
        <version>2025.1.1.13</version>
        <channel>Release</channel>
        <platformBuild>251.25410.109</platformBuild>
        <platformVersion>2025.1.1</platformVersion>
        <date>2025-06-24</date>
        <download>
          <link>{DL}/install/2025.1.1.13/android-studio-2025.1.1.13-mac.dmg</link>
          <size>1.3 GB</size>
          <checksum>{INSTALLER_SHA256}</checksum>
        </download>
      </item>
      <item>
        <name>Android Studio Meerkat Feature Drop | 2024.3.2 RC 1</name>
        <build>AI-243.26053.27.2432.13400000</build>
        <version>2024.3.2.12</version>
        <channel>RC</channel>
        <date>2025-04-10</date>
      </item>
      <item>
        <name>Android Studio Meerkat Feature Drop | 2024.3.2</name>
        <build>AI-243.26053.27.2432.13536105</build>
        <version>2024.3.2.14</version>
        <channel>Release</channel>
        <date>2025-05-01</date>
        <download>
          <link>{DL}/install/2024.3.2.14/android-studio-2024.3.2.14-windows.exe</link>
          <size>1.2 GB</size>
          <checksum>cccc</checksum>
        </download>
        <download>
          <link>{DL}/install/2024.3.2.14/android-studio-2024.3.2.14-mac.dmg</link>
          <size>1.3 GB</size>
          <checksum>dddd</checksum>
        </download>
        <download>
          <link>{DL}/install/2024.3.2.14/android-studio-2024.3.2.14-mac_arm.dmg</link>
          <size>1.3 GB</size>
          <checksum>eeee</checksum>
        </download>
        <download>
          <link>{DL}/ide-zips/2024.3.2.14/android-studio-2024.3.2.14-linux.tar.gz</link>
          <size>1.4 GB</size>
          <checksum>ffff</checksum>
        </download>
      </item>
      <item>
        <name>Android Studio Meerkat | 2024.3.1 Patch 1</name>
        <build>AI-243.24978.46.2431.13208083</build>
        <version>2024.3.1.14</version>
        <channel>Patch</channel>
        <date>2025-03-20</date>
      </item>
    </content>
    """).encode()


@pytest.fixture
def feed_bytes() -> bytes:
    return SAMPLE_FEED


@pytest.fixture
def catalog() -> ReleaseCatalog:
    return ReleaseCatalog.parse(SAMPLE_FEED)


@pytest.fixture
def apps_dir(tmp_path: Path) -> Path:
    """Return an empty applications directory."""
    path = tmp_path / "Applications"
    path.mkdir()
    return path


@pytest.fixture
def make_bundle():
    """Factory writing a fake Android Studio bundle.

    ``plist`` and ``product`` replace the generated metadata entirely;
    pass ``None`` for either to leave that file out.
    """
    missing = object()

    def _make(
        parent: Path,
        name: str = "Android Studio.app",
        short_version: str = "2025.1",
        build_version: str = "AI-251.25410.109.2511.13752376",
        bundle_id: str = "com.google.android.studio",
        plist=missing,
        product=missing,
    ) -> Path:
        bundle = parent / name
        resources = bundle / "Contents" / "Resources"
        resources.mkdir(parents=True)

        if plist is missing:
            plist = {
                "CFBundleIdentifier": bundle_id,
                "CFBundleShortVersionString": short_version,
                "CFBundleVersion": build_version,
            }
        if plist is not None:
            with open(bundle / "Contents" / "Info.plist", "wb") as f:
                plistlib.dump(plist, f)

        if product is missing:
            code, _, number = build_version.partition("-")
            product = {
                "name": "Android Studio",
                "version": build_version,
                "buildNumber": number or build_version,
                "productCode": code,
            }
        if product is not None:
            (resources / "product-info.json").write_text(json.dumps(product))

        return bundle

    return _make


@pytest.fixture
def config(tmp_path: Path, apps_dir: Path):
    """An AstudiosConfig rooted in tmp_path, installed as the global config."""
    base = tmp_path / "home"
    cfg = AstudiosConfig(
        base_dir=base,
        cache_dir=base / "cache",
        versions_dir=base / "versions",
        applications_dir=apps_dir,
    )
    set_config(cfg)
    yield cfg
    set_config(None)


@pytest.fixture
def cached_config(config, catalog):
    """Config whose release cache is fresh, so nothing hits the network."""
    from astudios.core.cache import FeedCache

    FeedCache(config.cache_path, config.cache_ttl).store(catalog)
    return config
