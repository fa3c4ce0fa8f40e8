"""
Tests for reading version metadata out of installed bundles.
"""

from pathlib import Path

import pytest

from astudios.core.bundle import read_installation, try_read
from astudios.core.errors import BundleReadError, ParseError


class TestTryRead:
    def test_reads_version_identity(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path)
        version = try_read(bundle)
        assert version.short_version == "2025.1"
        assert version.build_version == "AI-251.25410.109.2511.13752376"
        assert version.product_code == "AI"
        assert version.build_number == "251.25410.109.2511.13752376"
        assert version.product_name == "Android Studio"

    def test_product_code_defaults_without_separator(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(
            tmp_path,
            product={"name": "Android Studio Preview", "version": "2025.1.1", "buildNumber": "251.1"},
        )
        version = try_read(bundle)
        assert version.product_code == "AI"
        assert version.product_name == "Android Studio Preview"
        assert version.build_number == "251.1"

    def test_build_number_falls_back_to_version(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path, product={"name": "Android Studio", "version": "AS-251.7"})
        version = try_read(bundle)
        assert version.build_number == "AS-251.7"
        assert version.product_code == "AS"

    def test_missing_path(self, tmp_path: Path):
        assert try_read(tmp_path / "Android Studio.app") is None

    def test_not_an_app_bundle(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path, name="android-studio")
        assert try_read(bundle) is None

    def test_other_product(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path, name="Safari.app", bundle_id="com.apple.Safari")
        assert try_read(bundle) is None

    def test_missing_bundle_identifier(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(
            tmp_path,
            plist={"CFBundleShortVersionString": "2025.1", "CFBundleVersion": "AI-251.1"},
        )
        assert try_read(bundle) is None

    def test_missing_info_plist(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path, plist=None)
        with pytest.raises(BundleReadError, match="Info.plist"):
            try_read(bundle)

    def test_malformed_info_plist(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path)
        (bundle / "Contents" / "Info.plist").write_text("not a plist")
        with pytest.raises(ParseError):
            try_read(bundle)

    def test_bad_plist_value(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path)
        (bundle / "Contents" / "Info.plist").write_text(
            "<plist><dict><key>d</key><date>garbage</date></dict></plist>"
        )
        with pytest.raises(ParseError, match="Info.plist"):
            try_read(bundle)

    def test_missing_build_version(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(
            tmp_path,
            plist={
                "CFBundleIdentifier": "com.google.android.studio",
                "CFBundleShortVersionString": "2025.1",
            },
        )
        with pytest.raises(ParseError, match="CFBundleVersion"):
            try_read(bundle)

    def test_missing_product_info(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path, product=None)
        with pytest.raises(BundleReadError, match="product-info.json"):
            try_read(bundle)

    def test_product_info_without_version(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path, product={"name": "Android Studio"})
        with pytest.raises(ParseError, match="version"):
            try_read(bundle)

    def test_invalid_product_info_json(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path)
        (bundle / "Contents" / "Resources" / "product-info.json").write_text("{")
        with pytest.raises(ParseError):
            try_read(bundle)

    def test_undecodable_product_info(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path)
        (bundle / "Contents" / "Resources" / "product-info.json").write_bytes(
            b'{"version": "\xff\xfe"}'
        )
        with pytest.raises(ParseError, match="product-info.json"):
            try_read(bundle)


class TestReadInstallation:
    def test_pairs_path_and_version(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path)
        installation = read_installation(bundle)
        assert installation.path == bundle
        assert installation.display_name == "Android Studio 2025.1"
        assert installation.identifier == "AI-251.25410.109.2511.13752376"
        assert installation.is_valid()

    def test_channel_hint_from_bundle_name(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path, name="Android Studio Otter 2025.2.1 Canary 2.app")
        assert read_installation(bundle).channel_hint == "Canary"

    def test_structural_equality(self, tmp_path: Path, make_bundle):
        bundle = make_bundle(tmp_path)
        assert read_installation(bundle) == read_installation(bundle)

    def test_not_an_installation(self, tmp_path: Path):
        assert read_installation(tmp_path / "nothing.app") is None
