"""Read version identity from an installed Android Studio bundle.

A bundle is ``<name>.app`` holding ``Contents/Info.plist`` and
``Contents/Resources/product-info.json``. :func:`try_read` returns None for
paths that are not Android Studio installations and raises for bundles whose
metadata cannot be read.
"""

import json
import logging
import plistlib
from pathlib import Path

from astudios.core.errors import BundleReadError, ParseError
from astudios.models.installation import Installation, InstalledVersion


logger = logging.getLogger(__name__)

BUNDLE_SUFFIX = ".app"
BUNDLE_ID_MARKER = "android.studio"
DEFAULT_PRODUCT_CODE = "AI"
DEFAULT_PRODUCT_NAME = "Android Studio"

INFO_PLIST = Path("Contents") / "Info.plist"
PRODUCT_INFO = Path("Contents") / "Resources" / "product-info.json"


def read_bundle_plist(path: Path) -> dict:
    """Load a property list file as a dictionary."""
    try:
        with open(path, "rb") as f:
            data = plistlib.load(f)
    except OSError as e:
        raise BundleReadError(f"Failed to open {path.name}: {e}")
    except Exception as e:
        # plistlib surfaces bad content as assorted builtin errors
        raise ParseError(f"Failed to parse {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"{path.name} is not a dictionary")
    return data


def read_bundle_json(path: Path) -> dict:
    """Load a JSON metadata file as a dictionary."""
    try:
        content = path.read_bytes()
    except OSError as e:
        raise BundleReadError(f"Failed to read {path.name}: {e}")

    try:
        data = json.loads(content)
    except ValueError as e:  # includes UnicodeDecodeError
        raise ParseError(f"Failed to parse {path.name}: {e}")

    if not isinstance(data, dict):
        raise ParseError(f"{path.name} is not a JSON object")
    return data


def _required_string(data: dict, key: str, source: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ParseError(f"{key} not found in {source}")
    return value


def is_bundle_path(path: Path) -> bool:
    return path.suffix == BUNDLE_SUFFIX


def try_read(path: Path) -> InstalledVersion | None:
    """Extract the installed version of the bundle at ``path``.

    Returns None when ``path`` is missing, is not a ``.app`` bundle, or is a
    bundle of some other product. Raises BundleReadError or ParseError when
    an Android Studio candidate has unreadable or incomplete metadata.
    """
    path = Path(path)
    if not path.exists() or not is_bundle_path(path):
        return None

    info = read_bundle_plist(path / INFO_PLIST)
    short_version = _required_string(info, "CFBundleShortVersionString", "Info.plist")
    build_version = _required_string(info, "CFBundleVersion", "Info.plist")

    bundle_id = info.get("CFBundleIdentifier")
    if not isinstance(bundle_id, str) or BUNDLE_ID_MARKER not in bundle_id:
        logger.debug("%s is not Android Studio (bundle id %r)", path, bundle_id)
        return None

    product = read_bundle_json(path / PRODUCT_INFO)
    version = _required_string(product, "version", "product-info.json")
    product_name = product.get("name")
    if not isinstance(product_name, str):
        product_name = DEFAULT_PRODUCT_NAME
    build_number = product.get("buildNumber")
    if not isinstance(build_number, str):
        build_number = version

    if "-" in version:
        product_code = version.split("-", 1)[0]
    else:
        product_code = DEFAULT_PRODUCT_CODE

    return InstalledVersion(
        short_version=short_version,
        build_version=build_version,
        product_code=product_code,
        build_number=build_number,
        product_name=product_name,
    )


def read_installation(path: Path) -> Installation | None:
    """Pair ``path`` with its version, or None if it is not an installation."""
    version = try_read(path)
    if version is None:
        return None
    return Installation(path=Path(path), version=version)
