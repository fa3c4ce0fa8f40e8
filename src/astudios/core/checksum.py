"""Checksum verification for downloaded installers."""

import hashlib
import logging
import re
from pathlib import Path

from astudios.core.errors import ChecksumError


logger = logging.getLogger(__name__)

SHA256_PATTERN = re.compile(r"^(?:sha256:)?([a-fA-F0-9]{64})$")


def calculate_sha256(file_path: Path) -> str:
    """Calculate SHA256 hash of a file."""
    sha256 = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256.update(chunk)
    return sha256.hexdigest()


def parse_sha256(checksum: str) -> str | None:
    """Return the lowercase digest if ``checksum`` is a SHA-256 value.

    Accepts a bare 64-digit hex string or one prefixed with ``sha256:``.
    """
    match = SHA256_PATTERN.match(checksum.strip())
    if match is None:
        return None
    return match.group(1).lower()


def verify_checksum(file_path: Path, checksum: str) -> bool:
    """Verify ``file_path`` against the feed checksum.

    Returns True if the digest matches, False if the feed value is not a
    SHA-256 digest and verification was skipped.

    Raises ChecksumError if the digest doesn't match.
    """
    expected_hash = parse_sha256(checksum)
    if expected_hash is None:
        logger.debug("No usable SHA-256 for %s, skipping verification", file_path.name)
        return False

    actual_hash = calculate_sha256(file_path)

    if actual_hash != expected_hash:
        raise ChecksumError(
            f"Checksum mismatch for {file_path.name}:\n"
            f"  Expected: {expected_hash}\n"
            f"  Got:      {actual_hash}"
        )

    return True
