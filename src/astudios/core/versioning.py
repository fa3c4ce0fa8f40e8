"""Helpers for comparing dotted build and version strings."""

import re


__all__ = ["version_key", "compare_versions"]


def version_key(version: str) -> tuple[tuple[int, int | str], ...]:
    """Split ``version`` into comparable segments.

    Segments are separated by ``.``, ``-``, ``+`` or ``_``. Digit runs compare
    as integers, so ``2025.10`` sorts after ``2025.9``; any other segment
    (e.g. the ``AI`` product code) compares case-insensitively and before
    numbers at the same position.
    """
    tokens: list[tuple[int, int | str]] = []
    for raw in re.split(r"[.\-+_]", version):
        if not raw:
            continue
        if raw.isdigit():
            tokens.append((1, int(raw)))
        else:
            tokens.append((0, raw.lower()))
    return tuple(tokens)


def compare_versions(left: str, right: str) -> int:
    """Return ``-1``, ``0`` or ``1`` comparing ``left`` with ``right``."""
    left_key = version_key(left)
    right_key = version_key(right)
    if left_key == right_key:
        return 0
    return 1 if left_key > right_key else -1
