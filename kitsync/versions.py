"""Version normalisation and comparison for npm dependency specs.

Only bare versions are compared; range operators are stripped rather than
interpreted. Hyphenated prereleases follow npm ordering: ``1.0.0-1`` and
``1.0.0-beta.2`` both sort before ``1.0.0``.
"""

from __future__ import annotations

import logging

from packaging import version

logger = logging.getLogger(__name__)


def normalize_version(spec: str) -> str:
    """Strip range markers from an npm version spec.

    Examples:
        >>> normalize_version("^1.2.3")
        '1.2.3'
        >>> normalize_version(" ~v2.0.0 ")
        '2.0.0'
    """
    value = spec.replace("^", "").replace("~", "").strip()
    value = value.lstrip("=").strip()
    if value[:1] in ("v", "V") and value[1:2].isdigit():
        value = value[1:]
    return value


def _split_prerelease(value: str) -> tuple[str, str | None]:
    """Split ``1.0.0-beta.1+build`` into ``("1.0.0", "beta.1")``."""
    base, sep, prerelease = value.split("+", 1)[0].partition("-")
    return base, (prerelease if sep else None)


def _prerelease_key(prerelease: str) -> tuple:
    # Numeric identifiers sort numerically and before alphanumeric ones
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in prerelease.split(".")
    )


def _compare_older(left: str, right: str) -> bool:
    left_base, left_pre = _split_prerelease(left)
    right_base, right_pre = _split_prerelease(right)
    if left_pre is None and right_pre is None:
        return version.parse(left) < version.parse(right)

    left_release = version.parse(left_base)
    right_release = version.parse(right_base)
    if left_release != right_release:
        return left_release < right_release
    if left_pre is None:
        return False
    if right_pre is None:
        return True
    return _prerelease_key(left_pre) < _prerelease_key(right_pre)


def is_older(installed: str, required: str) -> bool:
    """Check whether an installed version spec is older than a required one.

    Both specs are normalised first. When either side is not a parseable
    version (tags, URLs, workspace specs), the installed spec counts as
    satisfied only if it is textually identical to the required one.
    A version with a ``-prerelease`` suffix is older than the same release
    without one.

    Args:
        installed: Version spec found in the project
        required: Version spec declared by the artifact

    Returns:
        True if the installed version needs to be bumped
    """
    left = normalize_version(installed)
    right = normalize_version(required)
    try:
        return _compare_older(left, right)
    except version.InvalidVersion:
        if left == right:
            return False
        logger.warning(
            f"Cannot compare versions '{installed}' and '{required}', treating as outdated"
        )
        return True


__all__ = [
    "normalize_version",
    "is_older",
]
