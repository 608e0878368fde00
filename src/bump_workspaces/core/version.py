"""Semantic version handling.

Parsing, comparison and incrementing are delegated to the ``semver``
package. This module adds the two workspace-specific pieces on top of it:

- :func:`version_diff` works out which component a manual edit changed.
- :func:`increment_version` applies a :class:`BumpType` to a version,
  including the prerelease counter rules.
"""

from __future__ import annotations

from enum import StrEnum

import semver

from bump_workspaces.exceptions import InvalidVersionError

ZERO_VERSION = "0.0.0"

# First identifier given to a prerelease counter on a release version.
PRERELEASE_START = "0"


class BumpType(StrEnum):
    """Magnitude of a version change, ordered by precedence (highest first)."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"


# Lower index = higher precedence.
BUMP_PRECEDENCE: list[BumpType] = [
    BumpType.MAJOR,
    BumpType.MINOR,
    BumpType.PATCH,
    BumpType.PRERELEASE,
]


def max_bump(a: BumpType, b: BumpType) -> BumpType:
    """Return the higher-precedence bump type.

    >>> max_bump(BumpType.MINOR, BumpType.PATCH)
    <BumpType.MINOR: 'minor'>
    """
    return BUMP_PRECEDENCE[min(BUMP_PRECEDENCE.index(a), BUMP_PRECEDENCE.index(b))]


def parse_version(version: str) -> semver.Version:
    """Parse a semantic version string.

    Raises:
        InvalidVersionError: If the string is not a valid semantic version
    """
    try:
        return semver.Version.parse(version.strip())
    except (TypeError, ValueError) as e:
        raise InvalidVersionError(version, str(e)) from e


def is_prerelease(version: semver.Version) -> bool:
    return bool(version.prerelease)


def version_diff(new_version: str, old_version: str) -> BumpType | None:
    """Determine the magnitude of the change from ``old_version`` to ``new_version``.

    A prerelease target is always a ``prerelease`` change. Otherwise the
    first differing component (major, minor, patch) decides. When only the
    prerelease tag was dropped (``1.1.0-rc.2`` -> ``1.1.0``), the lowest
    non-zero component of the release decides.

    Returns:
        The bump type, or ``None`` when no change can be established
    """
    new = parse_version(new_version)
    old = parse_version(old_version)

    if is_prerelease(new):
        return BumpType.PRERELEASE
    if new.major != old.major:
        return BumpType.MAJOR
    if new.minor != old.minor:
        return BumpType.MINOR
    if new.patch != old.patch:
        return BumpType.PATCH
    if is_prerelease(old):
        if new.patch != 0:
            return BumpType.PATCH
        if new.minor != 0:
            return BumpType.MINOR
        return BumpType.MAJOR
    return None


def increment_version(version: str, bump: BumpType) -> str:
    """Increment ``version`` by ``bump``.

    Major, minor and patch follow the usual semver rules and clear any
    prerelease. A prerelease bump increments the trailing numeric
    identifier (``1.0.0-rc.1`` -> ``1.0.0-rc.2``), appends one if the tag
    has none (``1.0.0-beta`` -> ``1.0.0-beta.0``), and starts a new
    prerelease of the next patch on a release (``1.2.3`` -> ``1.2.4-0``).
    """
    current = parse_version(version)

    if bump is BumpType.MAJOR:
        return str(current.bump_major())
    if bump is BumpType.MINOR:
        return str(current.bump_minor())
    if bump is BumpType.PATCH:
        return str(current.bump_patch())

    if not current.prerelease:
        return str(current.replace(patch=current.patch + 1, prerelease=PRERELEASE_START))
    if current.prerelease.split(".")[-1].isdigit():
        return str(current.bump_prerelease())
    return str(current.replace(prerelease=f"{current.prerelease}.{PRERELEASE_START}"))
