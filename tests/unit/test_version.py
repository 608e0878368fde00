"""Tests for semantic version helpers."""

from __future__ import annotations

import pytest

from bump_workspaces.core.version import (
    BumpType,
    increment_version,
    max_bump,
    parse_version,
    version_diff,
)
from bump_workspaces.exceptions import InvalidVersionError


class TestMaxBump:
    """Tests for max_bump()."""

    def test_returns_higher_precedence(self):
        """The bigger of two bumps wins regardless of order."""
        assert max_bump(BumpType.MAJOR, BumpType.MINOR) is BumpType.MAJOR
        assert max_bump(BumpType.MINOR, BumpType.MAJOR) is BumpType.MAJOR
        assert max_bump(BumpType.MAJOR, BumpType.PATCH) is BumpType.MAJOR
        assert max_bump(BumpType.PATCH, BumpType.MAJOR) is BumpType.MAJOR
        assert max_bump(BumpType.MINOR, BumpType.PATCH) is BumpType.MINOR
        assert max_bump(BumpType.PATCH, BumpType.MINOR) is BumpType.MINOR
        assert max_bump(BumpType.PATCH, BumpType.PATCH) is BumpType.PATCH
        assert max_bump(BumpType.PRERELEASE, BumpType.PATCH) is BumpType.PATCH


class TestParseVersion:
    """Tests for parse_version()."""

    def test_parse_prerelease(self):
        """Prerelease components are kept."""
        v = parse_version("1.0.0-rc.1")

        assert (v.major, v.minor, v.patch) == (1, 0, 0)
        assert v.prerelease == "rc.1"

    def test_invalid_version(self):
        """Invalid strings raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError, match="not-a-version"):
            parse_version("not-a-version")


class TestVersionDiff:
    """Tests for version_diff()."""

    @pytest.mark.parametrize(
        ("new", "old", "expected"),
        [
            ("2.0.0", "1.2.3", BumpType.MAJOR),
            ("1.3.0", "1.2.3", BumpType.MINOR),
            ("1.2.4", "1.2.3", BumpType.PATCH),
            ("0.1.0", "0.0.0", BumpType.MINOR),
            ("1.0.0", "0.0.0", BumpType.MAJOR),
            ("0.0.1", "0.0.0", BumpType.PATCH),
            # a prerelease target is always a prerelease change
            ("1.0.0-rc.1", "0.224.0", BumpType.PRERELEASE),
            ("1.0.0-rc.2", "1.0.0-rc.1", BumpType.PRERELEASE),
            # finalizing a prerelease
            ("1.0.0", "1.0.0-rc.1", BumpType.MAJOR),
            ("1.1.0", "1.1.0-rc.1", BumpType.MINOR),
            ("1.1.1", "1.1.1-beta", BumpType.PATCH),
        ],
    )
    def test_diff(self, new: str, old: str, expected: BumpType):
        """The first differing component decides."""
        assert version_diff(new, old) is expected

    def test_equal_versions(self):
        """Equal versions have no diff."""
        assert version_diff("1.2.3", "1.2.3") is None

    def test_build_metadata_only_is_none(self):
        """Build metadata alone is not a change."""
        assert version_diff("1.2.3", "1.2.3+build.1") is None


class TestIncrementVersion:
    """Tests for increment_version()."""

    @pytest.mark.parametrize(
        ("version", "bump", "expected"),
        [
            ("1.2.3", BumpType.MAJOR, "2.0.0"),
            ("1.2.3", BumpType.MINOR, "1.3.0"),
            ("1.2.3", BumpType.PATCH, "1.2.4"),
            ("0.5.0", BumpType.MINOR, "0.6.0"),
            ("1.2.3-rc.1", BumpType.MAJOR, "2.0.0"),
            ("1.0.0-rc.1", BumpType.PRERELEASE, "1.0.0-rc.2"),
            ("1.0.0-rc.9", BumpType.PRERELEASE, "1.0.0-rc.10"),
            ("1.0.0-beta", BumpType.PRERELEASE, "1.0.0-beta.0"),
            ("1.2.3", BumpType.PRERELEASE, "1.2.4-0"),
        ],
    )
    def test_increment(self, version: str, bump: BumpType, expected: str):
        """Increment follows semver rules."""
        assert increment_version(version, bump) == expected
