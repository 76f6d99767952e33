"""Tests for versions and version constraints."""

import pytest

from vim_flavor.api.exceptions import InvalidVersionError, MalformedConstraintError
from vim_flavor.models import ConstraintOperator, Version, VersionConstraint
from vim_flavor.utils import get_latest_version, parse_version, sort_versions


def versions(*texts):
    return {Version(t) for t in texts}


class TestVersion:
    def test_keeps_tag_text(self):
        version = Version("v1.0")
        assert str(version) == "v1.0"
        assert version == Version("1.0")

    def test_invalid_version(self):
        with pytest.raises(InvalidVersionError):
            Version("not-a-version")

    def test_ordering_is_numeric(self):
        assert Version("1.10") > Version("1.9")
        assert Version("0.3.12") > Version("0.3.2")
        assert sorted(versions("1.0", "0.9", "1.0.1")) == [
            Version("0.9"), Version("1.0"), Version("1.0.1")
        ]

    def test_trailing_zero_is_equal(self):
        assert Version("1.2") == Version("1.2.0")
        assert hash(Version("1.2")) == hash(Version("1.2.0"))

    @pytest.mark.parametrize("text, bumped", [
        ("1.2", "1.3"),
        ("1.2.3", "1.2.4"),
        ("1", "2"),
        ("0", "1"),
        ("1.2.0rc1", "1.2.1"),
    ])
    def test_bump_increments_last_component(self, text, bumped):
        assert Version(text).bump() == Version(bumped)

    def test_parse_version_helper(self):
        assert parse_version("1.2") == Version("1.2")
        assert parse_version("latest") is None

    def test_latest_version(self):
        assert get_latest_version(versions("1.0", "1.2.3", "0.9")) == Version("1.2.3")
        assert get_latest_version([]) is None
        assert sort_versions(versions("1.0", "2.0"))[0] == Version("2.0")


class TestConstraintParsing:
    def test_at_least(self):
        constraint = VersionConstraint.parse(">= 1.2.0")
        assert constraint.operator is ConstraintOperator.AT_LEAST
        assert constraint.base_version == Version("1.2.0")

    def test_compatible(self):
        constraint = VersionConstraint.parse("~> 1.2")
        assert constraint.operator is ConstraintOperator.COMPATIBLE
        assert constraint.base_version == Version("1.2")

    def test_leading_whitespace_allowed(self):
        assert VersionConstraint.parse("  >= 0").base_version == Version("0")

    @pytest.mark.parametrize("text", [
        "garbage",
        ">=1.0",
        "= 1.0",
        "~> ",
        "~> abc",
        ">= 1.0 extra",
        "",
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedConstraintError):
            VersionConstraint.parse(text)

    def test_non_string_is_malformed(self):
        with pytest.raises(MalformedConstraintError):
            VersionConstraint.parse(1.0)

    def test_str_round_trip(self):
        assert str(VersionConstraint.parse("~>   0.3")) == "~> 0.3"
        assert VersionConstraint.parse(str(VersionConstraint.parse(">= 1.1"))) == \
            VersionConstraint.parse(">= 1.1")

    def test_equality_uses_written_version(self):
        assert VersionConstraint.parse("~> 1.2") == VersionConstraint.parse("~>  1.2")
        assert VersionConstraint.parse("~> 1.2") != VersionConstraint.parse("~> 1.2.0")
        assert VersionConstraint.parse("~> 1.2") != VersionConstraint.parse(">= 1.2")


class TestConstraintMatching:
    @pytest.mark.parametrize("version, expected", [
        ("1.2", True),
        ("1.2.5", True),
        ("1.2.99", True),
        ("1.3.0", False),
        ("1.1.9", False),
        ("2.0", False),
    ])
    def test_compatible_range(self, version, expected):
        assert VersionConstraint.parse("~> 1.2").is_satisfied_by(version) is expected

    @pytest.mark.parametrize("version, expected", [
        ("1.2.3", True),
        ("1.2.4", False),
        ("1.2.2", False),
    ])
    def test_compatible_with_patch_base(self, version, expected):
        assert VersionConstraint.parse("~> 1.2.3").is_satisfied_by(version) is expected

    @pytest.mark.parametrize("version, expected", [
        ("1.1", True),
        ("5.0", True),
        ("1.0.9", False),
    ])
    def test_at_least(self, version, expected):
        assert VersionConstraint.parse(">= 1.1").is_satisfied_by(Version(version)) is expected

    def test_best_match(self):
        candidates = versions("1.0", "1.2.3", "1.2.9", "1.3.0")
        assert VersionConstraint.parse("~> 1.2").best_match(candidates) == Version("1.2.9")
        assert VersionConstraint.parse(">= 1.2.3").best_match(candidates) == Version("1.3.0")

    def test_best_match_none_satisfies(self):
        assert VersionConstraint.parse(">= 2.0").best_match(versions("1.0.0")) is None
        assert VersionConstraint.parse(">= 0").best_match(set()) is None
