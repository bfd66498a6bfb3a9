from __future__ import annotations

import pytest

from raisever.services.semver import SemVer, compare, is_release_bump, is_valid, parse_version


def test_parse_version() -> None:
    assert parse_version("1.2.3") == SemVer(1, 2, 3)
    assert parse_version("v0.0.1") == SemVer(0, 0, 1)
    assert parse_version(" 1.0.0 ") == SemVer(1, 0, 0)
    assert parse_version("=v1.0.0") == SemVer(1, 0, 0)
    assert parse_version("1.0.0-rc.1+build.5") == SemVer(1, 0, 0, ("rc", "1"), ("build", "5"))


@pytest.mark.parametrize("text", ["", "1.0", "1.0.0.0", "01.0.0", "1.0.0-", "1.0.0-01", "latest"])
def test_parse_version_rejects_invalid(text: str) -> None:
    assert parse_version(text) is None
    assert not is_valid(text)


def test_str_drops_v_prefix() -> None:
    assert str(parse_version("v2.0.0-beta.1")) == "2.0.0-beta.1"
    assert str(SemVer(1, 0, 0, build=("sha", "abc"))) == "1.0.0+sha.abc"


@pytest.mark.parametrize(
    ("version", "kind", "expected"),
    [
        ("0.1.0", "major", "1.0.0"),
        ("0.1.0", "minor", "0.2.0"),
        ("0.1.0", "patch", "0.1.1"),
        ("1.2.3", "major", "2.0.0"),
        ("1.2.3", "minor", "1.3.0"),
        # A prerelease of the target version is promoted
        ("1.0.0-rc.1", "patch", "1.0.0"),
        ("1.2.0-rc.1", "minor", "1.2.0"),
        ("2.0.0-beta", "major", "2.0.0"),
        ("1.2.3-rc.1", "minor", "1.3.0"),
        ("1.2.3-rc.1", "major", "2.0.0"),
        ("1.0.0+build", "patch", "1.0.1"),
    ],
)
def test_bump(version: str, kind: str, expected: str) -> None:
    parsed = parse_version(version)
    assert parsed is not None
    assert is_release_bump(kind)
    assert str(parsed.bump(kind)) == expected


def test_is_release_bump() -> None:
    assert is_release_bump("minor")
    assert not is_release_bump("1.0.0")
    assert not is_release_bump("prerelease")


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("1.0.0", "1.0.0", 0),
        ("1.0.0", "1.0.0+build", 0),
        ("1.0.1", "1.0.0", 1),
        ("0.9.9", "1.0.0", -1),
        ("1.0.0-rc.1", "1.0.0", -1),
        ("1.0.0-alpha", "1.0.0-alpha.1", -1),
        ("1.0.0-alpha.2", "1.0.0-alpha.10", -1),
        ("1.0.0-alpha.1", "1.0.0-beta", -1),
        ("1.0.0-1", "1.0.0-alpha", -1),
    ],
)
def test_compare(a: str, b: str, expected: int) -> None:
    va, vb = parse_version(a), parse_version(b)
    assert va is not None and vb is not None
    assert compare(va, vb) == expected
    assert compare(vb, va) == -expected
