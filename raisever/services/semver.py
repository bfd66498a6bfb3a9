from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, TypeGuard

ReleaseBump = Literal["major", "minor", "patch"]
RELEASES: tuple[ReleaseBump, ...] = ("major", "minor", "patch")

_NUM = r"0|[1-9]\d*"
_PRE_ID = r"0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*"
_VERSION_RE = re.compile(
    rf"^=?v?({_NUM})\.({_NUM})\.({_NUM})"
    rf"(?:-((?:{_PRE_ID})(?:\.(?:{_PRE_ID}))*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def is_release_bump(value: str) -> TypeGuard[ReleaseBump]:
    return value in RELEASES


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += "-" + ".".join(self.prerelease)
        if self.build:
            out += "+" + ".".join(self.build)
        return out

    def precedence(self) -> tuple[object, ...]:
        """Sort key per SemVer 2.0: build metadata is ignored, a prerelease
        sorts before its release, numeric identifiers before alphanumeric."""
        pre = tuple(
            (0, int(ident), "") if ident.isdigit() else (1, 0, ident) for ident in self.prerelease
        )
        return (self.major, self.minor, self.patch, 0 if self.prerelease else 1, pre)

    def bump(self, kind: ReleaseBump) -> SemVer:
        # A prerelease of the target version is promoted instead of skipped
        # (1.0.0-rc.1 + patch -> 1.0.0, 2.0.0-beta + major -> 2.0.0).
        match kind:
            case "major":
                if self.minor == 0 and self.patch == 0 and self.prerelease:
                    return SemVer(self.major, 0, 0)
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                if self.patch == 0 and self.prerelease:
                    return SemVer(self.major, self.minor, 0)
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                if self.prerelease:
                    return SemVer(self.major, self.minor, self.patch)
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> SemVer | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    pre = tuple(m.group(4).split(".")) if m.group(4) else ()
    build = tuple(m.group(5).split(".")) if m.group(5) else ()
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), pre, build)


def is_valid(text: str) -> bool:
    return parse_version(text) is not None


def compare(a: SemVer, b: SemVer) -> int:
    """-1, 0 or 1 by precedence."""
    ka, kb = a.precedence(), b.precedence()
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0
