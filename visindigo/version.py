"""Three-part version numbers with build and branch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_UINT32_MAX = 0xFFFFFFFF


class Branch(IntEnum):
    UNKNOWN = -1
    DEVELOP = 0
    ALPHA = 5000
    BETA = 10000
    PREVIEW = 15000
    RELEASE = 20000


def _to_uint(text: str) -> int:
    text = text.strip()
    if not text.isdigit():
        return 0
    value = int(text)
    return value if value <= _UINT32_MAX else 0


@dataclass(frozen=True)
class Version:
    major: int = 0
    minor: int = 1
    patch: int = 0
    build: int = 0
    branch: Branch = Branch.UNKNOWN

    @classmethod
    def from_string(cls, version: str) -> "Version":
        """Parse "major.minor.patch"; missing or invalid parts become 0."""
        parts = version.split(".")
        parts += ["0"] * (3 - len(parts))
        major, minor, patch = (_to_uint(part) for part in parts[:3])
        return cls(major, minor, patch)

    def get_version_string(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def is_same_version(self, other: "Version") -> bool:
        """True when any single component matches."""
        return (
            other.major == self.major
            or other.minor == self.minor
            or other.patch == self.patch
            or other.build == self.build
            or other.branch == self.branch
        )

    def _key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def is_newer_than(self, other: "Version") -> bool:
        return self._key() > other._key()

    def is_older_than(self, other: "Version") -> bool:
        return self._key() < other._key()

    def __gt__(self, other: "Version") -> bool:
        return self.is_newer_than(other)

    def __lt__(self, other: "Version") -> bool:
        return self.is_older_than(other)