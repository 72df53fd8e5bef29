"""
Semantic version value object for listing versions.
"""

import re
from dataclasses import dataclass

_SEMVER_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")

INITIAL_SEMVER = "0.1.0"


@dataclass(frozen=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, value: str) -> "SemVer":
        """Parse ``major.minor.patch``; raises ValueError when malformed."""
        match = _SEMVER_RE.match(value or "")
        if not match:
            raise ValueError(f"Invalid semantic version: {value!r}")
        return cls(*(int(part) for part in match.groups()))

    @staticmethod
    def is_valid(value: str) -> bool:
        return bool(_SEMVER_RE.match(value or ""))

    def bump_patch(self) -> "SemVer":
        return SemVer(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
