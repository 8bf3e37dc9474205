from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Callable

from zero_3rdparty.enum_utils import StrEnum

KEY_MAJOR = "major"
KEY_MINOR = "minor"
KEY_PATCH = "patch"
KEY_RC = "releaseCandidate"
RECORD_KEYS = (KEY_MAJOR, KEY_MINOR, KEY_PATCH, KEY_RC)

RC_SEPARATOR = "-RC"
_version_regex = re.compile(
    r"^(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)(-RC(?P<rc>[0-9]+))?$"
)


class BumpType(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    RC = "rc"
    RELEASE = "release"


@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int
    release_candidate: int = 0

    def __post_init__(self):
        for name, value in asdict(self).items():
            if value < 0:
                raise ValueError(f"Version.{name} must be >= 0, got {value}")

    @classmethod
    def default(cls) -> Version:
        return cls(0, 0, 0, 0)

    @classmethod
    def parse(cls, raw: str) -> Version:
        """
        >>> Version.parse("1.2.3-RC4")
        Version(major=1, minor=2, patch=3, release_candidate=4)
        >>> str(Version.parse("1.2.3"))
        '1.2.3'
        """
        match = _version_regex.match(raw.strip())
        if not match:
            raise ValueError(
                f"Invalid version string: {raw!r}, expected X.Y.Z or X.Y.Z-RCn"
            )
        return cls(
            int(match["major"]),
            int(match["minor"]),
            int(match["patch"]),
            int(match["rc"] or 0),
        )

    def bump_major(self) -> Version:
        return Version(self.major + 1, 0, 0, 0)

    def bump_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0, 0)

    def bump_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1, 0)

    def bump_rc(self) -> Version:
        return Version(self.major, self.minor, self.patch, self.release_candidate + 1)

    def reset_rc(self) -> Version:
        """Finalize a release: drop the RC suffix, keep major.minor.patch"""
        return Version(self.major, self.minor, self.patch, 0)

    def bump(self, bump_type: BumpType) -> Version:
        return _bumps[bump_type](self)

    @property
    def is_default(self) -> bool:
        return self == self.default()

    @property
    def is_release_candidate(self) -> bool:
        return self.release_candidate > 0

    def render(self) -> str:
        if self.is_release_candidate:
            rc = self.release_candidate
            return f"{self.major}.{self.minor}.{self.patch}{RC_SEPARATOR}{rc}"
        return f"{self.major}.{self.minor}.{self.patch}"

    def as_dict(self) -> dict[str, int]:
        """Keyed by the names used in the version file"""
        return {
            KEY_MAJOR: self.major,
            KEY_MINOR: self.minor,
            KEY_PATCH: self.patch,
            KEY_RC: self.release_candidate,
        }

    def __str__(self) -> str:
        return self.render()


_bumps: dict[BumpType, Callable[[Version], Version]] = {
    BumpType.MAJOR: Version.bump_major,
    BumpType.MINOR: Version.bump_minor,
    BumpType.PATCH: Version.bump_patch,
    BumpType.RC: Version.bump_rc,
    BumpType.RELEASE: Version.reset_rc,
}
# fail on import if a BumpType is added without a transition
_missing_bumps = [bump for bump in list(BumpType) if bump not in _bumps]
assert not _missing_bumps, f"missing transition for BumpType: {_missing_bumps}"

__all__ = [
    "BumpType",
    "RECORD_KEYS",
    "Version",
]
