from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from typing import Callable, TypeAlias

from version_store.errors import (
    InvalidRecordValueError,
    StoreInitError,
    StorePersistError,
)
from version_store.record import read_record, write_record
from version_store.version import BumpType, Version

logger = logging.getLogger(__name__)
DEFAULT_HEADER = "Version managed by version-store"

TransitionObserver: TypeAlias = Callable[[BumpType | None, Version, Version], None]


@dataclass
class VersionStore:
    """Binds a Version to a file.

    The file is written before the in-memory value changes.
    Use `VersionStore.open(path)`, it loads or creates the file.
    """

    path: Path
    _current: Version
    header: str = DEFAULT_HEADER
    _observers: list[TransitionObserver] = field(default_factory=list, repr=False)
    _lock: RLock = field(default_factory=RLock, init=False, repr=False)

    @classmethod
    def open(cls, path: Path | str, *, header: str = DEFAULT_HEADER) -> VersionStore:
        path = Path(path)
        if path.exists():
            try:
                version = read_record(path)
            except (OSError, UnicodeDecodeError) as e:
                raise StoreInitError(path, f"read failed: {e!r}") from e
            except InvalidRecordValueError as e:
                raise StoreInitError(path, str(e)) from e
            logger.debug(f"loaded version {version} from {path}")
            return cls(path, version, header=header)
        version = Version.default()
        try:
            write_record(path, version, header)
        except OSError as e:
            raise StoreInitError(path, f"could not create default: {e!r}") from e
        logger.info(f"created version file @ {path} with {version}")
        return cls(path, version, header=header)

    def current(self) -> Version:
        return self._current

    @property
    def name(self) -> str:
        return self._current.render()

    @property
    def major(self) -> int:
        return self._current.major

    @property
    def minor(self) -> int:
        return self._current.minor

    @property
    def patch(self) -> int:
        return self._current.patch

    @property
    def release_candidate(self) -> int:
        return self._current.release_candidate

    def add_observer(self, observer: TransitionObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: TransitionObserver) -> None:
        self._observers.remove(observer)

    def _apply(
        self,
        bump_type: BumpType | None,
        next_version: Callable[[Version], Version],
    ) -> Version:
        with self._lock:
            old = self._current
            new = next_version(old)
            try:
                write_record(self.path, new, self.header)
            except OSError as e:
                # the in-memory value is only replaced after a successful write
                raise StorePersistError(self.path, new, repr(e)) from e
            self._current = new
            for observer in self._observers:
                observer(bump_type, old, new)
            return new

    def bump(self, bump_type: BumpType) -> Version:
        return self._apply(bump_type, lambda version: version.bump(bump_type))

    def bump_major(self) -> Version:
        return self.bump(BumpType.MAJOR)

    def bump_minor(self) -> Version:
        return self.bump(BumpType.MINOR)

    def bump_patch(self) -> Version:
        return self.bump(BumpType.PATCH)

    def bump_rc(self) -> Version:
        return self.bump(BumpType.RC)

    def release(self) -> Version:
        """Finalize a release by resetting the release candidate to 0"""
        return self.bump(BumpType.RELEASE)

    def set(self, version: Version) -> Version:
        return self._apply(None, lambda _: version)


__all__ = [
    "DEFAULT_HEADER",
    "TransitionObserver",
    "VersionStore",
]
