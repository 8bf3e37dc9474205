from pathlib import Path

from version_store.version import Version


class VersionStoreError(Exception):
    """Base error for the version store"""

    pass


class StoreInitError(VersionStoreError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load version file @ {path}: {reason}")


class StorePersistError(VersionStoreError):
    def __init__(self, path: Path, version: Version, reason: str) -> None:
        self.path = path
        self.version = version
        self.reason = reason
        super().__init__(f"Could not write version {version} to {path}: {reason}")


class InvalidRecordValueError(ValueError):
    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid integer for property '{key}': {value!r}")
