from version_store.errors import StoreInitError, StorePersistError, VersionStoreError
from version_store.settings import VersionStoreSettings
from version_store.store import TransitionObserver, VersionStore
from version_store.version import BumpType, Version

VERSION = "0.1.0"
__all__ = (
    "BumpType",
    "StoreInitError",
    "StorePersistError",
    "TransitionObserver",
    "Version",
    "VersionStore",
    "VersionStoreError",
    "VersionStoreSettings",
)
