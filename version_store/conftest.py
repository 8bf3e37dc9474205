from pathlib import Path

import pytest

from version_store.settings import VersionStoreSettings
from version_store.store import VersionStore


@pytest.fixture()
def settings(tmp_path, monkeypatch) -> VersionStoreSettings:
    monkeypatch.chdir(tmp_path)
    return VersionStoreSettings.for_testing(tmp_path)


@pytest.fixture()
def version_path(settings) -> Path:
    return settings.file


@pytest.fixture()
def store(settings) -> VersionStore:
    return settings.open_store()


def read_props(path: Path) -> dict[str, str]:
    props = {}
    for line in path.read_text().splitlines():
        if line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        props[key] = value
    return props
