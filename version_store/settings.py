import logging
from pathlib import Path
from typing import ClassVar, Self

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from version_store.store import DEFAULT_HEADER, VersionStore

ENV_PREFIX = "VERSION_STORE_"


class VersionStoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    DEFAULT_FILENAME: ClassVar[str] = "version.properties"

    file: Path = Field(
        default=Path(DEFAULT_FILENAME),
        description="Path to the version file, created with 0.0.0 if missing.",
    )
    header: str = Field(
        default=DEFAULT_HEADER,
        description="Comment written as the first line of the version file.",
    )
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, **kwargs) -> Self:
        return cls(**kwargs)

    @classmethod
    def for_testing(cls, tmp_path: Path, **kwargs) -> Self:
        return cls(file=tmp_path / cls.DEFAULT_FILENAME, **kwargs)

    def open_store(self) -> VersionStore:
        return VersionStore.open(self.file, header=self.header)
