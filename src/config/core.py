from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


if TYPE_CHECKING:
    import _typeshed


def root_dir() -> Path:
    return Path(__file__).resolve().parent.parent.parent


def absolute_path(
    *paths: _typeshed.StrPath | Path,
    base_path: _typeshed.StrPath | Path | None = None,
) -> str:
    if base_path is None:
        base_path = root_dir()

    return os.path.join(base_path, *paths)  # noqa: PTH118


class KeysetConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=absolute_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="KEYSET_",
        extra="ignore",
        frozen=True,
    )
    first_column_optimization: bool = True
    default_page_size: int = Field(default=20, gt=0)
    max_page_size: int = Field(default=100, gt=0)

    @model_validator(mode="after")
    def _check_page_sizes(self) -> KeysetConfig:
        if self.max_page_size < self.default_page_size:
            raise ValueError("max_page_size must be >= default_page_size")

        return self


def load_config(**overrides: object) -> KeysetConfig:
    return KeysetConfig(**overrides)  # type: ignore[arg-type]


@lru_cache(maxsize=1)
def get_config() -> KeysetConfig:
    return load_config()
