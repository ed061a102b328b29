"""Build configuration for the tag index."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "TAG_INDEX_"
ENV_FIELDS = (
    "content_root",
    "include_type",
    "exclude_drafts",
    "order",
    "pattern",
    "tag_path_prefix",
    "workers",
    "site_title",
    "site_subtitle",
)


class TagIndexConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_root: Path = Path(".")
    include_type: str = "post"
    exclude_drafts: bool = True
    slug_strategy: Literal["default", "custom"] = "default"
    order: Literal["name", "count"] = "name"
    pattern: str = "**/*.md"
    tag_path_prefix: str = "/tag/"
    workers: int = Field(default=1, ge=1)
    site_title: str = ""
    site_subtitle: str = ""

    @field_validator("pattern")
    @classmethod
    def pattern_stays_in_root(cls, value: str) -> str:
        if not value or value.startswith(("/", "\\")) or Path(value).is_absolute():
            raise ValueError(f"pattern must be relative to the content root, got {value!r}")
        if ".." in value.replace("\\", "/").split("/"):
            raise ValueError(f"pattern must not leave the content root, got {value!r}")
        return value

    @classmethod
    def from_env(cls, env_file: Path | None = None, **overrides) -> TagIndexConfig:
        """Read TAG_INDEX_* variables, seeding them from a .env file when present.

        Keyword overrides win over the environment; ``None`` overrides are ignored.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))
        values = {}
        for name in ENV_FIELDS:
            raw = os.environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(values)
