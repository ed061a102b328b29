"""Enumerate content documents and read their front matter."""

from __future__ import annotations

import datetime
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from tag_config import TagIndexConfig
from tag_errors import ParseError, ScanIOError


class FrontMatter(BaseModel):
    template: str
    tags: list[str] = []
    draft: bool = False
    title: Optional[str] = None
    date: Optional[datetime.date] = None

    @field_validator("date", mode="before")
    @classmethod
    def drop_time(cls, value):
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def split_tag_line(cls, value):
        # `tags: a, b` is accepted alongside a YAML list
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("tags")
    @classmethod
    def reject_empty_tags(cls, value: list[str]) -> list[str]:
        if any(not tag.strip() for tag in value):
            raise ValueError("tags must not be empty strings")
        return value


@dataclass(frozen=True)
class Document:
    id: str
    tags: tuple[str, ...]
    draft: bool
    template: str
    title: Optional[str] = None
    date: Optional[datetime.date] = None


@dataclass
class ScanResult:
    documents: list[Document] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)


def extract_front_matter(text: str, path: Path) -> str:
    """Return the raw YAML between the opening and closing `---` lines."""
    lines = text.splitlines()
    if not lines or lines[0].strip() != "---":
        raise ParseError(path, "missing front matter")
    for idx in range(1, len(lines)):
        if lines[idx].strip() == "---":
            return "\n".join(lines[1:idx])
    raise ParseError(path, "front matter not closed with '---'")


def parse_front_matter(text: str, path: Path) -> FrontMatter:
    block = extract_front_matter(text, path)
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise ParseError(path, f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ParseError(path, "front matter is not a mapping")
    try:
        return FrontMatter.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'front matter'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ParseError(path, problems) from exc


def read_document(path: Path, content_root: Path) -> Document:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(path, f"unreadable: {exc}") from exc
    front = parse_front_matter(text, path)
    return Document(
        id=path.relative_to(content_root).as_posix(),
        tags=tuple(front.tags),
        draft=front.draft,
        template=front.template,
        title=front.title,
        date=front.date,
    )


def find_content_files(config: TagIndexConfig) -> list[Path]:
    root = config.content_root
    if not root.is_dir() or not os.access(root, os.R_OK | os.X_OK):
        raise ScanIOError(root, "not a readable directory")
    try:
        return sorted(path for path in root.glob(config.pattern) if path.is_file())
    except OSError as exc:
        raise ScanIOError(root, str(exc)) from exc


def is_included(document: Document, config: TagIndexConfig) -> bool:
    if config.exclude_drafts and document.draft:
        return False
    return document.template == config.include_type


def _read_or_error(path: Path, content_root: Path) -> Document | ParseError:
    try:
        return read_document(path, content_root)
    except ParseError as exc:
        return exc


def iter_documents(config: TagIndexConfig, errors: list[ParseError]) -> Iterator[Document]:
    """Yield included documents; malformed ones are appended to `errors`.

    Every call re-reads the content root, so the sequence can be restarted.
    """
    paths = find_content_files(config)
    root = config.content_root
    if config.workers > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            results = list(pool.map(lambda path: _read_or_error(path, root), paths))
    else:
        results = (_read_or_error(path, root) for path in paths)

    for result in results:
        if isinstance(result, ParseError):
            errors.append(result)
        elif is_included(result, config):
            yield result


def scan_content(config: TagIndexConfig) -> ScanResult:
    result = ScanResult()
    result.documents.extend(iter_documents(config, result.errors))
    return result
