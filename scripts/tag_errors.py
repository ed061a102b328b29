"""Errors raised while building the tag index."""

from __future__ import annotations

from pathlib import Path


class TagIndexError(Exception):
    pass


class ParseError(TagIndexError):
    """One document's front matter could not be read or validated."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ScanIOError(TagIndexError):
    """The content root itself is unreadable."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot scan {self.path}: {reason}")


class SlugError(TagIndexError):
    pass


class SlugCollisionError(SlugError):
    def __init__(self, slug: str, tags: list[str]):
        self.slug = slug
        self.tags = tuple(sorted(tags))
        names = ", ".join(repr(tag) for tag in self.tags)
        super().__init__(f"Tags {names} all resolve to slug '{slug}'")
