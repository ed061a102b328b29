"""Group scanned documents by tag."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from tag_scanner import Document


@dataclass(frozen=True)
class TagBucket:
    name: str
    documents: frozenset[str]

    @property
    def count(self) -> int:
        return len(self.documents)


def aggregate_tags(documents: Iterable[Document]) -> dict[str, TagBucket]:
    """Map each raw tag string to the set of documents carrying it.

    Tags are compared exactly as written, so `Go` and `go` are separate buckets.
    A tag repeated inside one document still counts that document once.
    """
    members: dict[str, set[str]] = defaultdict(set)
    for document in documents:
        for tag in document.tags:
            members[tag].add(document.id)
    return {name: TagBucket(name, frozenset(members[name])) for name in sorted(members)}
