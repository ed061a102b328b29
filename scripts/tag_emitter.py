"""Produce the descriptors the site renderer needs for tag pages."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Iterable, Optional
from urllib.parse import quote

from tag_aggregator import TagBucket
from tag_config import TagIndexConfig
from tag_scanner import Document


@dataclass(frozen=True)
class TagIndexEntry:
    name: str
    slug: str
    count: int
    path: str


@dataclass(frozen=True)
class DocumentRef:
    id: str
    title: Optional[str] = None
    date: Optional[datetime.date] = None


@dataclass(frozen=True)
class TagPage:
    slug: str
    name: str
    path: str
    documents: list[DocumentRef] = field(default_factory=list)


@dataclass(frozen=True)
class TagIndex:
    title: str
    description: str
    entries: list[TagIndexEntry]
    pages: list[TagPage]


def tag_path(slug: str, prefix: str = "/tag/") -> str:
    return f"{prefix.rstrip('/')}/{quote(slug)}/"


def sort_entries(entries: list[TagIndexEntry], order: str) -> list[TagIndexEntry]:
    if order == "count":
        return sorted(entries, key=lambda entry: (-entry.count, entry.name))
    return sorted(entries, key=lambda entry: entry.name)


def newest_first(refs: Iterable[DocumentRef]) -> list[DocumentRef]:
    # undated documents go last; equal dates fall back to the identifier
    refs = sorted(refs, key=lambda ref: ref.id)
    dated = sorted((ref for ref in refs if ref.date), key=lambda ref: ref.date, reverse=True)
    return dated + [ref for ref in refs if not ref.date]


def emit_tag_index(
    buckets: dict[str, TagBucket],
    slugs: dict[str, str],
    documents: Iterable[Document],
    config: TagIndexConfig,
) -> TagIndex:
    by_id = {document.id: document for document in documents}
    entries = []
    pages = []
    for name, bucket in buckets.items():
        slug = slugs[name]
        path = tag_path(slug, config.tag_path_prefix)
        entries.append(TagIndexEntry(name=name, slug=slug, count=bucket.count, path=path))
        refs = []
        for doc_id in bucket.documents:
            document = by_id.get(doc_id)
            if document is None:
                refs.append(DocumentRef(doc_id))
            else:
                refs.append(DocumentRef(doc_id, document.title, document.date))
        pages.append(TagPage(slug=slug, name=name, path=path, documents=newest_first(refs)))

    title = f"Tags - {config.site_title}" if config.site_title else "Tags"
    return TagIndex(
        title=title,
        description=config.site_subtitle,
        entries=sort_entries(entries, config.order),
        pages=sorted(pages, key=lambda page: page.name),
    )
