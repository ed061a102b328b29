#!/usr/bin/env python3
"""
Build the tag index for a content directory.

Scans every post's front matter, groups posts by tag, assigns each tag a URL
slug, and writes the "all tags" listing plus one page descriptor per tag for
the site renderer to consume.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from tag_aggregator import aggregate_tags
from tag_config import TagIndexConfig
from tag_emitter import TagIndex, emit_tag_index
from tag_errors import ParseError, SlugError, TagIndexError
from tag_scanner import scan_content
from tag_slugs import Slugify, resolve_slugs

DEFAULT_OUTPUTS = {"json": "tags-index.json", "markdown": "tags-index.md"}


@dataclass
class BuildResult:
    index: TagIndex
    errors: list[ParseError] = field(default_factory=list)


def build_tag_index(config: TagIndexConfig, slugify: Optional[Slugify] = None) -> BuildResult:
    """Run scan, aggregation, slug resolution and emission in one pass.

    Documents with bad front matter are skipped and reported in
    `BuildResult.errors`; unreadable content roots and slug collisions raise.
    """
    if config.slug_strategy == "custom" and slugify is None:
        raise SlugError("slug_strategy 'custom' needs a slugify function")
    if config.slug_strategy == "default":
        slugify = None

    scan = scan_content(config)
    buckets = aggregate_tags(scan.documents)
    slugs = resolve_slugs(buckets, slugify)
    index = emit_tag_index(buckets, slugs, scan.documents, config)
    return BuildResult(index=index, errors=scan.errors)


def render_json(index: TagIndex) -> str:
    return json.dumps(asdict(index), indent=2, ensure_ascii=False, default=str) + "\n"


def render_markdown(index: TagIndex) -> str:
    header = [
        f"# {index.title}",
        "",
        "| Tag | Count |",
        "| --- | ----- |",
    ]
    if index.description:
        header[1:1] = ["", index.description]
    rows = [f"| [{entry.name}]({entry.path}) | {entry.count} |" for entry in index.entries]
    return "\n".join(header + rows) + "\n"


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Generate the tag index for a content directory.")
    parser.add_argument("content_root", type=Path, nargs="?", help="Directory of Markdown posts.")
    parser.add_argument("--include-type", help="Front matter template to index (default: post).")
    parser.add_argument("--include-drafts", action="store_true", help="Count posts marked draft: true.")
    parser.add_argument("--order", choices=["name", "count"], help="Sort the tag listing by name or count.")
    parser.add_argument("--pattern", help="Glob for content files (default: **/*.md).")
    parser.add_argument("--workers", type=int, help="Read files with this many threads.")
    parser.add_argument("--format", choices=sorted(DEFAULT_OUTPUTS), default="json", help="Output format.")
    parser.add_argument("--output", type=Path, help="Where to write the index.")
    parser.add_argument("--strict", action="store_true", help="Fail if any document has bad front matter.")
    args = parser.parse_args(argv)

    try:
        config = TagIndexConfig.from_env(
            content_root=args.content_root,
            include_type=args.include_type,
            exclude_drafts=False if args.include_drafts else None,
            order=args.order,
            pattern=args.pattern,
            workers=args.workers,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}")

    print(f"Scanning {config.content_root} for {config.pattern}...")
    try:
        result = build_tag_index(config)
    except TagIndexError as exc:
        raise SystemExit(str(exc))

    for error in result.errors:
        print(f"Warning: skipping {error}")
    if args.strict and result.errors:
        raise SystemExit(f"{len(result.errors)} document(s) have invalid front matter.")
    if not result.index.entries:
        raise SystemExit(f"No tags found across {config.content_root}")

    render = render_markdown if args.format == "markdown" else render_json
    output = args.output or Path(DEFAULT_OUTPUTS[args.format])
    output.write_text(render(result.index), encoding="utf-8")
    print(f"Wrote {len(result.index.entries)} tags to {output}")


if __name__ == "__main__":
    main()
