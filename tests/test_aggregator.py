from __future__ import annotations

import itertools

from tag_aggregator import TagBucket, aggregate_tags
from tag_scanner import Document


def doc(doc_id: str, *tags: str) -> Document:
    return Document(id=doc_id, tags=tags, draft=False, template="post")


def test_counts_distinct_documents():
    buckets = aggregate_tags([doc("a.md", "go", "rust"), doc("b.md", "rust")])

    assert buckets["go"] == TagBucket("go", frozenset({"a.md"}))
    assert buckets["rust"].documents == {"a.md", "b.md"}
    assert buckets["rust"].count == 2


def test_repeated_tag_in_one_document_counts_once():
    buckets = aggregate_tags([doc("a.md", "a", "a")])

    assert buckets["a"].count == 1


def test_tags_are_case_sensitive():
    buckets = aggregate_tags([doc("a.md", "Go"), doc("b.md", "go")])

    assert sorted(buckets) == ["Go", "go"]
    assert buckets["Go"].count == buckets["go"].count == 1


def test_documents_without_tags_contribute_nothing():
    assert aggregate_tags([doc("a.md"), doc("b.md")]) == {}


def test_result_is_independent_of_scan_order():
    documents = [
        doc("a.md", "x", "y"),
        doc("b.md", "y"),
        doc("c.md", "z", "x", "x"),
        doc("d.md"),
    ]
    expected = aggregate_tags(documents)

    for permutation in itertools.permutations(documents):
        buckets = aggregate_tags(permutation)
        assert buckets == expected
        assert list(buckets) == ["x", "y", "z"]
