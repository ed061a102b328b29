"""Turn tag names into URL path segments."""

from __future__ import annotations

import re
import unicodedata
from collections import defaultdict
from typing import Callable, Iterable, Optional

from tag_errors import SlugCollisionError, SlugError

Slugify = Callable[[str], str]

APOSTROPHES = re.compile(r"['’]")
CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
DIGIT_BOUNDARY = re.compile(r"(?<=[A-Za-z])(?=\d)|(?<=\d)(?=[A-Za-z])")
SLUG_PUNCTUATION = "-._~"


def is_word_char(char: str) -> bool:
    return char.isalnum() or unicodedata.category(char).startswith("M")


def fold_accents(text: str) -> str:
    """Strip accents from Latin letters (`é` -> `e`), keeping other scripts intact."""
    folded = []
    after_latin = False
    for char in unicodedata.normalize("NFC", text):
        if after_latin and unicodedata.combining(char):
            continue
        decomposed = unicodedata.normalize("NFKD", char)
        after_latin = decomposed[0].isascii()
        if after_latin:
            folded.append("".join(part for part in decomposed if not unicodedata.combining(part)))
        else:
            folded.append(char)
    return "".join(folded)


def kebab_case(name: str) -> str:
    """Lowercase hyphenated slug: `Machine Learning` -> `machine-learning`.

    Accents on Latin letters are dropped, apostrophes removed, camelCase and
    letter/digit boundaries split, and any other run of punctuation or
    whitespace becomes a single hyphen. Letters from other scripts are kept
    as they are. Applying it to its own output is a no-op.

        >>> kebab_case("C++")
        'c'
        >>> kebab_case("fooBar baz")
        'foo-bar-baz'
        >>> kebab_case("Café à Paris")
        'cafe-a-paris'
        >>> kebab_case("Привет мир")
        'привет-мир'
    """
    text = APOSTROPHES.sub("", fold_accents(name))
    text = CAMEL_BOUNDARY.sub(" ", text)
    text = DIGIT_BOUNDARY.sub(" ", text)
    words = "".join(char if is_word_char(char) else " " for char in text).split()
    # lowercasing can reintroduce combining marks, e.g. on dotted capital I
    return fold_accents("-".join(words).lower())


def is_url_safe(slug: str) -> bool:
    """Slugs may hold letters and digits of any script plus `-._~`."""
    return bool(slug) and all(char in SLUG_PUNCTUATION or is_word_char(char) for char in slug)


def resolve_slugs(names: Iterable[str], slugify: Optional[Slugify] = None) -> dict[str, str]:
    """Map every tag name to a unique slug.

    Raises SlugCollisionError when distinct tags share a slug, and SlugError
    when a tag has no usable slug at all.
    """
    slugify = slugify or kebab_case
    slugs = {}
    claimed: dict[str, list[str]] = defaultdict(list)
    for name in sorted(set(names)):
        slug = slugify(name)
        if not isinstance(slug, str) or not is_url_safe(slug):
            raise SlugError(f"Tag {name!r} has no URL-safe slug (got {slug!r})")
        slugs[name] = slug
        claimed[slug].append(name)

    for slug in sorted(claimed):
        if len(claimed[slug]) > 1:
            raise SlugCollisionError(slug, claimed[slug])
    return slugs
