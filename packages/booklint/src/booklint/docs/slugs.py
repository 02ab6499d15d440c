"""Heading text to anchor slug conversion.

Slugs follow the rule used by the common static-site generators the book's
cross-links were written against: inline markup is reduced to its visible
text, the result is lowercased, punctuation other than hyphens is dropped and
every whitespace run becomes one hyphen. Repeated slugs inside one document get
``-1``, ``-2``... suffixes in order of appearance.
"""

from __future__ import annotations

import re
from typing import Iterable

_IMAGE_RE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_HTML_TAG_RE = re.compile(r"<[^>]+>")
_PUNCT_RE = re.compile(r"[^\w\s-]|_")
_WS_RE = re.compile(r"\s+")


def visible_text(text: str) -> str:
    text = _IMAGE_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    return _HTML_TAG_RE.sub("", text)


def slugify(text: str) -> str:
    slug = visible_text(text).strip().lower()
    slug = _PUNCT_RE.sub("", slug)
    return _WS_RE.sub("-", slug)


class AnchorResolver:
    """Assigns unique slugs to the headings of a single document."""

    def __init__(self) -> None:
        self._taken: set[str] = set()
        self._counts: dict[str, int] = {}

    @property
    def taken(self) -> frozenset[str]:
        return frozenset(self._taken)

    def reserve(self, anchor: str) -> bool:
        """Claim an explicit anchor; returns False when it was already taken."""
        if anchor in self._taken:
            return False
        self._taken.add(anchor)
        return True

    def resolve(self, text: str) -> str:
        base = slugify(text)
        if base not in self._taken:
            self._taken.add(base)
            return base
        n = self._counts.get(base, 0)
        while True:
            n += 1
            candidate = f"{base}-{n}"
            if candidate not in self._taken:
                break
        self._counts[base] = n
        self._taken.add(candidate)
        return candidate


def resolve_all(texts: Iterable[str]) -> list[str]:
    resolver = AnchorResolver()
    return [resolver.resolve(text) for text in texts]
