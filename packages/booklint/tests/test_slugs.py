from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from booklint.docs.slugs import AnchorResolver, resolve_all, slugify


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Intro", "intro"),
        ("4.4 Missing Pieces", "44-missing-pieces"),
        ("Order & Money: Value Objects", "order-money-value-objects"),
        ("snake_case names", "snakecase-names"),
        ("A - B", "a---b"),
        ("  Trailing   spaces  ", "trailing-spaces"),
        ("Links [see here](x.md) and `code`", "links-see-here-and-code"),
        ("![badge](b.png) Outbox <em>Pattern</em>", "outbox-pattern"),
        ("Café Über", "café-über"),
    ],
)
def test_slugify_rule(text: str, expected: str) -> None:
    assert slugify(text) == expected


def test_duplicate_headings_get_numbered_suffixes() -> None:
    assert resolve_all(["Intro", "Intro", "Intro"]) == ["intro", "intro-1", "intro-2"]


def test_duplicate_suffix_skips_taken_slugs() -> None:
    assert resolve_all(["Intro 1", "Intro", "Intro"]) == ["intro-1", "intro", "intro-2"]


def test_reserved_anchor_is_not_reused() -> None:
    resolver = AnchorResolver()
    assert resolver.reserve("summary")
    assert not resolver.reserve("summary")
    assert resolver.resolve("Summary") == "summary-1"


@given(st.lists(st.text(max_size=30), max_size=12))
def test_slugs_are_deterministic(texts: list[str]) -> None:
    assert resolve_all(texts) == resolve_all(texts)


@given(st.lists(st.sampled_from(["Intro", "Summary", "Intro 1", "Money", "Q&A"]), max_size=15))
def test_slugs_are_unique_within_a_document(texts: list[str]) -> None:
    slugs = resolve_all(texts)
    assert len(set(slugs)) == len(slugs)


@given(st.text(min_size=1, max_size=30))
def test_second_identical_heading_differs_from_first(text: str) -> None:
    first, second = resolve_all([text, text])
    assert first != second
    assert second.startswith(first)
