from __future__ import annotations

from pathlib import Path

import pytest

from booklint.config import LintConfig
from booklint.docs.loader import DocumentLoader, parse_document
from booklint.errors import DocumentIOError, ScriptError
from booklint.exit_codes import ERR_IO


def test_headings_levels_and_duplicate_slugs() -> None:
    doc = parse_document("a.md", "# Intro\n## Intro\nText\n===\n#### Intro ####\n")
    assert [(h.text, h.level, h.line, h.slug) for h in doc.headings] == [
        ("Intro", 1, 1, "intro"),
        ("Intro", 2, 2, "intro-1"),
        ("Text", 1, 3, "text"),
        ("Intro", 4, 5, "intro-2"),
    ]


def test_setext_h2_and_thematic_break() -> None:
    doc = parse_document("a.md", "Bounded Contexts\n---\n\nParagraph\n\n---\n- item\n---\n")
    assert [(h.text, h.level) for h in doc.headings] == [("Bounded Contexts", 2)]


def test_headings_in_code_fences_are_ignored() -> None:
    doc = parse_document("a.md", "```md\n# Not a heading\n```\n# Real\n")
    assert [h.slug for h in doc.headings] == ["real"]


def test_hash_without_space_is_not_a_heading() -> None:
    doc = parse_document("a.md", "#hashtag\n# C#\n")
    assert [h.text for h in doc.headings] == ["C#"]


def test_explicit_anchors() -> None:
    doc = parse_document(
        "glossary.md",
        '<a id="ddd"></a>\n# Glossary\n## Aggregate Root {#aggregate}\n<span name="vo">Value</span>\n',
    )
    assert doc.explicit_anchors == ("ddd", "vo", "aggregate")
    assert doc.anchors == frozenset({"ddd", "vo", "aggregate", "glossary"})
    assert doc.headings[1].slug == "aggregate"


def test_duplicate_explicit_anchor_warns() -> None:
    doc = parse_document("a.md", '<a id="x"></a>\ntext\n<a id="x"></a>\n')
    assert doc.explicit_anchors == ("x",)
    assert [(w.line, w.kind) for w in doc.warnings] == [(3, "duplicate-anchor")]


def test_html_anchor_does_not_shift_heading_slug() -> None:
    doc = parse_document("a.md", '<a id="intro"></a>\n# Intro\n')
    assert doc.headings[0].slug == "intro"
    assert doc.anchors == frozenset({"intro"})
    assert doc.warnings == ()


def test_missing_root_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(DocumentIOError) as exc:
        DocumentLoader(tmp_path / "nope")
    assert exc.value.code == ERR_IO
    assert isinstance(exc.value, ScriptError)
    assert "nope" in str(exc.value)


def test_file_root_raises_io_error(tmp_path: Path) -> None:
    target = tmp_path / "a.md"
    target.write_text("# A\n", encoding="utf-8")
    with pytest.raises(DocumentIOError):
        DocumentLoader(target)


def test_loader_is_sorted_lazy_and_restartable(write_book) -> None:
    root = write_book(
        {
            "b.md": "# B\n",
            "a.md": "# A\n[b](b.md)\n",
            "chapters/01-intro.md": "# Intro\n",
            "notes.txt": "[x](x.md)\n",
            ".git/HEAD.md": "# ignored\n",
        }
    )
    loader = DocumentLoader(root)
    first = list(loader)
    second = list(loader)
    assert [d.path for d in first] == ["a.md", "b.md", "chapters/01-intro.md"]
    assert first == second
    assert first[0].links[0].path == "b.md"


def test_loader_honours_exclude_patterns(write_book) -> None:
    root = write_book({"a.md": "# A\n", "drafts/wip.md": "# WIP\n"})
    loader = DocumentLoader(root, LintConfig(exclude=("drafts/*",)))
    assert [d.path for d in loader] == ["a.md"]


def test_parallel_load_matches_sequential(write_book) -> None:
    files = {f"ch{i:02d}.md": f"# Chapter {i}\n[next](ch{i + 1:02d}.md#chapter-{i + 1})\n" for i in range(12)}
    root = write_book(files)
    loader = DocumentLoader(root)
    assert loader.load(jobs=4) == loader.load(jobs=1)


def test_undecodable_document_raises_io_error(write_book) -> None:
    root = write_book({"a.md": "# A\n"})
    (root / "bad.md").write_bytes(b"\xff\xfe\xfa broken")
    with pytest.raises(DocumentIOError) as exc:
        list(DocumentLoader(root))
    assert "bad.md" in str(exc.value)


def test_missing_root_is_an_os_error(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(OSError) as exc:
        DocumentLoader(missing)
    assert exc.value.filename == str(missing)
    assert exc.value.code == ERR_IO
