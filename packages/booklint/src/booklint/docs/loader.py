from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterator

from ..config import LintConfig
from ..core.scan import iter_files
from ..errors import DocumentIOError
from .links import extract_links
from .markdown import extract_headings, extract_html_anchors
from .model import Document, Heading, ParseWarning
from .slugs import AnchorResolver


def read_document_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DocumentIOError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise DocumentIOError(path, exc.strerror or str(exc)) from exc


def parse_document(rel_path: str, content: str) -> Document:
    headings_resolver = AnchorResolver()
    explicit_resolver = AnchorResolver()
    warnings: list[ParseWarning] = []
    explicit: list[str] = []

    def claim(anchor: str, line: int) -> None:
        if explicit_resolver.reserve(anchor):
            explicit.append(anchor)
        else:
            warnings.append(ParseWarning(rel_path, line, "duplicate-anchor", f"anchor `{anchor}` is defined more than once"))

    raw_headings = extract_headings(content)
    html_anchors = extract_html_anchors(content)
    for line, anchor in html_anchors:
        claim(anchor, line)
    headings: list[Heading] = []
    for raw in raw_headings:
        if raw.explicit_id:
            claim(raw.explicit_id, raw.line)
            headings.append(Heading(raw.text, raw.level, raw.line, raw.explicit_id))
            continue
        headings.append(Heading(raw.text, raw.level, raw.line, headings_resolver.resolve(raw.text)))
    links, link_warnings = extract_links(rel_path, content)
    warnings.extend(link_warnings)
    warnings.sort(key=lambda w: (w.line, w.kind, w.message))
    return Document(
        path=rel_path,
        content=content,
        headings=tuple(headings),
        explicit_anchors=tuple(explicit),
        links=tuple(links),
        warnings=tuple(warnings),
    )


def load_document(root: Path, path: Path) -> Document:
    return parse_document(path.relative_to(root).as_posix(), read_document_text(path))


class DocumentLoader:
    """Lazy, restartable view over the Markdown documents under ``root``.

    Each iteration rescans the filesystem, so two passes over an unchanged tree
    yield identical documents in identical (path-sorted) order.
    """

    def __init__(self, root: Path | str, config: LintConfig | None = None) -> None:
        self.root = Path(root)
        self.config = config or LintConfig()
        if not self.root.exists():
            raise DocumentIOError(self.root, "no such directory")
        if not self.root.is_dir():
            raise DocumentIOError(self.root, "not a directory")
        self.root = self.root.resolve()

    def paths(self) -> list[Path]:
        return list(iter_files(self.root, self.config.suffixes, self.config.exclude))

    def __iter__(self) -> Iterator[Document]:
        for path in iter_files(self.root, self.config.suffixes, self.config.exclude):
            yield load_document(self.root, path)

    def load(self, jobs: int | None = None) -> list[Document]:
        workers = jobs or self.config.jobs
        if workers > 1:
            paths = self.paths()
            with ThreadPoolExecutor(max_workers=workers) as ex:
                return list(ex.map(lambda p: load_document(self.root, p), paths))
        return list(self)
