from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    BROKEN_FILE = "broken-file"
    BROKEN_ANCHOR = "broken-anchor"


@dataclass(frozen=True)
class Heading:
    text: str
    level: int
    line: int
    slug: str


@dataclass(frozen=True)
class Link:
    source: str
    label: str
    target: str
    path: str
    anchor: str
    line: int
    column: int
    image: bool = False

    @property
    def same_document(self) -> bool:
        return not self.path


@dataclass(frozen=True)
class ParseWarning:
    path: str
    line: int
    kind: str
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"path": self.path, "line": self.line, "kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class Document:
    """A Markdown file, keyed by its POSIX path relative to the checked root."""

    path: str
    content: str
    headings: tuple[Heading, ...] = ()
    explicit_anchors: tuple[str, ...] = ()
    links: tuple[Link, ...] = ()
    warnings: tuple[ParseWarning, ...] = ()

    @property
    def anchors(self) -> frozenset[str]:
        return frozenset(h.slug for h in self.headings) | frozenset(self.explicit_anchors)


@dataclass(frozen=True)
class Finding:
    link: Link
    severity: Severity
    message: str

    @property
    def sort_key(self) -> tuple[str, int, int]:
        return (self.link.source, self.link.line, self.link.column)

    def to_dict(self) -> dict[str, object]:
        return {
            "source": self.link.source,
            "link": self.link.target,
            "severity": self.severity.value,
            "line": self.link.line,
            "column": self.link.column,
            "message": self.message,
        }


@dataclass(frozen=True)
class AnchorIndex:
    anchors: dict[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, documents: "list[Document] | tuple[Document, ...]") -> "AnchorIndex":
        return cls({doc.path: doc.anchors for doc in documents})

    def __contains__(self, path: object) -> bool:
        return path in self.anchors

    def has_anchor(self, path: str, anchor: str) -> bool:
        known = self.anchors.get(path, frozenset())
        return anchor in known or anchor.lower() in known
