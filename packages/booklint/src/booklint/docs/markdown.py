from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

import yaml

_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_ATX_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_ATX_CLOSE_RE = re.compile(r"(?:^|[ \t]+)#+$")
_SETEXT_RE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_HEADING_ID_RE = re.compile(r"[ \t]*\{#([^\s{}]+)\}$")
_NOT_PARAGRAPH_RE = re.compile(r"^(?: {4,}|\t| {0,3}(?:[>|]|[-*+][ \t]|\d+[.)][ \t]|<!--))")
_HTML_ID_RE = re.compile(r"<[A-Za-z][^>]*?\s(?:id|name)\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)


@dataclass(frozen=True)
class RawHeading:
    text: str
    level: int
    line: int
    explicit_id: str = ""


def front_matter_end(lines: list[str]) -> int:
    """Index of the first line after a leading YAML front matter block, or 0."""
    if not lines or lines[0].strip() != "---":
        return 0
    for idx in range(1, len(lines)):
        if lines[idx].strip() in {"---", "..."}:
            try:
                data = yaml.safe_load("\n".join(lines[1:idx]))
            except yaml.YAMLError:
                return 0
            return idx + 1 if isinstance(data, dict) else 0
    return 0


def iter_prose_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for lines outside fenced code and front matter."""
    lines = text.splitlines()
    start = front_matter_end(lines)
    fence = ""
    for idx in range(start, len(lines)):
        line = lines[idx]
        m = _FENCE_RE.match(line)
        if fence:
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence) and not m.group(2).strip():
                fence = ""
            continue
        if m and not (m.group(1)[0] == "`" and "`" in m.group(2)):
            fence = m.group(1)
            continue
        yield idx + 1, line


def _split_heading_id(text: str) -> tuple[str, str]:
    m = _HEADING_ID_RE.search(text)
    if not m:
        return text, ""
    return text[: m.start()].rstrip(), m.group(1)


def extract_headings(text: str) -> list[RawHeading]:
    headings: list[RawHeading] = []
    prev: tuple[int, str] | None = None
    for lineno, line in iter_prose_lines(text):
        atx = _ATX_RE.match(line)
        if atx:
            body = _ATX_CLOSE_RE.sub("", atx.group(2) or "").strip()
            body, explicit = _split_heading_id(body)
            headings.append(RawHeading(body, len(atx.group(1)), lineno, explicit))
            prev = None
            continue
        setext = _SETEXT_RE.match(line)
        if setext:
            if prev is not None and prev[0] == lineno - 1:
                body, explicit = _split_heading_id(prev[1].strip())
                level = 1 if setext.group(1).startswith("=") else 2
                headings.append(RawHeading(body, level, prev[0], explicit))
            prev = None
            continue
        if line.strip() and not _NOT_PARAGRAPH_RE.match(line):
            prev = (lineno, line)
        else:
            prev = None
    return headings


def extract_html_anchors(text: str) -> list[tuple[int, str]]:
    found: list[tuple[int, str]] = []
    for lineno, line in iter_prose_lines(text):
        for m in _HTML_ID_RE.finditer(line):
            found.append((lineno, m.group(1).strip()))
    return found
