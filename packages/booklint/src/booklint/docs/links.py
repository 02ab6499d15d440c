from __future__ import annotations

import re
from bisect import bisect_right
from urllib.parse import unquote

from .markdown import iter_prose_lines
from .model import Link, ParseWarning

# A label may wrap onto the next line but never across a blank line.
_LABEL_NL = r"\n(?![ \t]*\n)"
_LINK_RE = re.compile(
    r"(?P<bang>!?)\[(?P<label>(?:[^\[\]\\\n]|\\.|" + _LABEL_NL + r"|\[[^\[\]\n]*\])*)\]"
    r"\(\s*(?P<target><[^<>\n]*>|(?:[^\s()\\]|\\.|\([^\s()]*\))*)"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^()]*\)))?\s*\)"
)
_OPEN_RE = re.compile(r"!?\[(?:[^\[\]\n]|" + _LABEL_NL + r")*\]\(")
_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_WRAP_RE = re.compile(r"[ \t]*\n[ \t]*")


def _blank_code_spans(line: str) -> str:
    return _CODE_SPAN_RE.sub(lambda m: " " * len(m.group(0)), line)


def _prose_text(text: str) -> str:
    """``text`` with fenced code, front matter and code spans blanked; line structure is kept."""
    prose = {lineno: line for lineno, line in iter_prose_lines(text)}
    lines = text.splitlines()
    return "\n".join(_blank_code_spans(prose[idx + 1]) if idx + 1 in prose else "" for idx in range(len(lines)))


def _is_escaped(text: str, pos: int) -> bool:
    backslashes = 0
    while pos - backslashes - 1 >= 0 and text[pos - backslashes - 1] == "\\":
        backslashes += 1
    return backslashes % 2 == 1


def is_external(target: str) -> bool:
    return bool(_SCHEME_RE.match(target)) or target.startswith("//")


def split_target(target: str) -> tuple[str, str]:
    """Split a raw link target into its decoded ``(path, anchor)`` parts."""
    raw = target.strip()
    if raw.startswith("<") and raw.endswith(">"):
        raw = raw[1:-1].strip()
    raw = re.sub(r"\\(.)", r"\1", raw)
    path, _, anchor = raw.partition("#")
    path = path.split("?", 1)[0]
    return unquote(path), unquote(anchor)


class _Scanner:
    def __init__(self, source: str, prose: str) -> None:
        self.source = source
        self.prose = prose
        self.line_starts = [0] + [i + 1 for i, ch in enumerate(prose) if ch == "\n"]
        self.links: list[Link] = []
        self.warnings: list[ParseWarning] = []

    def position(self, offset: int) -> tuple[int, int]:
        line = bisect_right(self.line_starts, offset)
        return line, offset - self.line_starts[line - 1] + 1

    def scan(self, start: int = 0, end: int | None = None) -> None:
        stop = len(self.prose) if end is None else end
        spans: list[tuple[int, int]] = []
        for m in _LINK_RE.finditer(self.prose, start, stop):
            spans.append(m.span())
            if _is_escaped(self.prose, m.start()):
                continue
            label = m.group("label")
            if "](" in label:
                self.scan(m.start("label"), m.end("label"))
            target = m.group("target").strip()
            line, column = self.position(m.start())
            if target in {"", "<>"}:
                snippet = _WRAP_RE.sub(" ", m.group(0))
                self.warnings.append(
                    ParseWarning(self.source, line, "empty-target", f"link `{snippet}` at column {column} has an empty target")
                )
                continue
            if is_external(target.strip("<>")):
                continue
            path, anchor = split_target(target)
            self.links.append(
                Link(
                    source=self.source,
                    label=_WRAP_RE.sub(" ", label),
                    target=target.strip("<>"),
                    path=path,
                    anchor=anchor,
                    line=line,
                    column=column,
                    image=bool(m.group("bang")),
                )
            )
        for m in _OPEN_RE.finditer(self.prose, start, stop):
            if any(s <= m.start() < e for s, e in spans):
                continue
            line, column = self.position(m.start())
            snippet = _WRAP_RE.sub(" ", self.prose[m.start() : m.start() + 40])
            self.warnings.append(
                ParseWarning(self.source, line, "malformed-link", f"unterminated or malformed link at column {column}: `{snippet}`")
            )


def extract_links(source: str, text: str) -> tuple[list[Link], list[ParseWarning]]:
    """Return the relative links of ``text`` in reading order plus parse warnings.

    Links inside fenced code blocks and inline code spans are not navigational and
    are ignored. External targets (anything with a URL scheme) are skipped. A link
    label may wrap across one line break; the link is reported at its opening bracket.
    """
    if "](" not in text:
        return [], []
    scanner = _Scanner(source, _prose_text(text))
    scanner.scan()
    scanner.links.sort(key=lambda link: (link.line, link.column))
    scanner.warnings.sort(key=lambda w: (w.line, w.kind))
    return scanner.links, scanner.warnings
