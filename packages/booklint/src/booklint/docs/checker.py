from __future__ import annotations

import posixpath
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Sequence

from ..config import LintConfig
from ..core.scan import is_excluded
from .model import AnchorIndex, Document, Finding, Link, ParseWarning, Severity


def resolve_link_path(link: Link) -> str | None:
    """Return the root-relative POSIX path a link points at, or None if it leaves the root."""
    if link.same_document:
        return link.source
    if link.path.startswith("/"):
        joined = link.path.lstrip("/")
    else:
        joined = posixpath.join(posixpath.dirname(link.source), link.path)
    resolved = posixpath.normpath(joined) if joined else "."
    if resolved == ".." or resolved.startswith("../"):
        return None
    return resolved


def _anchor_ignored(anchor: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch(anchor, pattern) for pattern in patterns)


def check_link(link: Link, index: AnchorIndex, root: Path, config: LintConfig) -> Finding | None:
    target = resolve_link_path(link)
    if target is None:
        return Finding(link, Severity.BROKEN_FILE, f"`{link.target}` points outside the checked root")
    if target in index:
        if link.anchor and not _anchor_ignored(link.anchor, config.ignore_anchors):
            if not index.has_anchor(target, link.anchor):
                return Finding(link, Severity.BROKEN_ANCHOR, f"anchor `#{link.anchor}` not found in {target}")
        return None
    is_doc = posixpath.splitext(target)[1].lower() in config.suffixes
    if is_doc and not is_excluded(target, config.exclude):
        return Finding(link, Severity.BROKEN_FILE, f"document {target} does not exist")
    if target != "." and not (root / target).exists():
        return Finding(link, Severity.BROKEN_FILE, f"file {target} does not exist")
    return None


def check_documents(
    documents: Sequence[Document],
    index: AnchorIndex,
    root: Path,
    config: LintConfig | None = None,
) -> list[Finding]:
    cfg = config or LintConfig()
    findings: list[Finding] = []
    for doc in documents:
        for link in doc.links:
            finding = check_link(link, index, root, cfg)
            if finding is not None:
                findings.append(finding)
    findings.sort(key=lambda f: f.sort_key)
    return findings


def find_orphans(documents: Sequence[Document], config: LintConfig | None = None) -> list[ParseWarning]:
    cfg = config or LintConfig()
    linked: set[str] = set()
    for doc in documents:
        for link in doc.links:
            target = resolve_link_path(link)
            if target is not None and target != doc.path:
                linked.add(target)
    orphans: list[ParseWarning] = []
    for doc in documents:
        if doc.path in linked:
            continue
        name = posixpath.basename(doc.path)
        if any(fnmatch(doc.path, ep) or fnmatch(name, ep) for ep in cfg.entry_points):
            continue
        orphans.append(ParseWarning(doc.path, 0, "orphan-document", f"{doc.path} is not linked from any other document"))
    return orphans
