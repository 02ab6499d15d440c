from __future__ import annotations

import time
from pathlib import Path

from .config import LintConfig
from .core.context import RunContext
from .core.logging import log_event
from .docs.checker import check_documents, find_orphans
from .docs.loader import DocumentLoader
from .docs.model import AnchorIndex, ParseWarning
from .reporting.report import Report


def run_check(ctx: RunContext, root: Path | str, config: LintConfig | None = None) -> Report:
    """Load every document under ``root``, cross-check its links and build a report.

    I/O errors propagate before anything is reported; parse problems become
    warnings and never change the outcome.
    """
    cfg = config or LintConfig()
    start = time.perf_counter()
    loader = DocumentLoader(root, cfg)
    log_event(ctx, "debug", "loader", "scan", root=str(loader.root), jobs=cfg.jobs, config=cfg.source or "-")
    documents = loader.load()
    index = AnchorIndex.build(documents)
    log_event(ctx, "debug", "index", "built", documents=len(documents), anchors=sum(len(a) for a in index.anchors.values()))

    warnings: list[ParseWarning] = []
    for doc in documents:
        for warning in doc.warnings:
            log_event(ctx, "warn", "extractor", warning.kind, path=warning.path, line=warning.line)
            warnings.append(warning)
    if cfg.orphans:
        orphans = find_orphans(documents, cfg)
        for warning in orphans:
            log_event(ctx, "warn", "checker", warning.kind, path=warning.path)
        warnings.extend(orphans)

    findings = check_documents(documents, index, loader.root, cfg)
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    link_count = sum(len(doc.links) for doc in documents)
    log_event(
        ctx,
        "info",
        "checker",
        "done",
        documents=len(documents),
        links=link_count,
        findings=len(findings),
        warnings=len(warnings),
        duration_ms=elapsed_ms,
    )
    return Report(
        findings=tuple(findings),
        warnings=tuple(warnings),
        documents=len(documents),
        links=link_count,
    )
