from __future__ import annotations

import argparse
from pathlib import Path

from ..cli.output import emit, write_out_file
from ..config import load_config
from ..core.context import RunContext
from ..core.logging import log_event
from ..engine import run_check
from ..exit_codes import OK
from ..reporting.report import render_json, render_text
from .loader import load_document
from .slugs import slugify


def configure_check_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("check", help="validate relative links and anchors of a Markdown tree")
    p.add_argument("root", help="directory holding the Markdown documents")
    p.add_argument("--format", dest="check_format", choices=["text", "json"], default=None, help="report format")
    p.add_argument("--jobs", type=int, default=None, help="parse documents with N worker threads")
    p.add_argument("--orphans", action="store_true", help="also warn about documents nothing links to")
    p.add_argument("--exclude", action="append", default=[], metavar="GLOB", help="skip documents matching GLOB")
    p.add_argument("--out-file", help="also write the rendered report to this path")


def configure_anchors_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("anchors", help="list the anchors a Markdown document defines")
    p.add_argument("file", help="Markdown document")
    p.add_argument("--json", action="store_true", help="emit JSON output")


def configure_slug_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("slug", help="print the anchor slug of heading text")
    p.add_argument("text", nargs="+", help="heading text")


def run_check_command(ctx: RunContext, ns: argparse.Namespace, config_path: str | None = None) -> int:
    root = Path(ns.root)
    cfg = load_config(root, config_path).with_overrides(exclude=ns.exclude, orphans=ns.orphans, jobs=ns.jobs)
    report = run_check(ctx, root, cfg)
    fmt = ns.check_format or ctx.output_format
    rendered = render_json(report) if fmt == "json" else render_text(report)
    print(rendered)
    write_out_file(ns.out_file, rendered)
    if not report.ok:
        log_event(ctx, "info", "reporter", "failed", findings=len(report.findings), counts=report.counts())
    return report.exit_code


def run_anchors_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    path = Path(ns.file)
    doc = load_document(path.parent.resolve(), path.resolve())
    as_json = ns.json or ctx.output_format == "json"
    if as_json:
        emit(
            {
                "schema_version": 1,
                "tool": "booklint",
                "path": doc.path,
                "headings": [{"text": h.text, "level": h.level, "line": h.line, "slug": h.slug} for h in doc.headings],
                "explicit_anchors": list(doc.explicit_anchors),
            },
            as_json=True,
        )
        return OK
    for heading in doc.headings:
        print(f"{heading.line}: {'#' * heading.level} {heading.text} -> #{heading.slug}")
    for anchor in doc.explicit_anchors:
        print(f"explicit: #{anchor}")
    return OK


def run_slug_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    print(slugify(" ".join(ns.text)))
    return OK
