from __future__ import annotations

import argparse
import sys

from .. import __version__
from ..core.context import RunContext, ci_present
from ..core.logging import log_event
from ..docs.command import (
    configure_anchors_parser,
    configure_check_parser,
    configure_slug_parser,
    run_anchors_command,
    run_check_command,
    run_slug_command,
)
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL
from .output import emit, render_error, resolve_output_format


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="booklint", description="Markdown book link and anchor checker")
    p.add_argument("--version", action="version", version=f"booklint {__version__}")
    p.add_argument("--run-id", help="run identifier stamped on log events")
    p.add_argument("--config", help="path to a booklint YAML config file")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    version_p = sub.add_parser("version", help="print the booklint version")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    configure_check_parser(sub)
    configure_anchors_parser(sub)
    configure_slug_parser(sub)
    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    fmt = resolve_output_format(
        cli_format=getattr(ns, "check_format", None) or ns.format,
        ci_present=ci_present(),
    )
    ctx = RunContext.from_args(ns.run_id, fmt, ns.verbose, ns.quiet, ns.log_json)
    try:
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format)
        if ns.cmd == "version":
            emit({"schema_version": 1, "tool": "booklint", "version": __version__}, ns.json or fmt == "json")
            return 0
        if ns.cmd == "check":
            return run_check_command(ctx, ns, ns.config)
        if ns.cmd == "anchors":
            return run_anchors_command(ctx, ns)
        if ns.cmd == "slug":
            return run_slug_command(ctx, ns)
        return 2
    except ScriptError as exc:
        log_event(ctx, "error", "cli", exc.kind, code=exc.code)
        print(render_error(as_json=ctx.output_format == "json", message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=ctx.output_format == "json", message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
