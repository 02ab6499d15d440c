"""CLI payload output helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import DocumentIOError


def dumps_json(payload: Any, pretty: bool = False) -> str:
    return json.dumps(payload, indent=2 if pretty else None, sort_keys=True)


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def resolve_output_format(*, cli_format: str | None, ci_present: bool) -> str:
    if cli_format:
        return cli_format
    return "json" if ci_present else "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_version": 1,
                "tool": "booklint",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return message


def write_out_file(out_file: str | None, rendered: str) -> None:
    if not out_file:
        return
    out_path = Path(out_file)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(rendered + "\n", encoding="utf-8")
    except OSError as exc:
        raise DocumentIOError(out_path, exc.strerror or str(exc), exc.errno, action="write") from exc
