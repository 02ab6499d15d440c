from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

OutputFormat = Literal["text", "json"]


def getenv(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def ci_present() -> bool:
    return "CI" in os.environ


@dataclass(frozen=True)
class RunContext:
    run_id: str
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        default_run = f"booklint-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or getenv("RUN_ID") or default_run
        return cls(
            run_id=resolved_run_id,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
