from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator

EXCLUDED_PARTS = {
    ".git",
    ".venv",
    "__pycache__",
    ".mypy_cache",
    ".ruff_cache",
    ".hypothesis",
    "node_modules",
}


def is_excluded(rel: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch(rel, pattern) for pattern in patterns)


def iter_files(root: Path, suffixes: Iterable[str], exclude: Iterable[str] = ()) -> Iterator[Path]:
    wanted = {s.lower() for s in suffixes}
    patterns = tuple(exclude)
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root)
        if any(part in EXCLUDED_PARTS for part in rel.parts):
            continue
        if path.suffix.lower() not in wanted:
            continue
        if is_excluded(rel.as_posix(), patterns):
            continue
        yield path
