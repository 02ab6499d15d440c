from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from ..contracts.schema import schema_errors
from ..core.context import getenv
from ..errors import ConfigError

DEFAULT_CONFIG_NAME = ".booklint.yaml"


@dataclass(frozen=True)
class LintConfig:
    suffixes: tuple[str, ...] = (".md",)
    exclude: tuple[str, ...] = ()
    ignore_anchors: tuple[str, ...] = ()
    entry_points: tuple[str, ...] = ("README.md", "index.md")
    orphans: bool = False
    jobs: int = 1
    source: str = ""

    def with_overrides(
        self,
        *,
        exclude: list[str] | None = None,
        orphans: bool | None = None,
        jobs: int | None = None,
    ) -> "LintConfig":
        cfg = self
        if exclude:
            cfg = replace(cfg, exclude=cfg.exclude + tuple(exclude))
        if orphans:
            cfg = replace(cfg, orphans=True)
        if jobs is not None:
            if jobs < 1:
                raise ConfigError(f"--jobs must be >= 1, got {jobs}")
            cfg = replace(cfg, jobs=jobs)
        return cfg


def _load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in config {path}: {exc}") from exc


def _resolve_config_path(root: Path, explicit: str | None) -> Path | None:
    chosen = explicit or getenv("BOOKLINT_CONFIG")
    if chosen:
        path = Path(chosen)
        if not path.is_file():
            raise ConfigError(f"config file not found: {path}")
        return path
    candidate = root / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_config(root: Path, explicit: str | None = None) -> LintConfig:
    path = _resolve_config_path(root, explicit)
    if path is None:
        return LintConfig()
    data = _load_yaml(path)
    if data is None:
        return LintConfig(source=str(path))
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: root must be mapping")
    errors = schema_errors("config", data)
    if errors:
        raise ConfigError(f"{path}: invalid config; " + "; ".join(errors))
    defaults = LintConfig()
    return LintConfig(
        suffixes=tuple(s.lower() for s in data.get("suffixes", defaults.suffixes)),
        exclude=tuple(data.get("exclude", defaults.exclude)),
        ignore_anchors=tuple(data.get("ignore_anchors", defaults.ignore_anchors)),
        entry_points=tuple(data.get("entry_points", defaults.entry_points)),
        orphans=bool(data.get("orphans", defaults.orphans)),
        jobs=int(data.get("jobs", defaults.jobs)),
        source=str(path),
    )
