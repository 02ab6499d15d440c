from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"


def schema_path_for(schema_name: str) -> Path:
    path = SCHEMAS_DIR / f"{schema_name}.schema.json"
    if not path.exists():
        raise ScriptError(f"unknown schema `{schema_name}`", ERR_INTERNAL)
    return path


def load_schema(schema_name: str) -> dict[str, Any]:
    return json.loads(schema_path_for(schema_name).read_text(encoding="utf-8"))


def schema_errors(schema_name: str, payload: Any) -> list[str]:
    validator = jsonschema.Draft202012Validator(load_schema(schema_name))
    errors: list[str] = []
    for exc in sorted(validator.iter_errors(payload), key=lambda e: list(e.absolute_path)):
        pointer = "/".join(str(p) for p in exc.absolute_path)
        errors.append(f"{pointer or '<root>'}: {exc.message}")
    return errors
