from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "slides.schema.json"


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _format_path(e: Any) -> str:
    path = "$"
    for p in e.path:
        path += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return path


def validate_extraction(instance: Any, schema_path: Optional[Path] = None) -> list[str]:
    """
    Validate an extraction dict (ExtractionResult.to_dict()) against the slides schema.
    Returns a list of "<jsonpath>: <message>" strings (empty if valid).
    """
    schema = load_json(schema_path or SCHEMA_PATH)
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(instance), key=lambda e: list(e.path))
    return [f"{_format_path(e)}: {e.message}" for e in errors]


def validate_json_file(instance_path: Path, schema_path: Optional[Path] = None) -> list[str]:
    schema_path = schema_path or SCHEMA_PATH
    if not schema_path.exists():
        return [f"[ERR] schema not found: {schema_path}"]
    if not instance_path.exists():
        return [f"[ERR] instance not found: {instance_path}"]
    try:
        inst = load_json(instance_path)
    except json.JSONDecodeError as e:
        return [f"[ERR] invalid json: {instance_path} ({e})"]
    return validate_extraction(inst, schema_path)
