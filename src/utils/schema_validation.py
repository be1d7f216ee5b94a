"""
Schema Validation Utilities
===========================
JSON Schema loading and validation helpers for review payloads.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft202012Validator, FormatChecker
from jsonschema.exceptions import ValidationError


@lru_cache(maxsize=32)
def _load_schema(schema_filename: str) -> Dict[str, Any]:
    """Load a schema JSON file from src/schemas.

    Args:
        schema_filename: File name under src/schemas (for example 'review_sections.schema.json').

    Raises:
        FileNotFoundError: When schema file is missing.
        ValueError: When schema file is not valid JSON or not a JSON object.
    """
    schemas_dir = Path(__file__).resolve().parent.parent / "schemas"
    schema_path = (schemas_dir / schema_filename).resolve()
    if not schema_path.is_relative_to(schemas_dir.resolve()):
        raise ValueError(f"Schema path escapes schemas directory: {schema_filename}")
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_filename}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to load schema {schema_filename}: {e}")

    if not isinstance(schema, dict):
        raise ValueError(f"Schema {schema_filename} must be a JSON object")
    return schema


def validate_against_schema(payload: Any, schema_filename: str) -> None:
    """Validate payload against a JSON Schema.

    Args:
        payload: Any JSON-serializable object.
        schema_filename: File name under src/schemas.

    Raises:
        ValueError: When payload fails validation.
    """
    schema = _load_schema(schema_filename)
    validator = Draft202012Validator(schema, format_checker=FormatChecker())

    errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.path))
    if not errors:
        return

    error: ValidationError = errors[0]
    path = "/".join(str(p) for p in error.path)
    prefix = f"Validation failed at '{path}': " if path else "Validation failed: "
    raise ValueError(prefix + error.message)


def validate_review_sections(payload: Dict[str, Any]) -> None:
    """Validate a ReviewSections payload.

    Uses src/schemas/review_sections.schema.json.
    """
    validate_against_schema(payload, "review_sections.schema.json")


def validate_line_diff_entry(payload: Dict[str, Any]) -> None:
    """Validate a LineDiffEntry payload.

    Uses src/schemas/line_diff_entry.schema.json.
    """
    validate_against_schema(payload, "line_diff_entry.schema.json")
    _validate_line_diff_texts_differ(payload)


def _validate_line_diff_texts_differ(payload: Dict[str, Any]) -> None:
    """Validate constraints not expressible in JSON Schema.

    A change entry must carry two different trimmed texts.
    """
    if payload.get("kind") != "change":
        return
    bad = payload.get("badText")
    fix = payload.get("fixText")
    if isinstance(bad, str) and isinstance(fix, str) and bad.strip() == fix.strip():
        raise ValueError("Validation failed: change entry has identical badText and fixText")


def is_valid_review_sections(payload: Any) -> bool:
    """Return True when payload validates as ReviewSections."""
    if not isinstance(payload, dict):
        return False
    try:
        validate_review_sections(payload)
        return True
    except ValueError:
        return False


def is_valid_line_diff_entry(payload: Any) -> bool:
    """Return True when payload validates as LineDiffEntry."""
    if not isinstance(payload, dict):
        return False
    try:
        validate_line_diff_entry(payload)
        return True
    except ValueError:
        return False
