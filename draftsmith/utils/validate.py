"""
Schema-validation helpers for JSON artifacts.

Usage (inside other modules):
    from draftsmith.utils.validate import validate_summary
    validate_summary(json_text)      # raises jsonschema.ValidationError on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schemas"


def _load_schema(name: str) -> Dict[str, Any]:
    return json.loads((SCHEMA_DIR / name).read_text(encoding="utf-8"))


# ─── public API ──────────────────────────────────────────────────────────
_summary_schema = _load_schema("summary.schema.json")
_chapter_schema = _load_schema("chapter.schema.json")


def validate_summary(json_text: str) -> None:
    jsonschema.validate(json.loads(json_text), _summary_schema)


def validate_chapter(json_text: str) -> None:
    jsonschema.validate(json.loads(json_text), _chapter_schema)
