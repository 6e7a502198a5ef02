"""
Run configuration.

Precedence (lowest → highest): defaults, JSON file from --config, CLI flags.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

MODEL_DEFAULT = "gpt-3.5-turbo"


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    model: str = MODEL_DEFAULT
    temperature: float | None = Field(None, ge=0, le=2)
    max_tokens: int | None = Field(None, ge=1)
    chapter_count: int = Field(10, ge=1)
    min_scenes: int = Field(4, ge=1)
    continuation_rounds: int = Field(1, ge=0)
    scene_min_words: int | None = Field(None, ge=1)
    max_attempts: int = Field(1, ge=1)
    strict_counts: bool = True
    theme: str | None = None
    var_dir: Path = Path("var")
    log_level: str = "INFO"


def load_config(path: Path | None = None, **overrides: Any) -> RunConfig:
    """Merge the optional JSON file with explicit overrides (None = not given)."""
    data: Dict[str, Any] = json.loads(path.read_text("utf-8")) if path else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return RunConfig.model_validate(data)
