"""
Artifact store – write-only persistence of named text / JSON blobs
beneath one run directory.
"""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Protocol

from draftsmith.errors import PersistenceError

logger = logging.getLogger(__name__)

SCENE_DIR = "src"
CHAPTER_DIR = "chapters"


class ArtifactStore(Protocol):
    def write(self, path: str, content: str) -> None:
        ...

    def write_json(self, path: str, obj: Any) -> None:
        ...


class FileArtifactStore:
    def __init__(self, root: pathlib.Path):
        self.root = root

    def write(self, path: str, content: str) -> None:
        dest = self.root / path
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(content, "utf-8")
        except OSError as e:
            raise PersistenceError(f"cannot write {dest}: {e}") from e
        logger.debug("saved %s (%d chars)", dest, len(content))

    def write_json(self, path: str, obj: Any) -> None:
        self.write(path, json.dumps(obj, indent=2, ensure_ascii=False))


def create_run_dir(var_dir: pathlib.Path, label: str) -> pathlib.Path:
    """Make a fresh ``var_dir/label`` (suffixing -2, -3 … on collision)."""
    candidate, n = var_dir / label, 1
    while True:
        try:
            candidate.mkdir(parents=True, exist_ok=False)
            return candidate
        except FileExistsError:
            n += 1
            candidate = var_dir / f"{label}-{n}"
        except OSError as e:
            raise PersistenceError(f"cannot create run directory {candidate}: {e}") from e
