"""
manuscript.py – stitch the per-scene files of a run into one cleaned
Markdown manuscript (``manuscript.md`` next to ``summary.json``).
"""

from __future__ import annotations

import json
import logging
import pathlib
import re
from typing import Dict, List, Tuple

from draftsmith.errors import FormatError, PersistenceError
from draftsmith.models import Summary
from draftsmith.store import SCENE_DIR

logger = logging.getLogger(__name__)

SCENE_FILE_RE = re.compile(r"^ch-(\d+)-sc-(\d+)\.md$")
SCENE_BREAK = "\n\n***\n\n"


# ── text cleanup ------------------------------------------------------------
def _smart_quotes(t: str) -> str:
    return (
        t.replace("“", '"').replace("”", '"')
         .replace("‘", "'").replace("’", "'")
    )


def _normalize_dashes(t: str) -> str:
    return t.replace("—", "--").replace("–", "-")


def format_text(txt: str) -> str:
    """
    Return *txt* with CR/LF unified, 3+ newlines collapsed to one blank
    line, trailing spaces removed, straight quotes, ASCII dashes and exactly
    one trailing newline.
    """
    txt = txt.replace("\r\n", "\n").replace("\r", "\n")
    txt = re.sub(r"[ \t]+\n", "\n", txt)
    txt = re.sub(r"\n{3,}", "\n\n", txt)
    txt = _normalize_dashes(_smart_quotes(txt))
    return txt.strip() + "\n"


# ── assembly ----------------------------------------------------------------
def scene_files(run_dir: pathlib.Path) -> Dict[int, List[Tuple[int, pathlib.Path]]]:
    """Scene files grouped by chapter number, scenes in numeric order."""
    grouped: Dict[int, List[Tuple[int, pathlib.Path]]] = {}
    for path in (run_dir / SCENE_DIR).glob("ch-*-sc-*.md"):
        m = SCENE_FILE_RE.match(path.name)
        if m:
            grouped.setdefault(int(m.group(1)), []).append((int(m.group(2)), path))
    for scenes in grouped.values():
        scenes.sort()
    return dict(sorted(grouped.items()))


def load_summary(run_dir: pathlib.Path) -> Summary:
    path = run_dir / "summary.json"
    if not path.exists():
        raise FormatError(f"{path} not found")
    return Summary.model_validate(json.loads(path.read_text("utf-8")))


def build_manuscript(run_dir: pathlib.Path, summary: Summary | None = None) -> pathlib.Path:
    summary = summary or load_summary(run_dir)
    grouped = scene_files(run_dir)
    if not grouped:
        raise FormatError(f"no scene files under {run_dir / SCENE_DIR}")

    parts = [f"# {summary.title}"]
    for ch_num, scenes in grouped.items():
        if 1 <= ch_num <= len(summary.chapter_list):
            heading = f"## Chapter {ch_num}: {summary.chapter_list[ch_num - 1].title}"
        else:
            heading = f"## Chapter {ch_num}"
        body = SCENE_BREAK.join(p.read_text("utf-8").strip() for _, p in scenes)
        parts.append(f"{heading}\n\n{body}")

    dest = run_dir / "manuscript.md"
    try:
        dest.write_text(format_text("\n\n".join(parts)), "utf-8")
    except OSError as e:
        raise PersistenceError(f"cannot write {dest}: {e}") from e
    logger.info("Manuscript created → %s (%d chapters)", dest, len(grouped))
    return dest
