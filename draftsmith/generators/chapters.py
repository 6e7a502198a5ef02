"""
Chapter scene generator – one request per chapter, response split into
scene descriptions on blank lines.
"""

from __future__ import annotations

import logging
import re
from typing import List

from draftsmith.errors import SceneCountMismatch
from draftsmith.generators.prompt_builders import build_scene_list_prompt
from draftsmith.llm.openai_wrapper import GenerationBackend, log_usage
from draftsmith.models import Chapter, ChapterListItem, Summary

logger = logging.getLogger(__name__)

SCENE_BREAK = re.compile(r"\n[ \t]*\n")


def split_scenes(text: str) -> List[str]:
    """Non-empty, trimmed blank-line-delimited segments of *text*."""
    text = text.replace("\r\n", "\n")
    return [s.strip() for s in SCENE_BREAK.split(text) if s.strip()]


def generate_chapter(backend: GenerationBackend, model: str, summary: Summary,
                     ch: ChapterListItem, min_scenes: int = 4) -> Chapter:
    logger.info("creating chapter scene information for chapter %s", ch.title)
    completion = backend.complete(model, build_scene_list_prompt(summary, ch, min_scenes))
    log_usage(completion.usage)
    return Chapter(
        title=ch.title,
        summary=ch.summary,
        scene_descriptions=split_scenes(completion.text),
    )


def check_scene_count(chapter: Chapter, ch_num: int, min_scenes: int,
                      strict: bool = True) -> None:
    actual = len(chapter.scene_descriptions)
    if actual >= min_scenes:
        return
    if strict:
        raise SceneCountMismatch(ch_num, min_scenes, actual)
    logger.warning("chapter %d has %d scenes (asked for ≥%d)", ch_num, actual, min_scenes)
