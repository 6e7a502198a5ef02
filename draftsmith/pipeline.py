"""
Drafting pipeline: plot skeleton → summary → chapters → scenes.

Strictly sequential; every collaborator (backend, plot source, store) is
injected.  Any error stops the run and already-written artifacts stay.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

import jsonschema

from draftsmith.config import RunConfig
from draftsmith.errors import FormatError
from draftsmith.generators.chapters import check_scene_count, generate_chapter
from draftsmith.generators.scenes import min_words, write_scene
from draftsmith.generators.summary import generate_summary
from draftsmith.llm.openai_wrapper import GenerationBackend, MeteredBackend
from draftsmith.models import Chapter, PlotSkeleton, Summary, dump
from draftsmith.parsing import check_chapter_count, parse_summary
from draftsmith.plot import PlotSource
from draftsmith.store import CHAPTER_DIR, SCENE_DIR, ArtifactStore
from draftsmith.utils.validate import validate_chapter, validate_summary

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    summary: Summary
    chapters: List[Chapter] = field(default_factory=list)
    scene_files: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)


class Pipeline:
    def __init__(self, backend: GenerationBackend, plot_source: PlotSource,
                 store: ArtifactStore, config: RunConfig | None = None):
        self.config = config or RunConfig()
        self.backend = MeteredBackend(backend, self.config.max_attempts)
        self.plot_source = plot_source
        self.store = store

    # ------------------------------------------------------------------
    def _write_checked(self, path: str, payload: Dict[str, Any], validator) -> None:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        try:
            validator(text)
        except jsonschema.ValidationError as e:
            raise FormatError(f"{path}: {e.message}") from e
        self.store.write(path, text)

    def summarise(self, plot: PlotSkeleton) -> Summary:
        cfg = self.config
        raw = generate_summary(self.backend, cfg.model, plot, cfg.chapter_count, cfg.theme)
        self.store.write("summary.txt", raw)

        summary = parse_summary(raw, plot.cast)
        check_chapter_count(summary, cfg.chapter_count, cfg.strict_counts)
        self._write_checked("summary.json", dump(summary), validate_summary)
        return summary

    def chapter(self, summary: Summary, ch_num: int) -> Chapter:
        cfg = self.config
        item = summary.chapter_list[ch_num - 1]
        chapter = generate_chapter(self.backend, cfg.model, summary, item, cfg.min_scenes)
        check_scene_count(chapter, ch_num, cfg.min_scenes, cfg.strict_counts)
        self._write_checked(f"{CHAPTER_DIR}/ch-{ch_num}.json", dump(chapter), validate_chapter)
        return chapter

    # ------------------------------------------------------------------
    def run(self) -> PipelineResult:
        cfg = self.config
        until = min_words(cfg.scene_min_words) if cfg.scene_min_words else None

        plot = self.plot_source.generate()
        self.store.write_json("plotto.json", dump(plot))

        summary = self.summarise(plot)
        result = PipelineResult(summary=summary)
        parts: List[Dict[str, Any]] = []

        for ch_num in range(1, len(summary.chapter_list) + 1):
            logger.info("=== Chapter %02d ===", ch_num)
            chapter = self.chapter(summary, ch_num)
            result.chapters.append(chapter)

            for sc_num, scene in enumerate(chapter.scene_descriptions, 1):
                fname = write_scene(
                    self.backend, self.store, cfg.model, summary, chapter,
                    ch_num, sc_num, scene, rounds=cfg.continuation_rounds, until=until,
                )
                result.scene_files.append(f"{SCENE_DIR}/{fname}")
                parts.append({"file": fname, "chapter": ch_num, "scene": sc_num})

        result.stats = {
            "book_title": summary.title,
            "model": cfg.model,
            "chapters": len(result.chapters),
            "scenes": len(result.scene_files),
            "calls": self.backend.calls,
            "usage": self.backend.usage.model_dump(),
            "parts": parts,
        }
        self.store.write_json("draft_stats.json", result.stats)
        logger.info("Draft pipeline finished ✅ (%d scenes, %d tokens)",
                    len(result.scene_files), self.backend.usage.total_tokens)
        return result
