"""
Summary generator: one request, raw text out.
"""

from __future__ import annotations

import logging

from draftsmith.generators.prompt_builders import build_summary_prompt
from draftsmith.llm.openai_wrapper import GenerationBackend, log_usage
from draftsmith.models import PlotSkeleton

logger = logging.getLogger(__name__)


def generate_summary(backend: GenerationBackend, model: str, plot: PlotSkeleton,
                     chapter_count: int, theme: str | None = None) -> str:
    logger.info("generating plot summary (%d chapters)", chapter_count)
    completion = backend.complete(model, build_summary_prompt(plot, chapter_count, theme))
    log_usage(completion.usage)
    return completion.text
