"""
Scene writer – first pass plus anchored continuation rounds.

Each round replays the scene prompt, seeds the assistant turn with the last
line of the prose so far and asks the model to keep going.  One round (two
calls total) is the default.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from draftsmith.generators.prompt_builders import build_continuation, build_scene_prompt
from draftsmith.llm.openai_wrapper import GenerationBackend, log_usage
from draftsmith.models import Chapter, Summary
from draftsmith.store import SCENE_DIR, ArtifactStore

logger = logging.getLogger(__name__)

Anchor = Callable[[str], str]
StopWhen = Callable[[str], bool]


def last_line(text: str) -> str:
    """Text after the final line break, or all of *text* if there is none."""
    return text[text.rfind("\n") + 1:]


def join_prose(first: str, more: str) -> str:
    return first + "\n\n" + more


def min_words(n: int) -> StopWhen:
    return lambda prose: len(prose.split()) >= n


def scene_filename(ch_num: int, sc_num: int) -> str:
    return f"ch-{ch_num}-sc-{sc_num}.md"


def extend(backend: GenerationBackend, model: str, prompt: List[Dict[str, str]],
           prose: str, rounds: int = 1, anchor: Anchor = last_line,
           until: Optional[StopWhen] = None) -> str:
    """
    Run up to *rounds* continuation requests.  Round 1 always runs; *until*
    is consulted from round 2 on.
    """
    for rnd in range(1, rounds + 1):
        if rnd > 1 and until is not None and until(prose):
            logger.debug("stop predicate met before round %d", rnd)
            break
        completion = backend.complete(model, build_continuation(prompt, anchor(prose)))
        log_usage(completion.usage)
        prose = join_prose(prose, completion.text)
    return prose


def draft_scene(backend: GenerationBackend, model: str, summary: Summary, ch: Chapter,
                ch_num: int, sc_num: int, scene: str, rounds: int = 1,
                until: Optional[StopWhen] = None) -> str:
    prompt = build_scene_prompt(summary, ch, ch_num, sc_num, scene)
    first = backend.complete(model, prompt)
    log_usage(first.usage)
    return extend(backend, model, prompt, first.text, rounds=rounds, until=until)


def write_scene(backend: GenerationBackend, store: ArtifactStore, model: str,
                summary: Summary, ch: Chapter, ch_num: int, sc_num: int, scene: str,
                rounds: int = 1, until: Optional[StopWhen] = None) -> str:
    """Draft one scene, persist it under src/ and return its file name."""
    prose = draft_scene(backend, model, summary, ch, ch_num, sc_num, scene,
                        rounds=rounds, until=until)
    fname = scene_filename(ch_num, sc_num)
    store.write(f"{SCENE_DIR}/{fname}", prose)
    logger.info("wrote chapter %d scene %d (%d words)", ch_num, sc_num, len(prose.split()))
    return fname
