"""
Prompt builders
• Summary prompt fixes the textual layout the summary parser depends on.
• Scene-list and scene prompts share the `- name: role` roster block.
"""

from __future__ import annotations

from textwrap import dedent
from typing import Dict, List

from draftsmith.models import Chapter, ChapterListItem, PlotSkeleton, Summary

CONTINUE_PROMPT = "Continue writing the story."


def _user(content: str) -> List[Dict[str, str]]:
    return [{"role": "user", "content": content}]


def roster(summary: Summary) -> str:
    return "\n".join(f"- {c.name}: {c.role}" for c in summary.characters)


def build_summary_prompt(plot: PlotSkeleton, chapter_count: int,
                         theme: str | None = None) -> List[Dict[str, str]]:
    extra = f" {theme}" if theme else ""
    base = dedent(
        f"""
        Write me the following about the following plot summary for a novel:

        - A two to five word title for the novel starting with "Title: " and followed by two newlines. For example: "Fresh Beginnings" or "Jared's Adventure through Crime".
        - A detailed plot summary for the story starting with "Plot Summary: " and followed by two newlines. The plot summary should be on the same line as the prefix.{extra}
        - The string "Chapter Summaries" followed by two newlines.
        - A markdown list of detailed chapter summaries in at least 3 sentences and titles for each of the {chapter_count} chapters that a novel based on the plot summary would have. Surround each chapter title in quotes and put a dash after the name like this:

        - "Chapter name" - Chapter summary goes here. More words in the summary go here.
        - "Second chapter name" - Second chapter summary goes here.
        """
    ).strip()
    return _user(base + "\n\n" + plot.plot)


def build_scene_list_prompt(summary: Summary, ch: ChapterListItem,
                            min_scenes: int = 4) -> List[Dict[str, str]]:
    head = dedent(
        f"""
        Given the following plot summary, character information, and chapter information, write descriptions of scenes that would happen in that chapter. End each description with two newlines. Write at least {min_scenes} scenes. DO NOT only write one scene. Use detail and be creative. DO NOT include the chapter title in your output. ONLY output the scenes separated by newlines like this.

        What happens first.

        What happens after that.
        """
    ).strip()
    return _user(
        f"{head}\n\n"
        f"Plot summary: {summary.plot_summary}\n"
        f"Character information:\n{roster(summary)}\n"
        f"Chapter title: {ch.title}\n"
        f"Chapter summary: {ch.summary}"
    )


def build_scene_prompt(summary: Summary, ch: Chapter, ch_num: int, sc_num: int,
                       scene: str) -> List[Dict[str, str]]:
    head = (
        "Given the following information, write the scene of the novel. "
        "Be detailed about the setting and character descriptions. "
        "End each paragraph with two newlines. Write many sentences. "
        "ONLY return the text of the novel."
    )
    opening = ""
    if ch_num == 1 and sc_num == 1:
        opening = "\nWrite details about what the character in the scene and their environment looks like."
    return _user(
        f"{head}\n{roster(summary)}\n"
        f"Chapter title: {ch.title}\n"
        f"Chapter summary: {ch.summary}\n"
        f"Scene summary: {scene}{opening}"
    )


def build_continuation(prompt: List[Dict[str, str]], anchor: str) -> List[Dict[str, str]]:
    """Replay *prompt*, seed the assistant with *anchor*, ask for more."""
    return [
        *prompt,
        {"role": "assistant", "content": anchor},
        {"role": "user", "content": CONTINUE_PROMPT},
    ]
