"""
Summary parser – recovers a `Summary` from the summary generator's raw text.

Expected layout (paragraphs separated by blank lines):

    Title: "Fresh Beginnings"

    Plot Summary: Two strangers share a network connection and a secret.

    Chapter Summaries

    - "The Signal" - A mysterious packet arrives.
    - "The Handshake" - They finally meet online.

Meaning is positional: the first line carries the title, the second
paragraph the plot summary and the *last* paragraph the chapter list.

The title value loses exactly one leading and one trailing character when it
starts with a quote, so a doubly quoted ``""X""`` keeps its inner pair.

Chapter-list grammar, one chapter per line:

    - <title> - <summary>

where <title> may be wrapped in one pair of straight or curly double quotes
(stripped; a quoted title may itself contain " - ").  Lines that do not
match are dropped and logged, never turned into partial entries.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List

from draftsmith.errors import ChapterCountMismatch, FormatError
from draftsmith.models import CastMember, ChapterListItem, Character, Summary

logger = logging.getLogger(__name__)

TITLE_RE = re.compile(r"^Title: (.+)$")
PLOT_SUMMARY_RE = re.compile(r"^Plot Summary: (.+)$", re.M)
CHAPTER_RE = re.compile(
    r'^-\s+(?:["“](?P<quoted>.+?)["”]|(?P<bare>.+?))\s+-\s+(?P<summary>.+)$'
)
PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")
OPENING_QUOTES = ('"', "“")


def _normalise(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


def split_paragraphs(text: str) -> List[str]:
    return [p for p in PARAGRAPH_BREAK.split(_normalise(text)) if p.strip()]


def parse_title(text: str) -> str:
    first = _normalise(text).split("\n", 1)[0].strip()
    m = TITLE_RE.match(first)
    if not m:
        raise FormatError(f"first line is not a 'Title:' line: {first[:80]!r}")
    title = m.group(1).strip()
    if title.startswith(OPENING_QUOTES):
        title = title[1:-1]
    if not title.strip():
        raise FormatError("title is empty")
    return title


def parse_plot_summary(paragraphs: List[str]) -> str:
    if len(paragraphs) < 2:
        raise FormatError("plot summary paragraph missing")
    m = PLOT_SUMMARY_RE.search(paragraphs[1])
    if not m or not m.group(1).strip():
        raise FormatError(f"second paragraph has no 'Plot Summary:' line: {paragraphs[1][:80]!r}")
    return m.group(1).strip()


def parse_chapter_line(line: str) -> ChapterListItem | None:
    m = CHAPTER_RE.match(line.strip())
    if not m:
        return None
    title = (m.group("quoted") or m.group("bare")).strip()
    summary = m.group("summary").strip()
    if not title or not summary:
        return None
    return ChapterListItem(title=title, summary=summary)


def parse_chapter_list(paragraphs: List[str]) -> List[ChapterListItem]:
    if len(paragraphs) < 3:
        raise FormatError("chapter list paragraph missing")
    chapters: List[ChapterListItem] = []
    for line in paragraphs[-1].split("\n"):
        if not line.strip():
            continue
        item = parse_chapter_line(line)
        if item is None:
            logger.warning("dropping unparseable chapter line: %r", line)
            continue
        chapters.append(item)
    if not chapters:
        raise FormatError("chapter list paragraph holds no chapter lines")
    return chapters


def characters_from_cast(cast: Iterable[CastMember]) -> List[Character]:
    return [Character(name=c.name, symbol=c.symbol, role=c.description, desc="") for c in cast]


def parse_summary(text: str, cast: Iterable[CastMember] = ()) -> Summary:
    """Parse raw summary text; raises FormatError when the layout is off."""
    title = parse_title(text)
    paragraphs = split_paragraphs(text)
    plot_summary = parse_plot_summary(paragraphs)
    chapter_list = parse_chapter_list(paragraphs)

    logger.info("title: %s", title)
    for ch in chapter_list:
        logger.debug("chapter %s: %s", ch.title, ch.summary)

    return Summary(
        title=title,
        chapter_list=chapter_list,
        plot_summary=plot_summary,
        characters=characters_from_cast(cast),
    )


def check_chapter_count(summary: Summary, expected: int, strict: bool = True) -> None:
    actual = len(summary.chapter_list)
    if actual == expected:
        return
    if strict:
        raise ChapterCountMismatch(expected, actual)
    logger.warning("expected %d chapters, parsed %d; continuing", expected, actual)
