# draftsmith/models.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _Entity(BaseModel):
    # artifacts are written with camelCase keys, code uses snake_case
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CastMember(_Entity):
    name: str
    symbol: str
    description: str


class PlotSkeleton(_Entity):
    plot: str
    cast: List[CastMember] = []


class ChapterListItem(_Entity):
    title: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1)


class Chapter(ChapterListItem):
    scene_descriptions: List[str] = Field(default_factory=list, alias="sceneDescriptions")


class Character(_Entity):
    name: str
    symbol: str
    role: str
    desc: str = ""


class Summary(_Entity):
    title: str = Field(..., min_length=1)
    chapter_list: List[ChapterListItem] = Field(..., alias="chapterList")
    plot_summary: str = Field(..., min_length=1, alias="plotSummary")
    characters: List[Character] = []


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


class Completion(BaseModel):
    text: str
    usage: Usage | None = None


def dump(entity: BaseModel) -> dict:
    """JSON-ready dict using the artifact (camelCase) field names."""
    return entity.model_dump(mode="json", by_alias=True)
