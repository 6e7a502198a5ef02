"""
Plot sources.

`PlotGenerator` builds a Plotto-style skeleton: a protagonist clause, a
conflict situation and an outcome clause, with the cast referred to by
symbol (A = male protagonist, B = female protagonist, …) and then named.
`JsonPlotSource` replays a previously saved ``plotto.json``.
"""

from __future__ import annotations

import json
import pathlib
import random
import re
from typing import Dict, List, Protocol

from pydantic import ValidationError

from draftsmith.errors import FormatError
from draftsmith.models import CastMember, PlotSkeleton


class PlotSource(Protocol):
    def generate(self) -> PlotSkeleton:
        ...


# ── clause tables -----------------------------------------------------------
SUBJECTS = [
    "a person in love",
    "a married person",
    "a person influenced by obligation",
    "a person subjected to adversity",
    "a person influenced by a mysterious power",
    "a person of ideals",
    "a person under suspicion",
    "a person in a position of authority",
]

# (situation, symbols it introduces besides A and B)
CONFLICTS = [
    ("{A} seeks to prove his worth to {B} by a test of courage, while {A-2}, "
     "his closest friend, secretly works against him", ["A-2"]),
    ("{A} and {B} are separated when {X}, a stranger with a hidden past, "
     "convinces {B} that {A} has betrayed her", ["X"]),
    ("{A} discovers that {F-A}, his father, has been hiding a debt that now "
     "threatens everything {B} has built", ["F-A"]),
    ("{B} is forced to choose between loyalty to {M-B}, her mother, and her "
     "love for {A}", ["M-B"]),
    ("{A} takes the blame for a crime committed by {A-3}, hoping to shield "
     "{B} from the truth", ["A-3"]),
    ("{A} and {B} inherit a secret that {X} will stop at nothing to obtain, "
     "and {B-2} must decide whose side she is on", ["X", "B-2"]),
]

OUTCOMES = [
    "emerges happily from a serious complication",
    "meets with an experience whereby an error is corrected",
    "achieves a spiritual victory at great personal cost",
    "is rewarded for a long-suffering sacrifice",
    "finds that an apparent misfortune was a blessing in disguise",
    "loses what was sought but gains a truer understanding",
]

ROLES: Dict[str, tuple[str, str]] = {
    "A": ("male", "the male protagonist"),
    "B": ("female", "the female protagonist"),
    "A-2": ("male", "the male friend of A"),
    "A-3": ("male", "the male rival of A"),
    "B-2": ("female", "the female friend of B"),
    "F-A": ("male", "the father of A"),
    "M-B": ("female", "the mother of B"),
    "X": ("male", "a mysterious stranger"),
}

FIRST_NAMES = {
    "male": ["Arthur", "Caleb", "Daniel", "Elias", "Felix", "Hugo", "Jonah", "Marcus", "Owen", "Silas"],
    "female": ["Ada", "Beatrice", "Clara", "Eleanor", "Helena", "Iris", "Lena", "Mara", "Nora", "Vera"],
}
SURNAMES = ["Ashford", "Blake", "Calloway", "Drummond", "Everett", "Hale",
            "Langtry", "Morrow", "Pryce", "Thorne", "Vance", "Whitlock"]

SYMBOL_RE = re.compile(r"\{([A-Z](?:-[A-Z0-9])?)\}")


class PlotGenerator:
    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def _cast(self, symbols: List[str]) -> List[CastMember]:
        used: set[str] = set()
        cast = []
        for sym in symbols:
            gender, description = ROLES[sym]
            first = self.rng.choice([n for n in FIRST_NAMES[gender] if n not in used])
            used.add(first)
            cast.append(CastMember(
                name=f"{first} {self.rng.choice(SURNAMES)}",
                symbol=sym,
                description=description,
            ))
        return cast

    def generate(self) -> PlotSkeleton:
        situation, extra = self.rng.choice(CONFLICTS)
        cast = self._cast(["A", "B", *extra])
        names = {c.symbol: c.name for c in cast}
        subject = self.rng.choice(SUBJECTS)
        outcome = self.rng.choice(OUTCOMES)
        body = SYMBOL_RE.sub(lambda m: names[m.group(1)], situation)
        plot = (
            f"{names['A']}, {subject}, is drawn into trouble: {body}. "
            f"In the end {names['A']} {outcome}."
        )
        return PlotSkeleton(plot=plot, cast=cast)


class JsonPlotSource:
    def __init__(self, path: pathlib.Path):
        self.path = path

    def generate(self) -> PlotSkeleton:
        try:
            return PlotSkeleton.model_validate(json.loads(self.path.read_text("utf-8")))
        except (json.JSONDecodeError, ValidationError) as e:
            raise FormatError(f"{self.path}: not a plot skeleton: {e}") from e
