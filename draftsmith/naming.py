# draftsmith/naming.py
"""Run-directory labels: a romanised given name + family name, e.g. ``mirei-kazenoha``."""

from __future__ import annotations

import random

GIVEN_HEADS = ["a", "chi", "ha", "ka", "ko", "mi", "na", "re", "sa", "yu", "to", "ri"]
GIVEN_TAILS = ["ri", "mu", "ya", "ne", "ko", "rin", "ka", "no", "mei", "sa", "ki"]
FAMILY_PARTS = [
    "kaze", "haku", "kiri", "mori", "yama", "kawa", "hoshi", "tsuki",
    "yuki", "hana", "kuro", "shira", "mizu", "tori",
]
FAMILY_ENDS = ["rei", "ya", "no", "ha", "saka", "mura", "shima", "gawa", "da"]


def generate_name(rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    given = rng.choice(GIVEN_HEADS) + rng.choice(GIVEN_TAILS)
    family = rng.choice(FAMILY_PARTS) + rng.choice(FAMILY_ENDS)
    return f"{given}-{family}"
