"""Die and roll outcomes."""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    NO_OP = "no_op"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# Three plain-pip faces, then one face each for Left, Center, Right.
FACES: tuple[Outcome, ...] = (
    Outcome.NO_OP,
    Outcome.NO_OP,
    Outcome.NO_OP,
    Outcome.LEFT,
    Outcome.CENTER,
    Outcome.RIGHT,
)

OUTCOME_SYMBOLS = {
    Outcome.NO_OP: "•",
    Outcome.LEFT: "L",
    Outcome.CENTER: "C",
    Outcome.RIGHT: "R",
}


class Die:
    """Six-sided LCR die drawing from an injected random source."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.last_outcome: Optional[Outcome] = None

    def __repr__(self) -> str:
        face = OUTCOME_SYMBOLS[self.last_outcome] if self.last_outcome else "-"
        return f"Die({face})"

    def roll(self) -> Outcome:
        self.last_outcome = FACES[self.rng.randrange(len(FACES))]
        return self.last_outcome
