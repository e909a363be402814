"""Agent kinds and the cyclic dominance rule."""
from __future__ import annotations

from enum import Enum


class Kind(Enum):
    """One of the three agent kinds."""

    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def symbol(self) -> str:
        return self.value[0].upper()


# Each kind maps to the single kind it defeats.
_BEATS: dict[Kind, Kind] = {
    Kind.ROCK: Kind.SCISSORS,
    Kind.SCISSORS: Kind.PAPER,
    Kind.PAPER: Kind.ROCK,
}


def beats(a: Kind, b: Kind) -> bool:
    """True when ``a`` defeats ``b``. A kind never beats itself."""
    return _BEATS[a] is b


def winner(a: Kind, b: Kind) -> Kind:
    """Kind both parties take after contact. Symmetric; ``winner(a, a) is a``."""
    if a is b:
        return a
    return a if beats(a, b) else b
