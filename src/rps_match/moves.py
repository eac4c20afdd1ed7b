"""
Moves and rulesets.

- Move: the five hand shapes; hashable so it can key frequency tables.
- Ruleset: Classic (3 moves) or Extended (adds Lizard and Spock).
- parse_move(): text → Move for input layers (full names or r/p/s/l/k).

"""
from __future__ import annotations
from enum import Enum


class Move(Enum):
    ROCK = "Rock"
    PAPER = "Paper"
    SCISSORS = "Scissors"
    LIZARD = "Lizard"
    SPOCK = "Spock"

    @property
    def label(self) -> str:
        return self.value


class Ruleset(Enum):
    CLASSIC = "Classic"
    EXTENDED = "Extended"


CLASSIC_MOVES = (Move.ROCK, Move.PAPER, Move.SCISSORS)
EXTENDED_MOVES = CLASSIC_MOVES + (Move.LIZARD, Move.SPOCK)

# 'k' is Spock; 's' is already taken by Scissors
_ALIASES = {
    "rock": Move.ROCK, "r": Move.ROCK,
    "paper": Move.PAPER, "p": Move.PAPER,
    "scissors": Move.SCISSORS, "s": Move.SCISSORS,
    "lizard": Move.LIZARD, "l": Move.LIZARD,
    "spock": Move.SPOCK, "k": Move.SPOCK,
}


def moves_for(ruleset: Ruleset) -> tuple[Move, ...]:
    """Legal moves in display order."""
    return EXTENDED_MOVES if ruleset == Ruleset.EXTENDED else CLASSIC_MOVES


def parse_move(text: str, ruleset: Ruleset) -> Move | None:
    """Parse user text into a Move legal under ruleset; None when unrecognized or illegal."""
    mv = _ALIASES.get((text or "").strip().lower())
    if mv is None or mv not in moves_for(ruleset):
        return None
    return mv


def accepted_inputs(ruleset: Ruleset) -> str:
    if ruleset == Ruleset.EXTENDED:
        return "rock / paper / scissors / lizard / spock  OR  r / p / s / l / k"
    return "rock / paper / scissors  OR  r / p / s"
