"""
Rule engine: maps a pair of moves plus a ruleset to a round outcome.

- Each ruleset's beats-relation is a tournament over its legal moves: for every
  pair of distinct moves exactly one beats the other.
- Extended agrees with Classic on Rock/Paper/Scissors.

"""
from __future__ import annotations
from enum import Enum

from .errors import InvalidMove
from .moves import Move, Ruleset, moves_for


class RoundOutcome(Enum):
    PLAYER1 = "Player1"
    PLAYER2 = "Player2"
    TIE = "Tie"


_CLASSIC_BEATS: dict[Move, frozenset[Move]] = {
    Move.ROCK: frozenset({Move.SCISSORS}),
    Move.PAPER: frozenset({Move.ROCK}),
    Move.SCISSORS: frozenset({Move.PAPER}),
}

_EXTENDED_BEATS: dict[Move, frozenset[Move]] = {
    Move.ROCK: frozenset({Move.SCISSORS, Move.LIZARD}),
    Move.PAPER: frozenset({Move.ROCK, Move.SPOCK}),
    Move.SCISSORS: frozenset({Move.PAPER, Move.LIZARD}),
    Move.LIZARD: frozenset({Move.SPOCK, Move.PAPER}),
    Move.SPOCK: frozenset({Move.SCISSORS, Move.ROCK}),
}

BEATS: dict[Ruleset, dict[Move, frozenset[Move]]] = {
    Ruleset.CLASSIC: _CLASSIC_BEATS,
    Ruleset.EXTENDED: _EXTENDED_BEATS,
}


def legal_moves(ruleset: Ruleset) -> frozenset[Move]:
    return frozenset(moves_for(ruleset))


def is_legal(ruleset: Ruleset, move) -> bool:
    return move in legal_moves(ruleset)


def require_legal(ruleset: Ruleset, *moves) -> None:
    """Raise InvalidMove for the first move not legal under ruleset."""
    for mv in moves:
        if not is_legal(ruleset, mv):
            raise InvalidMove(mv, ruleset)


def beats(ruleset: Ruleset, a: Move, b: Move) -> bool:
    return b in BEATS[ruleset].get(a, frozenset())


def counters_to(ruleset: Ruleset, target: Move) -> list[Move]:
    """All legal moves that beat target, in display order."""
    return [m for m in moves_for(ruleset) if beats(ruleset, m, target)]


def resolve(ruleset: Ruleset, move_a: Move, move_b: Move) -> RoundOutcome:
    """Resolve one round from player 1's (move_a) point of view."""
    require_legal(ruleset, move_a, move_b)
    if move_a == move_b:
        return RoundOutcome.TIE
    if beats(ruleset, move_a, move_b):
        return RoundOutcome.PLAYER1
    return RoundOutcome.PLAYER2
