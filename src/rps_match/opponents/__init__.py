from __future__ import annotations

import random
from typing import Dict, Sequence, Type

from ..match_config import Difficulty
from ..moves import Move, Ruleset
from .base import ComputerOpponent
from .counter_opponent import CounterOpponent
from .frequency_opponent import FrequencyOpponent
from .random_opponent import RandomOpponent

_OPPONENTS: Dict[Difficulty, Type[ComputerOpponent]] = {
    Difficulty.EASY: RandomOpponent,
    Difficulty.NORMAL: CounterOpponent,
    Difficulty.HARD: FrequencyOpponent,
}


def create_opponent(difficulty: Difficulty | None, rng: random.Random | None = None) -> ComputerOpponent:
    cls = _OPPONENTS.get(difficulty, RandomOpponent)
    return cls(rng=rng)


def choose_move(ruleset: Ruleset, difficulty: Difficulty, recent_human_moves: Sequence[Move],
                just_played_human_move: Move, rng: random.Random | None = None) -> Move:
    """One-shot policy call; recent_human_moves should already include just_played_human_move."""
    return create_opponent(difficulty, rng).choose(ruleset, recent_human_moves, just_played_human_move)
