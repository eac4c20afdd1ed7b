"""
Normal tier: mostly random, sometimes counters the move just played.

- With probability RANDOM_CHANCE behaves like the Easy tier.
- Otherwise returns a best counter to human_move.

"""
from __future__ import annotations

from ..match_config import Difficulty
from .base import ComputerOpponent

RANDOM_CHANCE = 0.65


class CounterOpponent(ComputerOpponent):
    name = "Counter"
    difficulty = Difficulty.NORMAL

    def choose(self, ruleset, recent_human_moves, human_move):
        if self.rng.random() < RANDOM_CHANCE:
            return self.random_move(ruleset)
        mv = self.best_counter(ruleset, human_move)
        self.log.debug("Countering %s with %s", human_move.label, mv.label)
        return mv
