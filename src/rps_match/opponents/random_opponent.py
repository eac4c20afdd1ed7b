"""Easy tier: uniformly random legal move, ignores history."""
from __future__ import annotations

from ..match_config import Difficulty
from .base import ComputerOpponent


class RandomOpponent(ComputerOpponent):
    name = "Random"
    difficulty = Difficulty.EASY

    def choose(self, ruleset, recent_human_moves, human_move):
        return self.random_move(ruleset)
