"""
Computer opponent interface.

Each difficulty tier implements choose(ruleset, recent_human_moves, human_move).
The caller appends human_move to the recent buffer before calling choose().
Randomness comes from an injected random.Random so tests can seed it.
"""
from __future__ import annotations

import logging
import random
from typing import Sequence

from ..moves import Move, Ruleset, moves_for
from ..rules import counters_to


class ComputerOpponent:
    """Base class for the difficulty tiers."""

    name: str = "Computer"
    difficulty = None

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.log = logging.getLogger("Opponent")

    def choose(self, ruleset: Ruleset, recent_human_moves: Sequence[Move], human_move: Move) -> Move:
        raise NotImplementedError

    # -- shared helpers ----------------------------------------------------
    def random_move(self, ruleset: Ruleset) -> Move:
        return self.rng.choice(moves_for(ruleset))

    def best_counter(self, ruleset: Ruleset, target: Move) -> Move:
        """Uniform pick among moves that beat target; target itself if nothing does."""
        candidates = counters_to(ruleset, target)
        if not candidates:
            return target
        return self.rng.choice(candidates)
