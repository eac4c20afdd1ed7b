"""
Hard tier: predicts the human's most frequent recent move and counters it.

Ties between equally frequent moves go to the one seen first in the buffer.
With an empty buffer the prediction is the move just played.
"""
from __future__ import annotations

from collections import Counter
from typing import Sequence

from ..match_config import Difficulty
from ..moves import Move
from .base import ComputerOpponent


def most_common(moves: Sequence[Move]) -> Move | None:
    if not moves:
        return None
    return Counter(moves).most_common(1)[0][0]


class FrequencyOpponent(ComputerOpponent):
    name = "Frequency"
    difficulty = Difficulty.HARD

    def predict(self, recent_human_moves: Sequence[Move], human_move: Move) -> Move:
        predicted = most_common(recent_human_moves)
        return predicted if predicted is not None else human_move

    def choose(self, ruleset, recent_human_moves, human_move):
        predicted = self.predict(recent_human_moves, human_move)
        mv = self.best_counter(ruleset, predicted)
        self.log.debug("Predicted %s from %d recent moves; playing %s", predicted.label, len(recent_human_moves), mv.label)
        return mv
