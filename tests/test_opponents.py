import random
import unittest
from unittest.mock import patch

from rps_match.match_config import Difficulty
from rps_match.moves import Move, Ruleset
from rps_match.opponents import CounterOpponent, FrequencyOpponent, RandomOpponent, choose_move, create_opponent
from rps_match.opponents.frequency_opponent import most_common
from rps_match.rules import counters_to, legal_moves


class OpponentPolicyTests(unittest.TestCase):
    def test_registry(self):
        self.assertIsInstance(create_opponent(Difficulty.EASY), RandomOpponent)
        self.assertIsInstance(create_opponent(Difficulty.NORMAL), CounterOpponent)
        self.assertIsInstance(create_opponent(Difficulty.HARD), FrequencyOpponent)

    def test_always_legal(self):
        rng = random.Random(7)
        for ruleset in Ruleset:
            legal = legal_moves(ruleset)
            for difficulty in Difficulty:
                for human in legal:
                    for _ in range(20):
                        mv = choose_move(ruleset, difficulty, [human], human, rng=rng)
                        self.assertIn(mv, legal)

    def test_easy_covers_move_set(self):
        opp = RandomOpponent(rng=random.Random(1))
        seen = {opp.choose(Ruleset.EXTENDED, [], Move.ROCK) for _ in range(200)}
        self.assertEqual(seen, set(Move))

    def test_seeded_rng_is_deterministic(self):
        a = [choose_move(Ruleset.EXTENDED, Difficulty.EASY, [], Move.ROCK, rng=random.Random(3)) for _ in range(5)]
        b = [choose_move(Ruleset.EXTENDED, Difficulty.EASY, [], Move.ROCK, rng=random.Random(3)) for _ in range(5)]
        self.assertEqual(a, b)

    def test_hard_counters_most_frequent(self):
        opp = FrequencyOpponent(rng=random.Random(0))
        recent = [Move.ROCK, Move.ROCK, Move.ROCK]
        self.assertEqual(opp.predict(recent, Move.SCISSORS), Move.ROCK)
        self.assertEqual(opp.choose(Ruleset.CLASSIC, recent, Move.ROCK), Move.PAPER)
        for _ in range(20):
            self.assertIn(opp.choose(Ruleset.EXTENDED, recent, Move.ROCK), counters_to(Ruleset.EXTENDED, Move.ROCK))

    def test_hard_empty_history_uses_just_played(self):
        opp = FrequencyOpponent(rng=random.Random(0))
        self.assertEqual(opp.predict([], Move.SCISSORS), Move.SCISSORS)
        self.assertEqual(opp.choose(Ruleset.CLASSIC, [], Move.SCISSORS), Move.ROCK)

    def test_most_common_prefers_majority(self):
        self.assertIsNone(most_common([]))
        self.assertEqual(most_common([Move.PAPER, Move.ROCK, Move.PAPER]), Move.PAPER)

    def test_normal_counters_when_roll_is_high(self):
        opp = CounterOpponent(rng=random.Random(0))
        with patch.object(opp.rng, "random", return_value=0.9):
            for _ in range(10):
                self.assertEqual(opp.choose(Ruleset.CLASSIC, [Move.ROCK], Move.SCISSORS), Move.ROCK)

    def test_normal_random_when_roll_is_low(self):
        opp = CounterOpponent(rng=random.Random(0))
        with patch.object(opp.rng, "random", return_value=0.1), \
                patch.object(opp, "random_move", return_value=Move.LIZARD) as rnd:
            self.assertEqual(opp.choose(Ruleset.EXTENDED, [Move.ROCK], Move.ROCK), Move.LIZARD)
        rnd.assert_called_once_with(Ruleset.EXTENDED)

    def test_best_counter_fallback(self):
        opp = RandomOpponent(rng=random.Random(0))
        with patch("rps_match.opponents.base.counters_to", return_value=[]):
            self.assertEqual(opp.best_counter(Ruleset.CLASSIC, Move.ROCK), Move.ROCK)


if __name__ == "__main__":
    unittest.main()
