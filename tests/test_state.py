import json
import random
import unittest

from rps_match import (BestOfN, Difficulty, MalformedPersistedState, Match, MatchConfig, MatchPhase, MatchState,
                       Move, Ruleset, SingleRound)


def seven_round_match() -> Match:
    cfg = MatchConfig.single_player("Ana", Ruleset.EXTENDED, BestOfN(99), Difficulty.NORMAL)
    m = Match(cfg, rng=random.Random(5))
    for mv in (Move.ROCK, Move.SPOCK, Move.LIZARD, Move.ROCK, Move.PAPER, Move.SCISSORS, Move.ROCK):
        m.play_computer_round(mv)
    return m


class PersistenceTests(unittest.TestCase):
    def test_round_trip_dict(self):
        st = seven_round_match().state
        self.assertEqual(len(st.history), 7)
        restored = MatchState.from_dict(st.to_dict())
        self.assertEqual(restored, st)
        self.assertEqual(restored.history, st.history)
        self.assertEqual(list(restored.human_recent), list(st.human_recent))
        self.assertEqual(restored.human_recent.maxlen, 12)

    def test_round_trip_json(self):
        st = seven_round_match().state
        restored = MatchState.from_json(st.to_json())
        self.assertEqual(restored, st)
        self.assertEqual(restored.to_dict(), st.to_dict())

    def test_serialized_shape(self):
        d = seven_round_match().state.to_dict()
        self.assertEqual(d["config"]["format"], {"BestOfN": 99})
        self.assertEqual(d["config"]["difficulty"], "Normal")
        self.assertEqual(d["round_index"], 8)
        self.assertEqual(d["history"][0]["p1_move"], "Rock")
        json.dumps(d)

    def test_resume_continues_match(self):
        m = seven_round_match()
        resumed = Match.resume(json.loads(m.state.to_json()), rng=random.Random(1))
        self.assertEqual(resumed.phase, MatchPhase.AWAITING_ROUND)
        resumed.play_computer_round(Move.PAPER)
        self.assertEqual(resumed.state.history[-1].round, 8)
        self.assertEqual(resumed.state.round_index, 9)

    def test_resume_of_finished_match_is_complete(self):
        cfg = MatchConfig.multiplayer("Ana", "Ben", Ruleset.CLASSIC, SingleRound())
        m = Match(cfg)
        m.advance_round(Move.ROCK, Move.ROCK)
        self.assertEqual(Match.resume(m.state.to_dict()).phase, MatchPhase.MATCH_COMPLETE)


class MalformedStateTests(unittest.TestCase):
    def setUp(self):
        self.good = seven_round_match().state.to_dict()

    def assertMalformed(self, data):
        with self.assertRaises(MalformedPersistedState):
            MatchState.from_dict(data)

    def test_not_an_object(self):
        self.assertMalformed([1, 2, 3])
        with self.assertRaises(MalformedPersistedState):
            MatchState.from_json("{not json")

    def test_missing_key(self):
        del self.good["history"]
        self.assertMalformed(self.good)

    def test_unknown_move(self):
        self.good["history"][0]["p1_move"] = "Bomb"
        self.assertMalformed(self.good)

    def test_tallies_disagree(self):
        self.good["p1_round_wins"] += 1
        self.assertMalformed(self.good)

    def test_record_round_must_be_int(self):
        for bad in (True, 1.0, "1"):
            self.good["history"][0]["round"] = bad
            self.assertMalformed(self.good)

    def test_failed_resume_is_logged(self):
        with self.assertLogs("Match", level="WARNING") as logs:
            with self.assertRaises(MalformedPersistedState):
                Match.resume({"bad": 1})
        self.assertIn("Failed to load saved match", logs.output[0])

    def test_round_index_mismatch(self):
        self.good["round_index"] = 3
        self.assertMalformed(self.good)

    def test_outcome_contradicts_moves(self):
        rec = self.good["history"][0]
        rec["winner"] = "Tie" if rec["p1_move"] != rec["p2_move"] else "Player1"
        self.assertMalformed(self.good)

    def test_recent_over_capacity(self):
        self.good["human_recent"] = ["Rock"] * 13
        self.assertMalformed(self.good)

    def test_extended_move_under_classic(self):
        self.good["config"]["ruleset"] = "Classic"
        self.assertMalformed(self.good)

    def test_even_best_of(self):
        self.good["config"]["format"] = {"BestOfN": 4}
        self.assertMalformed(self.good)

    def test_difficulty_without_single_player(self):
        self.good["config"]["mode"] = "Multiplayer"
        self.assertMalformed(self.good)


if __name__ == "__main__":
    unittest.main()
