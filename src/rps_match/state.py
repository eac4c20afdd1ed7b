"""
Match state and its persisted form.

- RoundRecord: one resolved round, never mutated after creation.
- MatchState: config, next round index, tallies, ordered history and the
  human's recent moves (ring buffer of RECENT_CAPACITY, oldest evicted first).
- round_index is the number of the next round to play (len(history) + 1 between rounds),
  unlike a played-rounds counter; the last record always carries round == len(history).
- to_dict()/from_dict() and to_json()/from_json() round-trip every field; loading
  checks shape and invariants and raises MalformedPersistedState on any failure.

"""
from __future__ import annotations
import json
from collections import deque
from dataclasses import dataclass, field

from .errors import MalformedPersistedState
from .match_config import MatchConfig
from .moves import Move
from .rules import RoundOutcome, is_legal, resolve

RECENT_CAPACITY = 12


def _recent_buffer(moves=()) -> deque:
    return deque(moves, maxlen=RECENT_CAPACITY)


@dataclass(frozen=True)
class RoundRecord:
    round: int
    move1: Move
    move2: Move
    outcome: RoundOutcome

    def to_dict(self) -> dict:
        return {
            "round": self.round,
            "p1_move": self.move1.value,
            "p2_move": self.move2.value,
            "winner": self.outcome.value,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "RoundRecord":
        return cls(
            round=d["round"],
            move1=Move(d["p1_move"]),
            move2=Move(d["p2_move"]),
            outcome=RoundOutcome(d["winner"]),
        )


@dataclass
class MatchState:
    config: MatchConfig
    round_index: int = 1
    p1_round_wins: int = 0
    p2_round_wins: int = 0
    history: list[RoundRecord] = field(default_factory=list)
    human_recent: deque = field(default_factory=_recent_buffer)

    @property
    def tie_count(self) -> int:
        return sum(1 for r in self.history if r.outcome == RoundOutcome.TIE)

    def record_human_move(self, mv: Move) -> None:
        self.human_recent.append(mv)

    def clear(self) -> None:
        self.round_index = 1
        self.p1_round_wins = 0
        self.p2_round_wins = 0
        self.history.clear()
        self.human_recent.clear()

    # ---------------- Serialization -----------------
    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "round_index": self.round_index,
            "p1_round_wins": self.p1_round_wins,
            "p2_round_wins": self.p2_round_wins,
            "history": [r.to_dict() for r in self.history],
            "human_recent": [m.value for m in self.human_recent],
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, d) -> "MatchState":
        if not isinstance(d, dict):
            raise MalformedPersistedState(f"expected an object, got {type(d).__name__}")
        try:
            recent = d["human_recent"]
            history = d["history"]
            if not isinstance(recent, list) or not isinstance(history, list):
                raise TypeError("history and human_recent must be lists")
            state = cls(
                config=MatchConfig.from_dict(d["config"]),
                round_index=d["round_index"],
                p1_round_wins=d["p1_round_wins"],
                p2_round_wins=d["p2_round_wins"],
                history=[RoundRecord.from_dict(r) for r in history],
                human_recent=_recent_buffer(Move(m) for m in recent),
            )
            if len(recent) > RECENT_CAPACITY:
                raise ValueError(f"human_recent holds {len(recent)} moves (capacity {RECENT_CAPACITY})")
        except MalformedPersistedState:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedPersistedState(f"bad saved match: {e}") from e
        state.validate()
        return state

    @classmethod
    def from_json(cls, text: str) -> "MatchState":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise MalformedPersistedState(f"saved match is not valid JSON: {e}") from e
        return cls.from_dict(data)

    def validate(self) -> None:
        """Check the invariants a consistent state holds; raise MalformedPersistedState otherwise."""
        for name in ("round_index", "p1_round_wins", "p2_round_wins"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise MalformedPersistedState(f"{name} must be a non-negative integer, got {v!r}")
        n = len(self.history)
        if self.round_index != n + 1:
            raise MalformedPersistedState(f"round_index {self.round_index} does not follow {n} recorded rounds")
        ruleset = self.config.ruleset
        p1 = p2 = 0
        for i, rec in enumerate(self.history, start=1):
            if isinstance(rec.round, bool) or not isinstance(rec.round, int) or rec.round != i:
                raise MalformedPersistedState(f"history entry {i} is numbered {rec.round!r}")
            if not (is_legal(ruleset, rec.move1) and is_legal(ruleset, rec.move2)):
                raise MalformedPersistedState(f"round {i} uses a move outside the {ruleset.value} ruleset")
            if rec.outcome != resolve(ruleset, rec.move1, rec.move2):
                raise MalformedPersistedState(f"round {i} outcome {rec.outcome.value} contradicts its moves")
            p1 += rec.outcome == RoundOutcome.PLAYER1
            p2 += rec.outcome == RoundOutcome.PLAYER2
        if (p1, p2) != (self.p1_round_wins, self.p2_round_wins):
            raise MalformedPersistedState(
                f"tallies {self.p1_round_wins}-{self.p2_round_wins} disagree with history {p1}-{p2}")
        if any(not is_legal(ruleset, m) for m in self.human_recent):
            raise MalformedPersistedState(f"human_recent holds a move outside the {ruleset.value} ruleset")
