"""
Match state machine and result surface.

- Match owns one MatchState exclusively and drives it round by round:
  AwaitingRound -> RoundResolved -> (AwaitingRound | MatchComplete).
- advance_round(move1, move2): validates, resolves via the rule engine, updates tallies/history.
- play_computer_round(human_move): single-player helper that records the human move in the
  recent buffer, asks the opponent tier for a reply, then advances.
- check_match_winner(): applies the format's completion rule.
- reset_for_rematch()/change_settings(): fresh tallies for "play again" flows.
- match_result(): arguments for the external scoreboard merge.

No I/O happens here; menus, prompts and save files belong to the caller.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, replace
from enum import Enum

from .errors import InvalidMatchConfig, InvalidMove, MalformedPersistedState, MatchFinished
from .match_config import BestOfN, FirstToK, MatchConfig, SingleRound
from .moves import Move
from .opponents import ComputerOpponent, create_opponent
from .rules import RoundOutcome, is_legal, resolve
from .state import MatchState, RoundRecord


class MatchPhase(Enum):
    AWAITING_ROUND = "AwaitingRound"
    ROUND_RESOLVED = "RoundResolved"
    MATCH_COMPLETE = "MatchComplete"


@dataclass(frozen=True)
class MatchResult:
    """What the scoreboard merge needs once a match is complete."""
    player1: str
    player2: str
    winner: str | None
    p1_round_wins: int
    p2_round_wins: int


class Match:
    def __init__(self, config: MatchConfig | None = None, state: MatchState | None = None,
                 rng: random.Random | None = None, opponent: ComputerOpponent | None = None):
        if state is None:
            if config is None:
                raise InvalidMatchConfig("Match needs a config or a saved state")
            state = MatchState(config=config)
        elif config is not None and config != state.config:
            raise InvalidMatchConfig("config does not match the saved state's config")
        self.log = logging.getLogger("Match")
        self.rng = rng or random.Random()
        self.state = state
        self._opponent = opponent
        self._phase = MatchPhase.AWAITING_ROUND
        if self.check_match_winner() is not None:
            self._phase = MatchPhase.MATCH_COMPLETE

    @classmethod
    def resume(cls, data: dict, rng: random.Random | None = None) -> "Match":
        """Rebuild a match from MatchState.to_dict() output; raises MalformedPersistedState."""
        try:
            state = MatchState.from_dict(data)
        except MalformedPersistedState as e:
            logging.getLogger("Match").warning("Failed to load saved match: %s", e)
            raise
        return cls(state=state, rng=rng)

    @property
    def config(self) -> MatchConfig:
        return self.state.config

    @property
    def phase(self) -> MatchPhase:
        return self._phase

    @property
    def is_complete(self) -> bool:
        return self._phase == MatchPhase.MATCH_COMPLETE

    @property
    def opponent(self) -> ComputerOpponent | None:
        if not self.config.vs_computer:
            return None
        if self._opponent is None or self._opponent.difficulty != self.config.difficulty:
            self._opponent = create_opponent(self.config.difficulty, self.rng)
        return self._opponent

    # ---------------- Round progression -----------------
    def next_round(self) -> None:
        if self._phase == MatchPhase.MATCH_COMPLETE:
            raise MatchFinished("match is complete; start a new one or reset for a rematch")
        self._phase = MatchPhase.AWAITING_ROUND

    def validate_move(self, mv) -> Move:
        if not isinstance(mv, Move) or not is_legal(self.config.ruleset, mv):
            self.log.warning("Rejected move %r under %s ruleset", mv, self.config.ruleset.value)
            raise InvalidMove(mv, self.config.ruleset)
        return mv

    def advance_round(self, move1: Move, move2: Move) -> RoundOutcome:
        """Resolve one round and record it. Returns the round outcome."""
        self.next_round()
        self.validate_move(move1)
        self.validate_move(move2)
        st = self.state
        outcome = resolve(self.config.ruleset, move1, move2)
        if outcome == RoundOutcome.PLAYER1:
            st.p1_round_wins += 1
        elif outcome == RoundOutcome.PLAYER2:
            st.p2_round_wins += 1
        st.history.append(RoundRecord(st.round_index, move1, move2, outcome))
        self.log.debug("Round %d: %s vs %s -> %s (score %d-%d)", st.round_index, move1.label, move2.label,
                       outcome.value, st.p1_round_wins, st.p2_round_wins)
        st.round_index += 1
        winner = self.check_match_winner()
        if winner is None:
            self._phase = MatchPhase.ROUND_RESOLVED
        else:
            self._phase = MatchPhase.MATCH_COMPLETE
            self.log.info("Match finished winner=%s score=%d-%d rounds=%d", self._winner_name(winner) or "tie",
                          st.p1_round_wins, st.p2_round_wins, len(st.history))
        return outcome

    def computer_move(self, human_move: Move) -> Move:
        """Record human_move in the recent buffer and return the computer's reply."""
        if self.is_complete:
            raise MatchFinished("match is complete; start a new one or reset for a rematch")
        opp = self.opponent
        if opp is None:
            raise InvalidMatchConfig("computer moves only exist in single-player matches")
        self.validate_move(human_move)
        self.state.record_human_move(human_move)
        return opp.choose(self.config.ruleset, list(self.state.human_recent), human_move)

    def play_computer_round(self, human_move: Move) -> tuple[Move, RoundOutcome]:
        if self.is_complete:
            raise MatchFinished("match is complete; start a new one or reset for a rematch")
        reply = self.computer_move(human_move)
        return reply, self.advance_round(human_move, reply)

    # ---------------- Completion -----------------
    def check_match_winner(self) -> RoundOutcome | None:
        st = self.state
        fmt = self.config.format
        if isinstance(fmt, SingleRound):
            return st.history[-1].outcome if len(st.history) >= 1 else None
        if isinstance(fmt, BestOfN):
            needed = fmt.needed
        elif isinstance(fmt, FirstToK):
            needed = fmt.k
        else:
            raise InvalidMatchConfig(f"unknown match format {fmt!r}")
        # ties count for neither side, so a best-of-n may run past n rounds
        if st.p1_round_wins >= needed:
            return RoundOutcome.PLAYER1
        if st.p2_round_wins >= needed:
            return RoundOutcome.PLAYER2
        return None

    def _winner_name(self, outcome: RoundOutcome | None) -> str | None:
        if outcome == RoundOutcome.PLAYER1:
            return self.config.player1
        if outcome == RoundOutcome.PLAYER2:
            return self.config.player2
        return None

    def match_result(self) -> MatchResult | None:
        """Scoreboard merge arguments, or None while the match continues."""
        winner = self.check_match_winner()
        if winner is None:
            return None
        st = self.state
        return MatchResult(self.config.player1, self.config.player2, self._winner_name(winner),
                           st.p1_round_wins, st.p2_round_wins)

    # ---------------- Rematch / settings -----------------
    def reset_for_rematch(self, config: MatchConfig | None = None) -> None:
        """Start over with the same (or an updated) config; history and the recent buffer are cleared."""
        if config is not None:
            self.state.config = config
        self.state.clear()
        self._phase = MatchPhase.AWAITING_ROUND
        self.log.debug("Reset for rematch: %s vs %s, %s, %s", self.config.player1, self.config.player2,
                       self.config.ruleset.value, self.config.format.describe())

    def change_settings(self, **changes) -> MatchConfig:
        """Replace config fields (ruleset, format, difficulty, ...) and reset the match."""
        cfg = replace(self.config, **changes)
        self.reset_for_rematch(cfg)
        return cfg

    # ---------------- Export / metrics -----------------
    def export_structured_history(self) -> dict:
        """Viewer-friendly representation: config, score, and one entry per round."""
        cfg = self.config
        rounds = []
        for rec in self.state.history:
            rounds.append({
                "round": rec.round,
                "p1_move": rec.move1.label,
                "p2_move": rec.move2.label,
                "winner": self._winner_name(rec.outcome) or "tie",
            })
        winner = self.check_match_winner()
        return {
            "players": {"player1": cfg.player1, "player2": cfg.player2},
            "mode": cfg.mode.value,
            "ruleset": cfg.ruleset.value,
            "format": cfg.format.describe(),
            "difficulty": cfg.difficulty.value if cfg.difficulty else None,
            "score": {"player1": self.state.p1_round_wins, "player2": self.state.p2_round_wins},
            "phase": self._phase.value,
            "result": None if winner is None else (self._winner_name(winner) or "tie"),
            "rounds": rounds,
        }

    def metrics(self) -> dict:
        st = self.state
        winner = self.check_match_winner()
        return {
            "rounds_total": len(st.history),
            "p1_round_wins": st.p1_round_wins,
            "p2_round_wins": st.p2_round_wins,
            "ties": st.tie_count,
            "result": winner.value if winner else None,
            "winner": self._winner_name(winner),
            "format": self.config.format.describe(),
            "opponent": self.opponent.difficulty.value if self.config.vs_computer else None,
            "opponent_label": self.opponent.name if self.config.vs_computer else None,
        }
