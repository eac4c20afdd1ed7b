"""
Cumulative per-player statistics and the end-of-match merge rule.

- PlayerStats: matches_played, matches_won, rounds_won (+ derived win_rate).
- merge_match_result(): both players +1 played and + their round wins; only the winner +1 won.
- stats_to_dict()/stats_from_dict(): persisted shape {"players": {name: {...}}}.
Storage of the ledger itself is left to the caller.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Dict

from .errors import MalformedPersistedState


@dataclass
class PlayerStats:
    matches_played: int = 0
    matches_won: int = 0
    rounds_won: int = 0

    @property
    def win_rate(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.matches_won / self.matches_played


def merge_match_result(players: Dict[str, PlayerStats], result) -> None:
    """Apply a completed match (a MatchResult) to players in place."""
    s1 = players.setdefault(result.player1, PlayerStats())
    s2 = players.setdefault(result.player2, PlayerStats())
    s1.matches_played += 1
    s1.rounds_won += result.p1_round_wins
    s2.matches_played += 1
    s2.rounds_won += result.p2_round_wins
    if result.winner is not None and result.winner in players:
        players[result.winner].matches_won += 1


_SORT_KEYS = {
    "matches_won": lambda item: item[1].matches_won,
    "win_rate": lambda item: item[1].win_rate,
    "rounds_won": lambda item: item[1].rounds_won,
}


def ranked(players: Dict[str, PlayerStats], key: str = "matches_won") -> list[tuple[str, PlayerStats]]:
    """Players sorted best-first by one of matches_won / win_rate / rounds_won."""
    if key not in _SORT_KEYS:
        raise ValueError(f"unknown ranking key {key!r}; use one of {sorted(_SORT_KEYS)}")
    return sorted(players.items(), key=_SORT_KEYS[key], reverse=True)


def stats_to_dict(players: Dict[str, PlayerStats]) -> dict:
    return {"players": {name: asdict(st) for name, st in players.items()}}


def stats_from_dict(d) -> Dict[str, PlayerStats]:
    try:
        out: Dict[str, PlayerStats] = {}
        for name, row in d["players"].items():
            st = PlayerStats(**row)
            for v in (st.matches_played, st.matches_won, st.rounds_won):
                if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                    raise ValueError(f"bad counter {v!r} for {name!r}")
            out[name] = st
        return out
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedPersistedState(f"bad scoreboard: {e}") from e
