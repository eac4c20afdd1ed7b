"""
Match configuration: who plays, under which ruleset, until when.

- MatchFormat variants (SingleRound, BestOfN, FirstToK) validate their count on construction,
  so an unvalidated number never reaches the state machine.
- MatchConfig is frozen; a settings change produces a new config (see Match.change_settings).
- to_dict()/from_dict() give the persisted shape, e.g. {"BestOfN": 5} or "SingleRound".

"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidFormatParameter, InvalidMatchConfig
from .moves import Ruleset


class Mode(Enum):
    SINGLE_PLAYER = "SinglePlayer"
    MULTIPLAYER = "Multiplayer"


class Difficulty(Enum):
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"


def _require_count(kind: str, value, odd: bool = False) -> None:
    # bool is an int subclass; True must not pass as a count of 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFormatParameter(f"{kind} count must be an integer, got {value!r}")
    if value < 1:
        raise InvalidFormatParameter(f"{kind} count must be >= 1, got {value}")
    if odd and value % 2 == 0:
        raise InvalidFormatParameter(f"{kind} count must be odd, got {value}")


@dataclass(frozen=True)
class SingleRound:
    def describe(self) -> str:
        return "Single round"

    def to_data(self):
        return "SingleRound"


@dataclass(frozen=True)
class BestOfN:
    n: int

    def __post_init__(self):
        _require_count("BestOfN", self.n, odd=True)

    @property
    def needed(self) -> int:
        """Round wins required for a strict majority of n."""
        return self.n // 2 + 1

    def describe(self) -> str:
        return f"Best of {self.n}"

    def to_data(self):
        return {"BestOfN": self.n}


@dataclass(frozen=True)
class FirstToK:
    k: int

    def __post_init__(self):
        _require_count("FirstToK", self.k)

    def describe(self) -> str:
        return f"First to {self.k} wins"

    def to_data(self):
        return {"FirstToK": self.k}


MatchFormat = Union[SingleRound, BestOfN, FirstToK]


def format_from_data(data) -> MatchFormat:
    """Inverse of MatchFormat.to_data(). Raises InvalidFormatParameter or ValueError."""
    if data == "SingleRound":
        return SingleRound()
    if isinstance(data, dict) and len(data) == 1:
        ((tag, count),) = data.items()
        if tag == "BestOfN":
            return BestOfN(count)
        if tag == "FirstToK":
            return FirstToK(count)
    raise ValueError(f"unknown match format: {data!r}")


@dataclass(frozen=True)
class MatchConfig:
    player1: str
    player2: str
    mode: Mode
    ruleset: Ruleset
    format: MatchFormat
    difficulty: Difficulty | None = None

    def __post_init__(self):
        if not isinstance(self.mode, Mode):
            raise InvalidMatchConfig(f"mode must be a Mode, got {self.mode!r}")
        if not isinstance(self.ruleset, Ruleset):
            raise InvalidMatchConfig(f"ruleset must be a Ruleset, got {self.ruleset!r}")
        if not isinstance(self.format, (SingleRound, BestOfN, FirstToK)):
            raise InvalidMatchConfig(f"format must be a MatchFormat, got {self.format!r}")
        for label, name in (("player1", self.player1), ("player2", self.player2)):
            if not isinstance(name, str) or not name.strip():
                raise InvalidMatchConfig(f"{label} name can't be empty")
        if self.mode == Mode.SINGLE_PLAYER:
            if not isinstance(self.difficulty, Difficulty):
                raise InvalidMatchConfig("single-player matches need a difficulty")
        else:
            if self.difficulty is not None:
                raise InvalidMatchConfig("difficulty only applies to single-player matches")
            if self.player1 == self.player2:
                raise InvalidMatchConfig("player names must differ in multiplayer")

    @classmethod
    def single_player(cls, player1: str, ruleset: Ruleset, format: MatchFormat,
                      difficulty: Difficulty, computer_name: str = "Computer") -> "MatchConfig":
        return cls(player1, computer_name, Mode.SINGLE_PLAYER, ruleset, format, difficulty)

    @classmethod
    def multiplayer(cls, player1: str, player2: str, ruleset: Ruleset, format: MatchFormat) -> "MatchConfig":
        return cls(player1, player2, Mode.MULTIPLAYER, ruleset, format, None)

    @property
    def vs_computer(self) -> bool:
        return self.mode == Mode.SINGLE_PLAYER

    def to_dict(self) -> dict:
        return {
            "player1": self.player1,
            "player2": self.player2,
            "mode": self.mode.value,
            "ruleset": self.ruleset.value,
            "format": self.format.to_data(),
            "difficulty": self.difficulty.value if self.difficulty else None,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "MatchConfig":
        """Rebuild a config; raises KeyError/ValueError/TypeError on bad input (wrapped by callers)."""
        diff = d.get("difficulty")
        return cls(
            player1=d["player1"],
            player2=d["player2"],
            mode=Mode(d["mode"]),
            ruleset=Ruleset(d["ruleset"]),
            format=format_from_data(d["format"]),
            difficulty=Difficulty(diff) if diff is not None else None,
        )
