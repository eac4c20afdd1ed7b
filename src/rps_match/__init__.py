"""
Rock-Paper-Scissors(-Lizard-Spock) match engine.

Components:
- rules: move resolution for the Classic and Extended rulesets
- opponents: computer opponent tiers (Easy/Normal/Hard) with an injectable random source
- match: round/match state machine, completion rules, rematch and result surface
- state/stats: persisted shapes for saved matches and per-player statistics
- match_config/config: per-match configuration and process-wide settings
"""
from .errors import (InvalidFormatParameter, InvalidMatchConfig, InvalidMove, MalformedPersistedState,
                     MatchFinished, RpsMatchError)
from .match import Match, MatchPhase, MatchResult
from .match_config import BestOfN, Difficulty, FirstToK, MatchConfig, Mode, SingleRound
from .moves import Move, Ruleset, parse_move
from .rules import RoundOutcome, legal_moves, resolve
from .state import MatchState, RoundRecord
