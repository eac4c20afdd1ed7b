"""
Error taxonomy for the match engine.

- InvalidMove: a move outside the active ruleset's legal set.
- InvalidMatchConfig / InvalidFormatParameter: rejected at configuration time.
- MalformedPersistedState: a saved state failed shape or invariant checks.
- MatchFinished: a round was submitted after the match completed.

"""
from __future__ import annotations


class RpsMatchError(Exception):
    """Base class for all match engine errors."""


class InvalidMove(RpsMatchError, ValueError):
    def __init__(self, move, ruleset):
        self.move = move
        self.ruleset = ruleset
        name = getattr(ruleset, "value", ruleset)
        super().__init__(f"{move!r} is not a legal move under the {name} ruleset")


class InvalidMatchConfig(RpsMatchError, ValueError):
    pass


class InvalidFormatParameter(InvalidMatchConfig):
    pass


class MalformedPersistedState(RpsMatchError, ValueError):
    pass


class MatchFinished(RpsMatchError, RuntimeError):
    pass
