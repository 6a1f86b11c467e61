"""
Session Module - Drives whole matches between strategies.

A match is ephemeral: it starts from an initialized state, alternates
AI moves until the game ends, and returns the move record. Nothing is
persisted.
"""

from .game_loop import GameLoop, LoopState, TurnResult, MatchResult

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
    "MatchResult",
]
