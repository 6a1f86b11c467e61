"""
Bots module - AI move selection.

Provides:
- MovePolicy: Interface for move selection
- GreedyPolicy: One-ply opponent-squeezing heuristic
- MinimaxPolicy: Alpha-beta search with memoization
- DnCPolicy: Instant-win check plus MRV board completion
- StrategyDispatcher: Routes a tag to a policy and commits the move
"""

from .policy import MovePolicy, BotDecision
from .evaluator import HeuristicEvaluator, EvaluationWeights
from .greedy import GreedyPolicy
from .minimax import MinimaxPolicy, SearchResult, memo_key, WIN_SCORE, LOSE_SCORE
from .dnc import DnCPolicy
from .dispatcher import StrategyDispatcher, POLICIES, create_policy, get_ai_move

__all__ = [
    "MovePolicy",
    "BotDecision",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "GreedyPolicy",
    "MinimaxPolicy",
    "SearchResult",
    "memo_key",
    "WIN_SCORE",
    "LOSE_SCORE",
    "DnCPolicy",
    "StrategyDispatcher",
    "POLICIES",
    "create_policy",
    "get_ai_move",
]
