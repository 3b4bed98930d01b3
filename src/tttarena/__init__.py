"""
tttarena - TicTacToe agent arena.

Bit-packed board with make/unmake lookahead, random / heuristic /
oracle-backed agents, a game loop with forfeit-on-illegal-move, and a
scoring harness that rates an external oracle against the built-in agents.
"""

from .board import Board, WIN_MASKS
from .agents import Agent, RandomAgent, HeuristicAgent, OracleAgent
from .oracle import Oracle, FunctionOracle, TorchOracle
from .game import Outcome, GameResult, play_game, play_until_win
from .scoring import ScoringConfig, FitnessEvaluator, eval_matchup, score_oracle

__version__ = "0.1.0"
__all__ = [
    "Board",
    "WIN_MASKS",
    "Agent",
    "RandomAgent",
    "HeuristicAgent",
    "OracleAgent",
    "Oracle",
    "FunctionOracle",
    "TorchOracle",
    "Outcome",
    "GameResult",
    "play_game",
    "play_until_win",
    "ScoringConfig",
    "FitnessEvaluator",
    "eval_matchup",
    "score_oracle",
]
