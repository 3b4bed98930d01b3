"""
Scoring harness.

Plays an oracle against the built-in agents from both sides and folds the
results into one fitness number for an external policy search.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from tqdm.auto import trange

from .agents import Agent, HeuristicAgent, OracleAgent, RandomAgent
from .game import Outcome, play_until_win
from .oracle import Oracle

logger = logging.getLogger(__name__)


@dataclass
class ScoringConfig:
    """Scoring configuration."""

    # Games per opponent per side
    games_per_side: int = 10

    # Points per game, from the oracle's side
    win_points: float = 10.0
    draw_points: float = 5.0
    loss_points: float = 0.0

    # Fitness at which the search can stop
    stop_fitness: float = 150.0

    # Random opponent seed
    seed: Optional[int] = 0

    # Show a progress bar per matchup
    progress: bool = False


def eval_matchup(
    player_x: Agent,
    player_o: Agent,
    games: int = 100,
    progress: bool = False,
) -> Dict[str, float]:
    """
    Play repeated games between two agents.

    Returns:
        Dict with 'games', 'x_w', 'draw', 'o_w' (rates)
    """
    counts = {Outcome.X_WINS: 0, Outcome.DRAW: 0, Outcome.O_WINS: 0}
    for _ in trange(games, disable=not progress, leave=False):
        counts[play_until_win(player_x, player_o)] += 1

    total = max(1, games)
    return {
        "games": games,
        "x_w": counts[Outcome.X_WINS] / total,
        "draw": counts[Outcome.DRAW] / total,
        "o_w": counts[Outcome.O_WINS] / total,
    }


def _points(outcome: Outcome, oracle_is_x: bool, config: ScoringConfig) -> float:
    if outcome == Outcome.DRAW:
        return config.draw_points
    won = (outcome == Outcome.X_WINS) == oracle_is_x
    return config.win_points if won else config.loss_points


def score_oracle(oracle: Oracle, config: Optional[ScoringConfig] = None) -> float:
    """
    Compute the fitness of an oracle.

    The oracle plays config.games_per_side games as X and as O against a
    random agent and against the heuristic agent. Higher is better; the
    maximum is 4 * games_per_side * win_points.
    """
    config = config or ScoringConfig()
    if config.games_per_side < 1:
        raise ValueError(f"games_per_side must be >= 1, got {config.games_per_side}")

    as_x = OracleAgent(oracle, is_player_x=True)
    as_o = OracleAgent(oracle, is_player_x=False)
    opponents: List[Tuple[str, Agent]] = [
        ("random", RandomAgent(config.seed)),
        ("heuristic", HeuristicAgent()),
    ]

    fitness = 0.0
    for name, opponent in opponents:
        for oracle_is_x in (True, False):
            player_x, player_o = (as_x, opponent) if oracle_is_x else (opponent, as_o)
            subtotal = 0.0
            for _ in trange(config.games_per_side, disable=not config.progress, leave=False,
                            desc=f"{name} as {'X' if oracle_is_x else 'O'}"):
                outcome = play_until_win(player_x, player_o)
                subtotal += _points(outcome, oracle_is_x, config)
            logger.debug("vs %s as %s: %.1f", name, "X" if oracle_is_x else "O", subtotal)
            fitness += subtotal

    return fitness


class FitnessEvaluator:
    """
    Fitness function for an external search loop.

    Counts evaluations and latches stop_condition_satisfied once any
    evaluated oracle reaches config.stop_fitness.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.evaluation_count = 0
        self.stop_condition_satisfied = False

    def evaluate(self, oracle: Oracle) -> float:
        fitness = score_oracle(oracle, self.config)
        self.evaluation_count += 1
        if fitness >= self.config.stop_fitness:
            self.stop_condition_satisfied = True
        logger.info("Evaluation %d: fitness %.1f", self.evaluation_count, fitness)
        return fitness

    __call__ = evaluate

    def reset(self):
        self.evaluation_count = 0
        self.stop_condition_satisfied = False
