"""
Oracle adapters.

An oracle is an external scoring function: it takes the 9-element
perspective feature vector of a board and returns 9 per-cell scores.
OracleAgent turns any oracle into a player.
"""

from typing import Callable, Optional, Protocol, Sequence

import numpy as np
import torch


class Oracle(Protocol):
    """Scoring capability consumed by OracleAgent."""

    def reset_state(self) -> None:
        ...

    def activate(self, features: np.ndarray) -> Sequence[float]:
        ...


class FunctionOracle:
    """Stateless oracle backed by a plain callable."""

    def __init__(self, fn: Callable[[np.ndarray], Sequence[float]]):
        self.fn = fn

    def reset_state(self) -> None:
        pass

    def activate(self, features: np.ndarray) -> Sequence[float]:
        return self.fn(features)


class TorchOracle:
    """
    Oracle backed by a torch module mapping [B, 9] features to [B, 9] scores.

    The module is assumed to be feed-forward, so reset_state() has nothing
    to clear.
    """

    def __init__(self, model: torch.nn.Module, device: Optional[torch.device] = None):
        self.device = device or torch.device("cpu")
        self.model = model.to(self.device)
        self.model.eval()

    def reset_state(self) -> None:
        pass

    @torch.inference_mode()
    def activate(self, features: np.ndarray) -> np.ndarray:
        x = torch.as_tensor(features, dtype=torch.float32, device=self.device).unsqueeze(0)
        scores = self.model(x).squeeze(0)
        return scores.detach().cpu().numpy()
