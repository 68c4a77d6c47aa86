from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .datatypes import NodeWeight
from .graphing import Graph

logger = logging.getLogger(__name__)

DAMPING = 0.85
MIN_DIFF = 1e-5
MAX_STEPS = 10

def _check_params(damping: float, min_diff: float, max_steps: int) -> None:
    if not 0.0 <= damping <= 1.0:
        raise ValueError(f"damping must be within [0, 1], got {damping}")
    if min_diff < 0:
        raise ValueError(f"min_diff must be >= 0, got {min_diff}")
    if max_steps < 0:
        raise ValueError(f"max_steps must be >= 0, got {max_steps}")

@dataclass(frozen=True)
class RankConfig:
    damping: float = DAMPING
    min_diff: float = MIN_DIFF
    max_steps: int = MAX_STEPS

    def __post_init__(self) -> None:
        _check_params(self.damping, self.min_diff, self.max_steps)

@dataclass
class RankTrace:
    raw_weights: NodeWeight = field(default_factory=dict)  # before normalization
    step_sums: List[float] = field(default_factory=list)
    steps: int = 0
    converged: bool = False
    min_rank: float = 0.0
    max_rank: float = 0.0

def _normalize(weights: NodeWeight) -> Tuple[NodeWeight, float, float]:
    # both bounds start at 0, not at the first observed weight
    min_rank, max_rank = 0.0, 0.0
    for w in weights.values():
        if w < min_rank:
            min_rank = w
        if w > max_rank:
            max_rank = w
    values = np.fromiter(weights.values(), dtype=np.float64, count=len(weights))
    # a zero denominator yields nan/inf instead of raising
    with np.errstate(divide="ignore", invalid="ignore"):
        scaled = (values - min_rank / 10.0) / np.float64(max_rank - min_rank / 10.0)
    return {node: float(v) for node, v in zip(weights, scaled)}, min_rank, max_rank

def rank_with_trace(graph: Graph,
                    damping: float = DAMPING,
                    min_diff: float = MIN_DIFF,
                    max_steps: int = MAX_STEPS) -> Tuple[NodeWeight, RankTrace]:
    """
    Weighted TextRank over an undirected graph.

    WS(Vi) = (1-d) + d * sum_j( w_ji / sum_k(w_jk) * WS(Vj) )

    Nodes are updated in ascending identifier order and in place, so a node
    already sees the new weights of the nodes visited before it in the same
    step (Gauss-Seidel, not Jacobi). Scores are then rescaled with
    (w - min/10) / (max - min/10).

    Returns:
        (normalized scores, RankTrace with raw weights and iteration history)
    """
    _check_params(damping, min_diff, max_steps)
    nodes = graph.nodes()
    default_weight = 1.0 / (len(nodes) or 1.0)
    weights: NodeWeight = {node: default_weight for node in nodes}
    # float64 so a zero out-weight gives nan/inf rather than ZeroDivisionError
    out_sum = {node: np.float64(graph.out_weight_sum(node)) for node in nodes}
    order = sorted(nodes)

    trace = RankTrace()
    history = [0.0]  # sentinel
    for step in range(max_steps):
        with np.errstate(divide="ignore", invalid="ignore"):
            for node in order:
                s = 0.0
                for e in graph.neighbors(node):
                    s += e.weight / out_sum[e.end] * weights[e.end]
                weights[node] = float(1 - damping + damping * s)
        trace.steps += 1
        history.append(sum(weights.values()))

        # convergence lags one step behind the newest sum; step 0 tests the
        # sentinel against the first sum, so min_diff >= that sum stops after one step
        previous = history[step - 1] if step > 0 else history[-1]
        if abs(history[step] - previous) <= min_diff:
            trace.converged = True
            break

    trace.raw_weights = dict(weights)
    trace.step_sums = history[1:]
    scores, trace.min_rank, trace.max_rank = _normalize(weights)
    logger.debug(f"Ranked {len(nodes)} nodes in {trace.steps} steps "
                 f"(converged={trace.converged}, min={trace.min_rank:.6f}, max={trace.max_rank:.6f})")
    return scores, trace

def rank(graph: Graph,
         damping: float = DAMPING,
         min_diff: float = MIN_DIFF,
         max_steps: int = MAX_STEPS) -> NodeWeight:
    scores, _ = rank_with_trace(graph, damping=damping, min_diff=min_diff, max_steps=max_steps)
    return scores
