from __future__ import annotations
import logging
import math
from typing import List, Optional, Sequence

from .datatypes import Keyword, NodeWeight, Token
from .preprocessing import CandidateFilter, DEFAULT_FILTER
from .graphing import Graph, build_graph, build_pairs
from .scoring import RankConfig, rank

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 5

def sort_keywords(scores: NodeWeight, num_keywords: int) -> List[Keyword]:
    if num_keywords <= 0:
        return []
    # descending score, ties by surface; nan goes last
    ordered = sorted(
        scores.items(),
        key=lambda kv: (math.isnan(kv[1]), -kv[1] if not math.isnan(kv[1]) else 0.0, kv[0]),
    )
    return [Keyword(surface, score) for surface, score in ordered[:num_keywords]]

class TextRank:
    """
    Keyword extraction over a tagged token stream:
    candidate filter -> windowed co-occurrence pairs -> graph -> rank -> top N.
    """

    def __init__(self,
                 window_size: int = DEFAULT_WINDOW,
                 candidate_filter: Optional[CandidateFilter] = None,
                 rank_config: Optional[RankConfig] = None):
        if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
            raise ValueError(f"window_size must be a positive int, got {window_size!r}")
        self.window_size = window_size
        self.candidate_filter = candidate_filter or DEFAULT_FILTER
        self.rank_config = rank_config or RankConfig()

    def build_graph(self, tokens: Sequence[Token]) -> Graph:
        pairs = build_pairs(tokens, self.window_size, self.candidate_filter)
        return build_graph(pairs)

    def rank(self, graph: Graph) -> NodeWeight:
        cfg = self.rank_config
        return rank(graph, damping=cfg.damping, min_diff=cfg.min_diff, max_steps=cfg.max_steps)

    def extract_keywords(self, tokens: Sequence[Token], num_keywords: int) -> List[Keyword]:
        graph = self.build_graph(tokens)
        if len(graph) == 0:
            logger.info(f"No co-occurring candidates among {len(tokens)} tokens")
            return []
        keywords = sort_keywords(self.rank(graph), num_keywords)
        logger.info(f"Extracted {len(keywords)} keywords from {len(graph)} candidate nodes")
        return keywords

def extract_keywords(tokens: Sequence[Token], num_keywords: int, window_size: int = DEFAULT_WINDOW) -> List[Keyword]:
    return TextRank(window_size=window_size).extract_keywords(tokens, num_keywords)
