from __future__ import annotations
import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from .datatypes import Edge, PairKey, Token
from .preprocessing import CandidateFilter, DEFAULT_FILTER

logger = logging.getLogger(__name__)

def _pair_key(a: str, b: str) -> PairKey:
    return (a, b) if a <= b else (b, a)

class PairCount:
    """Co-occurrence counts keyed by unordered surface pairs."""

    def __init__(self) -> None:
        self._counts: Dict[PairKey, float] = {}

    def get(self, a: str, b: str) -> Optional[float]:
        return self._counts.get(_pair_key(a, b))

    def set(self, a: str, b: str, value: float) -> None:
        self._counts[_pair_key(a, b)] = value

    def increment(self, a: str, b: str, amount: float = 1.0) -> float:
        key = _pair_key(a, b)
        value = self._counts.get(key, 0.0) + amount
        self._counts[key] = value
        return value

    def items(self) -> List[Tuple[PairKey, float]]:
        # insertion order
        return list(self._counts.items())

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, pair: Tuple[str, str]) -> bool:
        return _pair_key(*pair) in self._counts

def build_pairs(tokens: Sequence[Token], window_size: int, cfg: Optional[CandidateFilter] = None) -> PairCount:
    cfg = cfg or DEFAULT_FILTER
    pairs = PairCount()
    n = len(tokens)
    # precompute once, every token is tested up to window_size-1 times
    candidate = [cfg.is_candidate(t) for t in tokens]
    for i in range(n):
        if not candidate[i]:
            continue
        for j in range(i + 1, min(i + window_size, n)):
            # a filtered token does not close the window
            if not candidate[j]:
                continue
            a, b = tokens[i].surface, tokens[j].surface
            if a == b:
                continue
            pairs.increment(a, b)
    logger.debug(f"Counted {len(pairs)} co-occurrence pairs from {n} tokens (window={window_size})")
    return pairs

class Graph:
    """
    Undirected weighted adjacency store. Every edge is kept once per
    direction: node -> [Edge(node, neighbor, weight), ...].
    """

    def __init__(self) -> None:
        self.adjacency: Dict[str, List[Edge]] = {}

    def add_edge(self, start: str, end: str, weight: float) -> None:
        self.adjacency.setdefault(start, []).append(Edge(start=start, end=end, weight=weight))
        self.adjacency.setdefault(end, []).append(Edge(start=end, end=start, weight=weight))

    def add_weight(self, start: str, end: str, weight: float) -> None:
        """Like add_edge, but grows an existing start-end edge instead of duplicating it."""
        if start == end:
            # a loop sits twice in its own list, one entry per direction
            loops = [e for e in self.adjacency.get(start, ()) if e.end == start][:2]
            if not loops:
                self.add_edge(start, end, weight)
            for e in loops:
                e.weight += weight
            return
        forward = self._find(start, end)
        if forward is None:
            self.add_edge(start, end, weight)
            return
        forward.weight += weight
        self._find(end, start).weight += weight

    def _find(self, start: str, end: str) -> Optional[Edge]:
        for e in self.adjacency.get(start, ()):
            if e.end == end:
                return e
        return None

    def nodes(self) -> List[str]:
        return list(self.adjacency)

    def neighbors(self, node: str) -> List[Edge]:
        return self.adjacency.get(node, [])

    def out_weight_sum(self, node: str) -> float:
        return sum((e.weight for e in self.neighbors(node)), 0.0)

    def edges(self) -> Iterator[Edge]:
        # each undirected edge once, from its lexicographically smaller end
        for node, out_edges in self.adjacency.items():
            for e in out_edges:
                if e.start < e.end:
                    yield e

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(self.adjacency)
        for e in self.edges():
            if G.has_edge(e.start, e.end):
                G[e.start][e.end]["weight"] += e.weight
            else:
                G.add_edge(e.start, e.end, weight=e.weight)
        return G

    def __len__(self) -> int:
        return len(self.adjacency)

    def __contains__(self, node: str) -> bool:
        return node in self.adjacency

def build_graph(pairs: PairCount) -> Graph:
    graph = Graph()
    for (a, b), count in pairs.items():
        if count:
            graph.add_edge(a, b, count)
    logger.debug(f"Built graph with {len(graph)} nodes from {len(pairs)} pairs")
    return graph
