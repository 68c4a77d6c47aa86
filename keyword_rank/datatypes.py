from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, NamedTuple, Tuple

@dataclass(frozen=True)
class Token:
    surface: str
    tag: str  # part-of-speech tag from the upstream tagger

@dataclass
class Edge:
    start: str
    end: str
    weight: float  # co-occurrence count

class Keyword(NamedTuple):
    surface: str
    score: float

PairKey = Tuple[str, str]         # canonical (sorted) pair of surfaces
NodeWeight = Dict[str, float]     # node -> rank score
