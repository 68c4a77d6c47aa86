from __future__ import annotations
import re
from dataclasses import dataclass
from typing import FrozenSet, List, Tuple
from .datatypes import Token

CANDIDATE_TAGS = frozenset({"NNG", "NNP", "VV", "VA"})  # common/proper nouns, verbs, adjectives

STOP_TOKENS = frozenset({
    # light verbs that co-occur with everything
    ("있", "VV"),
    ("하", "VV"),
    ("되", "VV"),
    ("없", "VV"),
    ("보", "VV"),
})

_ITEM_RE = re.compile(r"\S+")

@dataclass(frozen=True)
class CandidateFilter:
    tags: FrozenSet[str] = CANDIDATE_TAGS
    stop_tokens: FrozenSet[Tuple[str, str]] = STOP_TOKENS
    min_length: int = 2

    def is_stop_token(self, token: Token) -> bool:
        return (token.surface, token.tag) in self.stop_tokens

    def is_candidate(self, token: Token) -> bool:
        if token.tag not in self.tags:
            return False
        if len(token.surface) < self.min_length:
            return False
        return not self.is_stop_token(token)

DEFAULT_FILTER = CandidateFilter()

def is_candidate(token: Token, cfg: CandidateFilter = DEFAULT_FILTER) -> bool:
    return cfg.is_candidate(token)

def parse_tagged_text(text: str) -> List[Token]:
    """
    Parse tagger output written as whitespace separated ``surface/TAG`` items,
    e.g. ``"나무/NNG 를/JKO 심/VV"``. The last '/' splits surface from tag so
    surfaces may contain slashes themselves.
    """
    tokens: List[Token] = []
    for m in _ITEM_RE.finditer(text):
        item = m.group(0)
        surface, sep, tag = item.rpartition("/")
        if not sep or not surface or not tag:
            raise ValueError(f"Malformed tagged item: {item!r} (expected surface/TAG)")
        tokens.append(Token(surface=surface, tag=tag))
    return tokens
