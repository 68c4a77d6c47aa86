from .datatypes import Token, Edge, Keyword
from .preprocessing import CandidateFilter, CANDIDATE_TAGS, STOP_TOKENS, is_candidate, parse_tagged_text
from .graphing import PairCount, Graph, build_pairs, build_graph
from .scoring import RankConfig, RankTrace, rank, rank_with_trace
from .keywords import TextRank, extract_keywords, sort_keywords
