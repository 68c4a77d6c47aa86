"""
End-to-end keyword extraction tests.
"""

import math

import pytest
from keyword_rank import (
    CandidateFilter,
    Keyword,
    RankConfig,
    TextRank,
    Token,
    extract_keywords,
    parse_tagged_text,
    sort_keywords,
)

SENTENCE = (
    "정원/NNG 에/JKB 나무/NNG 를/JKO 심었/VV 다/EF ./SF "
    "나무/NNG 아래/NNG 에/JKB 꽃잎/NNG 이/JKS 있/VV 다/EF ./SF "
    "꽃잎/NNG 과/JC 나무/NNG 가/JKS 정원/NNG 을/JKO 채우/VV 다/EF"
)


class TestTextRank:

    @pytest.fixture
    def extractor(self):
        return TextRank()

    @pytest.fixture
    def tokens(self):
        return parse_tagged_text(SENTENCE)

    def test_three_mutual_candidates(self, extractor):
        tokens = [Token("나무", "NNG"), Token("심다", "VV"), Token("꽃잎", "NNG")]
        keywords = extractor.extract_keywords(tokens, 2)
        assert len(keywords) == 2
        assert {k.surface for k in keywords} <= {"나무", "심다", "꽃잎"}
        # in-place updates leave the regular graph close to, not exactly, uniform
        assert keywords[0].score == pytest.approx(keywords[1].score, rel=1e-2)

    def test_single_candidate_gives_nothing(self, extractor):
        assert extractor.extract_keywords([Token("나무", "NNG")], 5) == []

    def test_no_candidates_gives_nothing(self, extractor):
        tokens = parse_tagged_text("를/JKO 에/JKB ./SF")
        assert extractor.extract_keywords(tokens, 5) == []

    def test_stop_token_never_returned(self):
        tokens = parse_tagged_text("나무/NNG 있/VV 정원/NNG")
        permissive = TextRank(candidate_filter=CandidateFilter(min_length=1))
        surfaces = [k.surface for k in permissive.extract_keywords(tokens, 10)]
        assert "있" not in surfaces
        assert sorted(surfaces) == ["나무", "정원"]

    def test_zero_keywords(self, extractor, tokens):
        assert extractor.extract_keywords(tokens, 0) == []

    def test_negative_keywords(self, extractor, tokens):
        assert extractor.extract_keywords(tokens, -3) == []

    def test_more_keywords_than_nodes(self, extractor, tokens):
        keywords = extractor.extract_keywords(tokens, 100)
        assert {k.surface for k in keywords} == {"정원", "나무", "심었", "아래", "꽃잎", "채우"}

    def test_sorted_descending(self, extractor, tokens):
        keywords = extractor.extract_keywords(tokens, 100)
        scores = [k.score for k in keywords]
        assert scores == sorted(scores, reverse=True)
        assert keywords[0].score == 1.0
        assert keywords[0].surface == "나무"

    def test_only_counted_tokens_returned(self, extractor, tokens):
        graph = extractor.build_graph(tokens)
        for keyword in extractor.extract_keywords(tokens, 100):
            assert keyword.surface in graph

    def test_window_size_changes_graph(self, tokens):
        narrow = TextRank(window_size=2).build_graph(tokens)
        wide = TextRank(window_size=8).build_graph(tokens)
        assert sum(1 for _ in narrow.edges()) < sum(1 for _ in wide.edges())

    def test_deterministic(self, extractor, tokens):
        assert extractor.extract_keywords(tokens, 4) == extractor.extract_keywords(tokens, 4)

    def test_rank_config_is_used(self, tokens):
        default = TextRank().extract_keywords(tokens, 100)
        one_step = TextRank(rank_config=RankConfig(max_steps=1)).extract_keywords(tokens, 100)
        assert dict(default) != dict(one_step)

    @pytest.mark.parametrize("window", [0, -1, 2.5, True, "5"])
    def test_invalid_window(self, window):
        with pytest.raises(ValueError, match="window_size"):
            TextRank(window_size=window)

    def test_module_function(self, tokens):
        assert extract_keywords(tokens, 3) == TextRank().extract_keywords(tokens, 3)
        assert extract_keywords(tokens, 3, window_size=2) == TextRank(window_size=2).extract_keywords(tokens, 3)


class TestSortKeywords:

    def test_ties_broken_by_surface(self):
        result = sort_keywords({"b": 0.5, "a": 0.5, "c": 1.0}, 3)
        assert result == [Keyword("c", 1.0), Keyword("a", 0.5), Keyword("b", 0.5)]

    def test_nan_sorts_last(self):
        result = sort_keywords({"a": float("nan"), "b": 0.2, "c": 0.1}, 3)
        assert [k.surface for k in result] == ["b", "c", "a"]
        assert math.isnan(result[-1].score)

    def test_truncates(self):
        assert len(sort_keywords({"a": 1.0, "b": 0.5}, 1)) == 1

    def test_keyword_is_tuple(self):
        surface, score = sort_keywords({"a": 1.0}, 1)[0]
        assert (surface, score) == ("a", 1.0)
