"""Tests for query scoring and phrase boosting."""

from pdfsearch.chunkers import PageChunker
from pdfsearch.models import Index
from pdfsearch.search import build_index, expand_context, score_chunks

from conftest import LAW_REPORT_TEXT, make_index

PHRASE_TEXT = "\n".join(
    [
        "<<<PAGE:1>>>",
        "Heading",
        "This contains the exact phrase neutral citation in one place repeated "
        "neutral citation to lengthen the text.",
        "<<<PAGE:1>>>",
        "Other section",
        "This has the word neutral and also the word citation but not together anywhere "
        "in this section despite repetition of neutral and citation terms.",
    ]
)


class TestScoreChunks:
    """Tests for score_chunks()."""

    def test_scores_overlap_and_expands_context(self):
        index = build_index(PageChunker(max_len=60).chunk(LAW_REPORT_TEXT))
        results = score_chunks("authorised report", index)

        assert results
        top = results[0]
        assert "authorised version" in top.chunk.text
        ctx = expand_context(index, top.chunk.id, before=1, after=2, budget=500)
        assert "Law Report Series" in ctx.text
        assert "authorised version" in ctx.text
        assert ctx.page == 5

    def test_exact_phrase_ranks_first(self):
        index = build_index(PageChunker(max_len=100).chunk(PHRASE_TEXT))
        results = score_chunks("neutral citation", index)

        assert len(results) > 1
        assert "neutral citation" in results[0].chunk.text.lower()

    def test_phrase_boost_margin(self):
        index = make_index(["Neutral Citation rules", "citation neutral rules"])
        results = score_chunks("neutral citation", index, phrase_boost=2)

        by_id = {r.chunk.id: r.score for r in results}
        assert by_id[0] - by_id[1] == 2

    def test_presence_not_frequency(self):
        index = make_index(["neutral neutral neutral", "neutral"])
        results = score_chunks("neutral", index, phrase_boost=0)
        assert [r.score for r in results] == [1, 1]

    def test_sorted_by_score_then_id(self):
        index = make_index(["a b", "a b c", "c", "a b c", "b"])
        results = score_chunks("a b c", index, phrase_boost=0)

        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert [r.chunk.id for r in results] == [1, 3, 0, 2, 4]

    def test_phrase_only_keeps_literal_matches(self):
        index = make_index(["neutral citation here", "citation and neutral", "nothing"])
        results = score_chunks("neutral citation", index, phrase_only=True)
        assert [r.chunk.id for r in results] == [0]

    def test_phrase_only_ignored_for_short_query(self):
        index = make_index(["R v Smith", "Smith v R"])
        results = score_chunks("v", index, phrase_only=True)
        assert {r.chunk.id for r in results} == {0, 1}

    def test_phrase_boost_is_substring_based(self):
        # Two token hits plus the case-insensitive phrase boost
        index = make_index(["law report series", "other"])
        results = score_chunks("Report Series", index)
        assert results[0].chunk.id == 0
        assert results[0].score == 4

    def test_zero_scores_are_excluded(self):
        index = make_index(["alpha", "beta"])
        results = score_chunks("alpha", index)
        assert [r.chunk.id for r in results] == [0]

    def test_empty_query_and_empty_index(self):
        index = make_index(["alpha"])
        assert score_chunks("", index) == []
        assert score_chunks("   ", index) == []
        assert score_chunks("alpha", Index.empty()) == []

    def test_unknown_tokens(self):
        assert score_chunks("zebra", make_index(["alpha"])) == []
