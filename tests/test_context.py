"""Tests for context expansion and highlighting."""

import pytest

from pdfsearch.search import expand_context, highlight

from conftest import make_index


class TestExpandContext:
    """Tests for expand_context()."""

    def test_window_around_center(self):
        index = make_index([f"chunk {i}" for i in range(6)], pages=[1, 1, 2, 2, 3, 3])
        window = expand_context(index, 2, before=1, after=2, budget=1200)

        assert window.text == "chunk 1\n\nchunk 2\n\nchunk 3\n\nchunk 4"
        assert window.page == 2

    def test_window_clipped_at_edges(self):
        index = make_index(["a0", "a1", "a2"])
        assert expand_context(index, 0, before=3, after=0).text == "a0"
        assert expand_context(index, 2, before=0, after=5).text == "a2"

    def test_stops_at_budget(self):
        index = make_index(["x" * 10, "y" * 10, "z" * 10])
        window = expand_context(index, 0, before=0, after=2, budget=25)
        assert window.text == "x" * 10 + "\n\n" + "y" * 10

    @pytest.mark.parametrize("budget", [5, 11, 22, 23, 34, 40, 200])
    def test_never_exceeds_budget(self, budget):
        index = make_index(["x" * 10, "y" * 10, "z" * 10, "w" * 10])
        window = expand_context(index, 1, before=1, after=2, budget=budget)
        assert len(window.text) <= budget

    def test_oversized_first_chunk_gives_empty_window(self):
        index = make_index(["x" * 50, "short"], pages=[4, 5])
        window = expand_context(index, 1, before=1, after=0, budget=20)
        assert window.text == ""
        assert window.page == 5

    def test_page_falls_back_to_first_included(self):
        index = make_index(["intro", "middle", "end"], pages=[None, None, 7])
        window = expand_context(index, 1, before=1, after=1)
        assert window.page == 7


class TestHighlight:
    """Tests for highlight()."""

    def test_wraps_query_tokens(self):
        out = highlight("This rule explains medium neutral citation usage", "neutral citation")
        assert "[neutral]" in out
        assert "[citation]" in out

    def test_preserves_case_and_whole_words(self):
        out = highlight("Citation, citations and CITATION", "citation")
        assert out == "[Citation], citations and [CITATION]"

    def test_hyphenated_token(self):
        assert highlight("A pre-trial hearing", "Pre-Trial") == "A [pre-trial] hearing"

    def test_no_match_or_empty_query(self):
        text = "Nothing to see here"
        assert highlight(text, "zebra") == text
        assert highlight(text, "  ...  ") == text
