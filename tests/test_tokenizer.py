"""Tests for the search tokenizer."""

import pytest

from pdfsearch.search import tokenize, unique_tokens


class TestTokenize:
    """Tests for tokenize()."""

    def test_citation_with_en_dash(self):
        """The en dash is a separator, not a hyphen."""
        assert tokenize("Neutral Citation – R v Smith 2020") == [
            "neutral",
            "citation",
            "r",
            "v",
            "smith",
            "2020",
        ]

    def test_hyphen_is_token_internal(self):
        assert tokenize("A pre-trial Hearing") == ["a", "pre-trial", "hearing"]

    def test_unicode_letters_and_digits_kept(self):
        assert tokenize("Café Ünïcode Ελλάδα ٣") == ["café", "ünïcode", "ελλάδα", "٣"]

    def test_punctuation_and_underscore_separate(self):
        assert tokenize("[2009] TASSC 80, (snake_case)") == ["2009", "tassc", "80", "snake", "case"]

    def test_empty_and_blank(self):
        assert tokenize("") == []
        assert tokenize("  \n\t ... ") == []

    @pytest.mark.parametrize(
        "text",
        [
            "Neutral Citation – R v Smith 2020",
            "Quarmby v Keating [2009] TASSC 80, [11]",
            "ÉTATS-UNIS d'Amérique — §1245",
            "  mixed\tWHITESPACE\n\nlines ",
        ],
    )
    def test_idempotent(self, text):
        tokens = tokenize(text)
        assert tokenize(" ".join(tokens)) == tokens


def test_unique_tokens_keeps_first_seen_order():
    assert unique_tokens("Beta alpha BETA gamma alpha") == ["beta", "alpha", "gamma"]
