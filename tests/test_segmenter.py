"""Tests for paragraph segmentation on page markers."""

from pdfsearch.chunkers import page_marker, segment
from pdfsearch.models import Paragraph


def test_paragraphs_take_page_of_first_line():
    text = "\n".join(
        [
            "<<<PAGE:10>>>",
            "Heading",
            "Rule",
            "",
            "Body   text",
            "<<<PAGE:11>>>",
            "More",
        ]
    )
    assert segment(text) == [
        Paragraph("Heading Rule", 10),
        Paragraph("Body text", 10),
        Paragraph("More", 11),
    ]


def test_marker_terminates_paragraph():
    text = "first line\n<<<PAGE:2>>>\nsecond line"
    paragraphs = segment(text)
    assert [p.text for p in paragraphs] == ["first line", "second line"]
    assert [p.page for p in paragraphs] == [None, 2]


def test_marker_lines_are_trimmed_and_excluded():
    text = "   <<<PAGE:3>>>  \nalpha\n\n\n\nbeta\n"
    assert segment(text) == [Paragraph("alpha", 3), Paragraph("beta", 3)]


def test_marker_must_be_whole_line():
    text = "see <<<PAGE:3>>> inline"
    assert segment(text) == [Paragraph("see <<<PAGE:3>>> inline", None)]


def test_crlf_and_trailing_paragraph():
    text = "<<<PAGE:1>>>\r\none\r\ntwo\r\n\r\nthree"
    assert segment(text) == [Paragraph("one two", 1), Paragraph("three", 1)]


def test_blank_input_has_no_paragraphs():
    assert segment("") == []
    assert segment("\n  \n<<<PAGE:4>>>\n\n") == []


def test_page_marker_round_trips_through_segment():
    text = f"{page_marker(7)}\nHello"
    assert segment(text) == [Paragraph("Hello", 7)]


def test_only_newlines_break_lines():
    assert segment("alpha\x0c\x0cbeta\u2028gamma") == [Paragraph("alpha beta gamma", None)]
