import pytest

from md_tokens.identifiers import (
    IDENTIFIERS,
    LINE_IDENTIFIER,
    SPAN_IDENTIFIER,
    find_close_marker,
    is_valid_line,
    is_valid_span,
    line_interior_bounds,
    read_line_candidate,
    read_span_candidate,
    span_interior_bounds,
)
from md_tokens.models import ParserContext, TagKind
from md_tokens.tags import TAG_REGISTRY, index_markers

ITALIC = TAG_REGISTRY["_"]
STRONG = TAG_REGISTRY["__"]
HEADER = TAG_REGISTRY["##"]


def _span_is_valid(text: str, position: int, context: ParserContext | None = None) -> bool:
    tag = ITALIC if text[position : position + 2] != "__" else STRONG
    candidate = read_span_candidate(text, tag, position, 0)
    assert candidate is not None
    return is_valid_span(candidate, text, context or ParserContext())


def test_identifiers_cover_every_tag_kind():
    assert IDENTIFIERS[TagKind.SPAN] is SPAN_IDENTIFIER
    assert IDENTIFIERS[TagKind.LINE] is LINE_IDENTIFIER
    assert set(IDENTIFIERS) == set(TagKind)


def test_find_close_marker_skips_escaped_markers():
    assert find_close_marker("_a\\_b_", "_", 1) == 5
    assert find_close_marker("_abc", "_", 1) == -1


def test_read_span_candidate_reaches_first_close_marker():
    candidate = read_span_candidate("x _a_ _b_", ITALIC, 2, 3)

    assert candidate.value == "_a_"
    assert candidate.position == 2
    assert candidate.paragraph_index == 3
    assert span_interior_bounds(candidate) == (3, 4)


def test_read_span_candidate_without_close_marker():
    assert read_span_candidate("_abc", ITALIC, 0, 0) is None


@pytest.mark.parametrize("text", ["_abc_", "_a b_", "__abc__", "_abc_de", "x _a_ y"])
def test_valid_spans(text: str):
    assert _span_is_valid(text, text.index("_")) is True


@pytest.mark.parametrize(
    "text",
    [
        "__",  # empty content, found as two italic markers
        "_ a_",
        "_a _",
        "_12_3",
        "1_2_3",
        "a_bc cd_e",
        "x_a b_",
        "_a b_x",
    ],
)
def test_invalid_italic_spans(text: str):
    position = text.index("_")
    candidate = read_span_candidate(text, ITALIC, position, 0)

    assert is_valid_span(candidate, text, ParserContext()) is False


def test_close_marker_inside_longer_run_is_rejected():
    candidate = read_span_candidate("_ab__c", ITALIC, 0, 0)

    assert candidate.value == "_ab_"
    assert is_valid_span(candidate, "_ab__c", ParserContext()) is False


def test_open_marker_inside_longer_run_is_rejected():
    candidate = read_span_candidate("__a_", ITALIC, 1, 0)

    assert is_valid_span(candidate, "__a_", ParserContext()) is False


def test_crossing_spans_are_rejected():
    text = "__cd de_ fe__"
    candidate = read_span_candidate(text, STRONG, 0, 0)

    assert candidate.value == text
    assert is_valid_span(candidate, text, ParserContext()) is False


def test_strong_inside_open_italic_is_rejected():
    candidate = read_span_candidate("__a__", STRONG, 0, 0)

    assert is_valid_span(candidate, "__a__", ParserContext().opened("_")) is False
    assert is_valid_span(candidate, "__a__", ParserContext().opened("#")) is True


def test_strong_enclosed_by_italic_markers_is_rejected():
    text = "_a __b__ c_"
    candidate = read_span_candidate(text, STRONG, 3, 0)

    assert is_valid_span(candidate, text, ParserContext()) is False


def test_span_validity_uses_given_marker_index():
    text = "_a __b__ c_"
    candidate = read_span_candidate(text, STRONG, 3, 0)

    # The index decides enclosure, so an index without italic markers accepts the span
    assert is_valid_span(candidate, text, ParserContext(), index_markers(text)) is False
    assert is_valid_span(candidate, text, ParserContext(), {"__": [3, 6]}) is True


def test_strong_after_closed_italic_is_accepted():
    text = "_a_ __b__"
    candidate = read_span_candidate(text, STRONG, 4, 0)

    assert is_valid_span(candidate, text, ParserContext()) is True


def test_read_line_candidate_takes_rest_of_paragraph():
    candidate = read_line_candidate("## abc\n", HEADER, 0, 1)

    assert candidate.value == "## abc\n"
    assert line_interior_bounds(candidate) == (3, 7)


def test_line_marker_needs_following_space():
    valid = read_line_candidate("## abc", HEADER, 0, 0)
    invalid = read_line_candidate("##abc", HEADER, 0, 0)
    bare = read_line_candidate("##", HEADER, 0, 0)

    assert is_valid_line(valid, "## abc", ParserContext()) is True
    assert is_valid_line(invalid, "##abc", ParserContext()) is False
    assert is_valid_line(bare, "##", ParserContext()) is False


def test_line_marker_only_at_paragraph_start():
    text = "a ## b"
    candidate = read_line_candidate(text, HEADER, 2, 0)

    assert is_valid_line(candidate, text, ParserContext()) is False


def test_line_marker_rejected_inside_containers():
    candidate = read_line_candidate("## a", HEADER, 0, 0)

    assert is_valid_line(candidate, "## a", ParserContext().opened("_")) is False
