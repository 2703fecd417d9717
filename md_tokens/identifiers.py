"""Validation rules deciding whether a marker opens a token.

Each tag kind has one `Identifier`: a candidate reader that finds the text a
marker would claim, a validity check run against the scanned text and the
parser context, and the bounds of the interior that gets tokenized again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType

from .constants import HEADER_SEPARATOR
from .models import ParserContext, TagKind, TemporaryToken
from .tags import SPAN_MARKERS, MarkerIndex, Tag, count_markers, index_markers, is_escaped

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identifier:
    read_candidate: Callable[[str, Tag, int, int], TemporaryToken | None]
    is_valid: Callable[[TemporaryToken, str, ParserContext, MarkerIndex], bool]
    interior_bounds: Callable[[TemporaryToken], tuple[int, int]]


def _reject(candidate: TemporaryToken, reason: str) -> bool:
    logger.debug(
        "Rejected %r at paragraph %d, offset %d: %s",
        candidate.value,
        candidate.paragraph_index,
        candidate.position,
        reason,
    )
    return False


def find_close_marker(text: str, marker: str, start: int) -> int:
    """Return the offset of the next unescaped `marker` at or after `start`, or -1."""
    index = text.find(marker, start)
    while index != -1 and is_escaped(text, index):
        index = text.find(marker, index + 1)
    return index


def _between_digits(text: str, index: int, length: int) -> bool:
    before = index > 0 and text[index - 1].isdigit()
    after = index + length < len(text) and text[index + length].isdigit()
    return before and after


def _run_length(text: str, index: int) -> int:
    """Length of the unescaped run of ``text[index]`` characters around `index`."""
    character = text[index]
    start = index
    while start > 0 and text[start - 1] == character and not is_escaped(text, start - 1):
        start -= 1
    end = index
    while end < len(text) and text[end] == character:
        end += 1
    return end - start


def _touches_word(text: str, start: int, end: int) -> bool:
    before = start > 0 and not text[start - 1].isspace()
    after = end < len(text) and not text[end].isspace()
    return before or after


def read_span_candidate(
    text: str, tag: Tag, position: int, paragraph_index: int
) -> TemporaryToken | None:
    close_index = find_close_marker(text, tag.marker, position + len(tag.marker))
    if close_index == -1:
        logger.debug("No closing %r for marker at offset %d", tag.marker, position)
        return None
    value = text[position : close_index + len(tag.marker)]
    return TemporaryToken(tag, value, paragraph_index, position)


def is_valid_span(
    candidate: TemporaryToken,
    text: str,
    context: ParserContext,
    marker_index: MarkerIndex | None = None,
) -> bool:
    """Check a span candidate against the emphasis disambiguation rules.

    Args:
        candidate: Open marker through close marker, as read from `text`.
        text: Paragraph or interior the candidate was found in.
        context: Parser state of the scan that found the candidate.
        marker_index: `index_markers` of `text`, built once per scan; computed
            here when omitted.

    Returns:
        bool: True when the candidate may become a span token.

    Examples:
        italic = TAG_REGISTRY["_"]
        is_valid_span(read_span_candidate("_a_", italic, 0, 0), "_a_", ParserContext())  # True
        is_valid_span(read_span_candidate("_12_3", italic, 0, 0), "_12_3", ParserContext())  # False
    """
    tag = candidate.tag
    marker = tag.marker
    start = candidate.position
    end = start + len(candidate.value)
    close_index = end - len(marker)
    interior = text[start + len(marker) : close_index]

    if not interior:
        return _reject(candidate, "empty content")
    if interior[0].isspace() or interior[-1].isspace():
        return _reject(candidate, "whitespace next to a marker")
    if _between_digits(text, start, len(marker)) or _between_digits(
        text, close_index, len(marker)
    ):
        return _reject(candidate, "marker inside a number")

    if _run_length(text, start) != len(marker) or _run_length(text, close_index) != len(marker):
        return _reject(candidate, "marker belongs to a longer run of marker characters")

    if any(character.isspace() for character in interior) and _touches_word(text, start, end):
        return _reject(candidate, "span covers parts of different words")

    if marker_index is None:
        marker_index = index_markers(text)

    # Both markers are exact runs here, so the scan of `text` is aligned with the interior
    for other in SPAN_MARKERS - {marker}:
        if count_markers(marker_index, other, start + len(marker), close_index) % 2:
            return _reject(candidate, f"intersects a {other!r} span")

    for parent in tag.forbidden_parents:
        if parent in context.open_markers:
            return _reject(candidate, f"nested inside an open {parent!r} span")
        opened_before = count_markers(marker_index, parent, 0, start)
        closed_after = count_markers(marker_index, parent, end, len(text))
        if opened_before % 2 and closed_after:
            return _reject(candidate, f"enclosed by a {parent!r} span")

    return True


def span_interior_bounds(candidate: TemporaryToken) -> tuple[int, int]:
    marker_length = len(candidate.tag.marker)
    end = candidate.position + len(candidate.value)
    return candidate.position + marker_length, end - marker_length


def read_line_candidate(
    text: str, tag: Tag, position: int, paragraph_index: int
) -> TemporaryToken | None:
    return TemporaryToken(tag, text[position:], paragraph_index, position)


def is_valid_line(
    candidate: TemporaryToken,
    text: str,
    context: ParserContext,
    marker_index: MarkerIndex | None = None,
) -> bool:
    """Accept a line marker that starts the paragraph and is followed by a space."""
    if candidate.position != 0 or context.open_markers:
        return _reject(candidate, "line marker not at the start of a paragraph")

    separator_index = candidate.position + len(candidate.tag.marker)
    if text[separator_index : separator_index + 1] != HEADER_SEPARATOR:
        return _reject(candidate, "line marker not followed by a space")

    return True


def line_interior_bounds(candidate: TemporaryToken) -> tuple[int, int]:
    start = candidate.position + len(candidate.tag.marker) + len(HEADER_SEPARATOR)
    return start, candidate.position + len(candidate.value)


SPAN_IDENTIFIER = Identifier(read_span_candidate, is_valid_span, span_interior_bounds)
LINE_IDENTIFIER = Identifier(read_line_candidate, is_valid_line, line_interior_bounds)

IDENTIFIERS = MappingProxyType({TagKind.SPAN: SPAN_IDENTIFIER, TagKind.LINE: LINE_IDENTIFIER})
