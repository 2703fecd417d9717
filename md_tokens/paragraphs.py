"""Paragraph splitting for Markdown text."""

from __future__ import annotations

from .constants import PARAGRAPH_SEPARATOR
from .exceptions import InvalidInputError


def split_paragraphs(text: str) -> list[str]:
    """Split text into paragraphs, keeping the separator on each one.

    Empty pieces are dropped, then every paragraph except the last gets its
    newline back. Text that yields a single piece is returned unchanged.

    Args:
        text: Whole Markdown document.

    Returns:
        list[str]: Paragraphs in document order; empty for empty input.

    Raises:
        InvalidInputError: If `text` is None or not a string.

    Examples:
        split_paragraphs("# a\\nb")  # ["# a\\n", "b"]
        split_paragraphs("abc\\n")  # ["abc\\n"]
        split_paragraphs("")  # []
    """
    if not isinstance(text, str):
        raise InvalidInputError(text)

    pieces = [piece for piece in text.split(PARAGRAPH_SEPARATOR) if piece]
    if len(pieces) == 1:
        return [text]

    return [piece + PARAGRAPH_SEPARATOR for piece in pieces[:-1]] + pieces[-1:]
