"""Markdown tokenizing."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ConfigError, MarkdownConfig, validate_config
from .constants import SCREENING_SYMBOL
from .exceptions import (
    InvalidInputError,
    ParagraphTooLongError,
    ParseError,
    StructureTooDeepError,
)
from .filesystem import read_markdown
from .identifiers import IDENTIFIERS
from .models import ParagraphState, ParserContext, PlainTextToken, Token
from .paragraphs import split_paragraphs
from .tags import ESCAPABLE_CHARACTERS, MarkerIndex, Tag, find_marker, index_markers

logger = logging.getLogger(__name__)


def _identify(
    tag: Tag,
    text: str,
    paragraph_index: int,
    offset: int,
    position: int,
    context: ParserContext,
    state: ParagraphState,
    marker_index: MarkerIndex,
    config: MarkdownConfig,
) -> Token | None:
    """Build the token `tag` opens at `position`, or None when it is not valid there.

    The interior of an accepted token is tokenized recursively with the child
    context, and its offsets are rebased onto the paragraph. An accepted marker
    is recorded in `state` and opens nothing else in the paragraph.
    """
    if tag.marker in context.open_markers:
        logger.debug("Marker %r is already open at offset %d", tag.marker, offset + position)
        return None
    if tag.marker in state.used_markers:
        logger.debug("Marker %r was already used at offset %d", tag.marker, offset + position)
        return None

    identifier = IDENTIFIERS[tag.kind]
    candidate = identifier.read_candidate(text, tag, position, paragraph_index)
    if candidate is None or not identifier.is_valid(candidate, text, context, marker_index):
        return None

    interior_start, interior_end = identifier.interior_bounds(candidate)
    sub_tokens = _tokenize(
        text[interior_start:interior_end],
        paragraph_index,
        offset + interior_start,
        context.opened(tag.marker),
        state,
        config,
    )
    state.used_markers.add(tag.marker)
    return tag.token_type(
        value=candidate.value,
        paragraph_index=paragraph_index,
        start_index=offset + position,
        selector=tag.marker,
        sub_tokens=tuple(sub_tokens),
    )


def _tokenize(
    text: str,
    paragraph_index: int,
    offset: int,
    context: ParserContext,
    state: ParagraphState,
    config: MarkdownConfig,
) -> list[Token]:
    """Scan `text` left to right, emitting plain text runs and identified tokens.

    Args:
        text: Paragraph or container interior to scan.
        paragraph_index: Zero-based paragraph the text belongs to.
        offset: Paragraph offset of ``text[0]``.
        context: Markers open around `text` and the nesting depth.
        state: Markers already used in the paragraph.
        config: Parsing limits.

    Returns:
        list[Token]: Tokens in source order.

    Raises:
        StructureTooDeepError: If `context` is deeper than ``config.max_depth``.
    """
    if context.depth > config.max_depth:
        raise StructureTooDeepError(config.max_depth)

    marker_index = index_markers(text)
    tokens: list[Token] = []
    plain_text: list[str] = []
    plain_start = 0
    position = 0

    def flush_plain_text() -> None:
        if plain_text:
            tokens.append(
                PlainTextToken("".join(plain_text), paragraph_index, offset + plain_start)
            )
            plain_text.clear()

    while position < len(text):
        character = text[position]

        # Screened characters are always literal
        if (
            character == SCREENING_SYMBOL
            and position + 1 < len(text)
            and text[position + 1] in ESCAPABLE_CHARACTERS
        ):
            if not plain_text:
                plain_start = position + 1
            plain_text.append(text[position + 1])
            position += 2
            continue

        tag = find_marker(text, position)
        token = None
        if tag is not None:
            token = _identify(
                tag, text, paragraph_index, offset, position, context, state, marker_index, config
            )

        if token is None:
            # Only the first marker character degrades so overlapping markers get a chance
            if not plain_text:
                plain_start = position
            plain_text.append(character)
            position += 1
            continue

        flush_plain_text()
        tokens.append(token)
        position += len(token.value)

    flush_plain_text()
    return tokens


def parse_paragraph(
    paragraph: str,
    paragraph_index: int = 0,
    context: ParserContext | None = None,
    config: MarkdownConfig | None = None,
) -> list[Token]:
    """Tokenize a single paragraph.

    Args:
        paragraph: Paragraph text, including its trailing newline if any.
        paragraph_index: Zero-based index recorded on every token.
        context: Starting parser state; a fresh `ParserContext` when omitted.
        config: Parsing limits; defaults to a new `MarkdownConfig`.

    Returns:
        list[Token]: Tokens covering the paragraph in order.

    Raises:
        InvalidInputError: If `paragraph` is not a string.
        ParagraphTooLongError: If the paragraph exceeds ``config.max_paragraph_length``.
        StructureTooDeepError: If nesting exceeds ``config.max_depth``.

    Examples:
        parse_paragraph("_abc_ de")  # [ItalicToken("_abc_", ...), PlainTextToken(" de", ...)]
    """
    if not isinstance(paragraph, str):
        raise InvalidInputError(paragraph)
    config = config or MarkdownConfig()
    if len(paragraph) > config.max_paragraph_length:
        raise ParagraphTooLongError(paragraph_index + 1, config.max_paragraph_length)

    return _tokenize(
        paragraph, paragraph_index, 0, context or ParserContext(), ParagraphState(), config
    )


def parse_markdown(text: str, config: MarkdownConfig | None = None) -> list[Token]:
    """Parse Markdown text into an ordered list of tokens.

    Paragraphs are tokenized independently, each with a fresh parser context.
    Malformed markup never raises; it is returned as plain text.

    Args:
        text: The markdown content to parse.
        config: Configuration controlling parsing limits. Defaults to a new
            `MarkdownConfig` when omitted.

    Returns:
        list[Token]: Tokens of every paragraph in document order.

    Raises:
        ConfigError: If the configuration fails validation.
        InvalidInputError: If `text` is None or not a string.
        ParagraphTooLongError: If a paragraph exceeds the configured length.
        StructureTooDeepError: If nesting exceeds the configured depth.

    Examples:
        parse_markdown("# Title\\n__bold__ and _italic_")
    """
    if not isinstance(text, str):
        raise InvalidInputError(text)
    config = config or MarkdownConfig()
    validate_config(config)

    tokens: list[Token] = []
    for paragraph_index, paragraph in enumerate(split_paragraphs(text)):
        paragraph_tokens = parse_paragraph(paragraph, paragraph_index, ParserContext(), config)
        logger.debug("Paragraph %d: %d tokens", paragraph_index, len(paragraph_tokens))
        tokens.extend(paragraph_tokens)
    return tokens


class ParseFileError(Exception):
    """Raised when parsing a Markdown file fails."""


def parse_file(filepath: Path, config: MarkdownConfig | None = None) -> list[Token]:
    """Read a Markdown file and tokenize its content.

    Args:
        filepath: Path to the markdown file to parse.
        config: Configuration controlling limits; defaults to a new
            `MarkdownConfig` when omitted.

    Returns:
        list[Token]: Tokens of the whole file.

    Raises:
        ParseFileError: If configuration is invalid, the file is too large or
            cannot be read or decoded, or parsing exceeds a limit.

    Examples:
        tokens = parse_file(Path("README.md"), config)
    """
    config = config or MarkdownConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    try:
        content = read_markdown(filepath, config.max_file_size)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error

    try:
        return parse_markdown(content, config)
    except ParagraphTooLongError as error:
        error_message = (
            f"{filepath} contains a paragraph at paragraph {error.paragraph_number} "
            f"exceeding the maximum allowed length of {error.max_paragraph_length} characters."
        )
        raise ParseFileError(error_message) from error
    except StructureTooDeepError as error:
        error_message = f"{filepath} nests markup too deeply (limit: {error.max_depth})."
        raise ParseFileError(error_message) from error
    except ParseError as error:
        error_message = f"{filepath}: {error}"
        raise ParseFileError(error_message) from error
