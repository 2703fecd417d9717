"""Package-specific exception types."""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for parsing-related errors.

    Malformed markup is never reported through these errors; it degrades to
    plain text. They signal contract violations and exceeded limits.
    """


class InvalidInputError(ParseError):
    """Raised when the text handed to the parser is absent or not a string.

    Args:
        received: The offending value.
    """

    def __init__(self, received: object):
        self.received = received
        super().__init__(f"Expected text to parse, got {type(received).__name__}")


class StructureTooDeepError(ParseError):
    """Raised when nested containers exceed the configured depth.

    Args:
        max_depth: Maximum nesting depth permitted.
    """

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Markup nested deeper than {self.max_depth} levels")


class ParagraphTooLongError(ParseError):
    """Raised when a paragraph exceeds the configured maximum length.

    Args:
        paragraph_number: One-based index of the offending paragraph.
        max_paragraph_length: Maximum allowed paragraph length in characters.
    """

    def __init__(self, paragraph_number: int, max_paragraph_length: int):
        self.paragraph_number = paragraph_number
        self.max_paragraph_length = max_paragraph_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Paragraph {self.paragraph_number} exceeds maximum allowed length "
            f"of {self.max_paragraph_length} characters"
        )
