"""Data models for md-tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .tags import Tag


class TagKind(Enum):
    """How a registered marker claims text.

    Attributes:
        SPAN: Needs an open and a matching close marker in the same paragraph.
        LINE: Claims the rest of its paragraph once opened.
    """

    SPAN = auto()
    LINE = auto()


@dataclass(frozen=True)
class Token:
    """A parsed region of a paragraph.

    Attributes:
        value: Exact source slice covered by the token.
        paragraph_index: Zero-based paragraph the token belongs to.
        start_index: Offset of the token within its paragraph.
        selector: Marker that produced the token; None for plain text.
        sub_tokens: Tokens covering the interior of a container token.
    """

    type_name: ClassVar[str] = "token"

    value: str
    paragraph_index: int
    start_index: int
    selector: str | None = None
    sub_tokens: tuple[Token, ...] = field(default=())

    @property
    def end_index(self) -> int:
        return self.start_index + len(self.value)

    def to_dict(self) -> dict[str, object]:
        """Serialize the token and its sub-tokens into JSON-friendly data."""
        return {
            "type": self.type_name,
            "value": self.value,
            "paragraph_index": self.paragraph_index,
            "start_index": self.start_index,
            "selector": self.selector,
            "sub_tokens": [token.to_dict() for token in self.sub_tokens],
        }


@dataclass(frozen=True)
class PlainTextToken(Token):
    """Untagged text. Escaped markers appear here without their backslash."""

    type_name: ClassVar[str] = "plain_text"


@dataclass(frozen=True)
class ItalicToken(Token):
    type_name: ClassVar[str] = "italic"


@dataclass(frozen=True)
class StrongToken(Token):
    type_name: ClassVar[str] = "strong"


@dataclass(frozen=True)
class HeaderToken(Token):
    """Line token spanning from its marker to the end of the paragraph."""

    type_name: ClassVar[str] = "header"

    @property
    def level(self) -> int:
        return len(self.selector or "")

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["level"] = self.level
        return data


@dataclass(frozen=True)
class TemporaryToken:
    """Candidate match handed to an identifier for validation.

    Attributes:
        tag: Registered tag whose marker was found.
        value: Candidate source text, markers included.
        paragraph_index: Zero-based paragraph being scanned.
        position: Offset of the marker within the scanned text.
    """

    tag: Tag
    value: str
    paragraph_index: int
    position: int


@dataclass(frozen=True)
class ParserContext:
    """Parser state for one scan of a paragraph or container interior.

    A fresh context is created for every paragraph; interiors are scanned with
    the context returned by `opened`.

    Attributes:
        open_markers: Markers of the containers enclosing the scanned text.
        depth: Number of enclosing containers.
    """

    open_markers: frozenset[str] = frozenset()
    depth: int = 0

    def opened(self, marker: str) -> ParserContext:
        return ParserContext(open_markers=self.open_markers | {marker}, depth=self.depth + 1)


@dataclass
class ParagraphState:
    """Mutable state shared by every scan of one paragraph.

    Attributes:
        used_markers: Markers that already produced a token in the paragraph;
            a marker opens at most one token per paragraph.
    """

    used_markers: set[str] = field(default_factory=set)
