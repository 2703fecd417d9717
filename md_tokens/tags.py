"""Tag registry and marker scanning."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterator
from dataclasses import dataclass
from types import MappingProxyType

from .constants import SCREENING_SYMBOL
from .models import HeaderToken, ItalicToken, StrongToken, TagKind, Token

MAX_HEADER_LEVEL = 6


@dataclass(frozen=True)
class Tag:
    """A registered marker and the token it produces.

    Attributes:
        marker: Literal marker text, such as ``"__"``.
        kind: Whether the marker opens a span or a line.
        token_type: Token class built when the marker is identified.
        forbidden_parents: Markers of spans this tag may not be nested in.
    """

    marker: str
    kind: TagKind
    token_type: type[Token]
    forbidden_parents: frozenset[str] = frozenset()


def _build_registry() -> MappingProxyType[str, Tag]:
    tags = [
        Tag("_", TagKind.SPAN, ItalicToken),
        Tag("__", TagKind.SPAN, StrongToken, forbidden_parents=frozenset({"_"})),
    ]
    tags.extend(
        Tag("#" * level, TagKind.LINE, HeaderToken) for level in range(1, MAX_HEADER_LEVEL + 1)
    )
    return MappingProxyType({tag.marker: tag for tag in tags})


TAG_REGISTRY = _build_registry()
MAX_MARKER_LENGTH = max(len(marker) for marker in TAG_REGISTRY)
SPAN_MARKERS = frozenset(tag.marker for tag in TAG_REGISTRY.values() if tag.kind is TagKind.SPAN)

# Ascending marker offsets keyed by marker
MarkerIndex = dict[str, list[int]]

# Characters a screening backslash can escape
ESCAPABLE_CHARACTERS = frozenset({SCREENING_SYMBOL, *(marker[0] for marker in TAG_REGISTRY)})


def is_escaped(text: str, pos: int) -> bool:
    """Determine whether a character is escaped by preceding backslashes.

    Counts consecutive backslashes immediately before `pos`; an odd count marks
    the character as escaped.

    Args:
        text: Text containing the character.
        pos: Zero-based index of the character to inspect.

    Returns:
        bool: True when the character is escaped, otherwise False.

    Examples:
        is_escaped("\\\\_", 2)  # False, two backslashes
        is_escaped("\\_", 1)  # True, one backslash
    """
    backslash_count = 0
    i = pos - 1
    while i >= 0 and text[i] == SCREENING_SYMBOL:
        backslash_count += 1
        i -= 1

    return backslash_count % 2 == 1


def find_marker(text: str, position: int) -> Tag | None:
    """Find the longest registered marker starting at `position`.

    Args:
        text: Paragraph or interior being scanned.
        position: Zero-based offset to inspect.

    Returns:
        Tag | None: The matching tag, or None when no marker starts there.

    Examples:
        find_marker("__bold__", 0).marker  # "__"
        find_marker("_x_", 1)  # None
    """
    for length in range(MAX_MARKER_LENGTH, 0, -1):
        end = position + length
        if end > len(text):
            continue
        tag = TAG_REGISTRY.get(text[position:end])
        if tag is not None:
            return tag
    return None


def iter_markers(text: str) -> Iterator[tuple[int, Tag]]:
    """Yield every unescaped marker in `text` using longest-match scanning.

    The scan resumes after each marker, so ``"__"`` is reported once rather
    than as two ``"_"`` markers.

    Args:
        text: Text to scan.

    Yields:
        tuple[int, Tag]: Marker offset and its registered tag.
    """
    position = 0
    while position < len(text):
        if text[position] == SCREENING_SYMBOL and position + 1 < len(text):
            if text[position + 1] in ESCAPABLE_CHARACTERS:
                position += 2
                continue
        tag = find_marker(text, position)
        if tag is None:
            position += 1
            continue
        yield position, tag
        position += len(tag.marker)


def index_markers(text: str) -> MarkerIndex:
    """Group the offsets reported by `iter_markers` by marker.

    Offsets in each list are ascending, ready for `count_markers`.

    Examples:
        index_markers("_a_ __b__")  # {"_": [0, 2], "__": [4, 7]}
    """
    index: MarkerIndex = {}
    for position, tag in iter_markers(text):
        index.setdefault(tag.marker, []).append(position)
    return index


def count_markers(index: MarkerIndex, marker: str, start: int, end: int) -> int:
    """Count indexed `marker` offsets in ``[start, end)``."""
    offsets = index.get(marker, [])
    return bisect_left(offsets, end) - bisect_left(offsets, start)
