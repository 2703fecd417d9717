"""HTML rendering for parsed tokens."""

from __future__ import annotations

from collections.abc import Iterable
from html import escape as html_escape

from .constants import PARAGRAPH_SEPARATOR
from .models import HeaderToken, ItalicToken, PlainTextToken, StrongToken, Token

_SPAN_TAGS: dict[type[Token], str] = {
    ItalicToken: "i",
    StrongToken: "strong",
}


def html_tag_name(token: Token) -> str | None:
    """Return the HTML element wrapping `token`, or None for plain text."""
    if isinstance(token, HeaderToken):
        return f"h{token.level}"
    return _SPAN_TAGS.get(type(token))


def render_token(token: Token, escape: bool = True) -> str:
    """Render one token and its sub-tokens.

    A header's trailing newline is moved after its closing tag so the
    element content matches the header text.

    Args:
        token: Token to render.
        escape: Whether plain text is HTML escaped.

    Returns:
        str: HTML for the token.

    Examples:
        render_token(parse_markdown("# abc")[0])  # "<h1>abc</h1>"
    """
    if isinstance(token, PlainTextToken):
        return html_escape(token.value, quote=False) if escape else token.value

    content = render_html(token.sub_tokens, escape=escape)
    trailing = ""
    if isinstance(token, HeaderToken) and content.endswith(PARAGRAPH_SEPARATOR):
        content = content[: -len(PARAGRAPH_SEPARATOR)]
        trailing = PARAGRAPH_SEPARATOR

    name = html_tag_name(token)
    return f"<{name}>{content}</{name}>{trailing}"


def render_html(tokens: Iterable[Token], escape: bool = True) -> str:
    """Render tokens, in order, into a single HTML string.

    Examples:
        render_html(parse_markdown("abc _cde_"))  # "abc <i>cde</i>"
    """
    return "".join(render_token(token, escape=escape) for token in tokens)
