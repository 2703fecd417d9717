"""
md-tokens: tokenizer for a small Markdown dialect.

Supports italic ``_x_``, strong ``__x__`` and headers ``#``..``######``, with
backslash escaping. The package can be used both as a CLI tool and as a
library.

CLI Usage:
    md-tokens README.md
    md-tokens README.md --format json

Library Usage:
    from md_tokens import parse_markdown, render_html

    tokens = parse_markdown("# Title\\n__bold__ and _italic_")
    html = render_html(tokens)
"""

from .config import ConfigError, MarkdownConfig
from .exceptions import (
    InvalidInputError,
    ParagraphTooLongError,
    ParseError,
    StructureTooDeepError,
)
from .models import (
    HeaderToken,
    ItalicToken,
    ParserContext,
    PlainTextToken,
    StrongToken,
    TagKind,
    Token,
)
from .paragraphs import split_paragraphs
from .parser import ParseFileError, parse_file, parse_markdown, parse_paragraph
from .renderer import render_html
from .tags import TAG_REGISTRY, find_marker

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_markdown",
    "parse_paragraph",
    "parse_file",
    "split_paragraphs",
    "find_marker",
    "render_html",
    "TAG_REGISTRY",
    # Data models
    "Token",
    "PlainTextToken",
    "ItalicToken",
    "StrongToken",
    "HeaderToken",
    "ParserContext",
    "TagKind",
    "MarkdownConfig",
    # Exceptions
    "ConfigError",
    "InvalidInputError",
    "ParagraphTooLongError",
    "ParseError",
    "ParseFileError",
    "StructureTooDeepError",
    # Version
    "__version__",
]
