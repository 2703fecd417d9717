"""Constants used across the md-tokens package."""

from __future__ import annotations

# Markdown syntax
SCREENING_SYMBOL = "\\"
PARAGRAPH_SEPARATOR = "\n"
HEADER_SEPARATOR = " "

# File handling
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".txt")
