"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

OUTPUT_FORMATS = ("html", "json")


@dataclass
class MarkdownConfig:
    """Configuration for tokenizing and rendering Markdown.

    Attributes:
        max_depth: Deepest container nesting accepted before parsing fails.
        max_paragraph_length: Longest paragraph, in characters, that will be
            tokenized.
        max_file_size: Maximum file size in bytes that `parse_file` reads.
        escape_html: Whether the renderer escapes plain text.
        output_format: Default CLI output, ``"html"`` or ``"json"``.

    Examples:
        MarkdownConfig(max_depth=4, escape_html=False)
    """

    # Limits
    max_depth: int = 16
    max_paragraph_length: int = 100_000
    max_file_size: int = 10 * 1024 * 1024

    # Output
    escape_html: bool = True
    output_format: str = "html"


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_depth` must be a positive integer")
    """


def load_config(search_path: Path) -> MarkdownConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-tokens]`` table from `pyproject.toml` and the
    ``[md-tokens]`` or ``[tool.md-tokens]`` table from `.md-tokens.toml`.
    TOML files that cannot be read or decoded are skipped, and defaults are
    returned when nothing is found.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        MarkdownConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md-tokens")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".md-tokens.toml",
            table_paths=[("md-tokens",), ("tool", "md-tokens")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return MarkdownConfig()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> MarkdownConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            table = table.get(key) if isinstance(table, dict) else None
        if table is None:
            continue
        return _build_config_from_raw(table, config_file, ".".join(table_path))

    return None


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_name: str
) -> MarkdownConfig:
    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_name}]` settings in {config_file}")

    # TOML keys use dashes; dataclass fields use underscores
    settings = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return MarkdownConfig(**settings)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_name}]` settings in {config_file}") from error


def validate_config(config: MarkdownConfig) -> None:
    """Validate a `MarkdownConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If limits are not positive integers, `escape_html` is not
            a boolean, or the output format is unknown.

    Examples:
        validate_config(MarkdownConfig(max_depth=8))
    """
    for name in ("max_depth", "max_paragraph_length", "max_file_size"):
        value = getattr(config, name)
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"`{name}` must be a positive integer")

    if not isinstance(config.escape_html, bool):
        raise ConfigError("`escape_html` must be a boolean")
    if config.output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"`output_format` must be one of: {', '.join(OUTPUT_FORMATS)}")


def build_config(search_path: Path, **overrides: object) -> MarkdownConfig:
    """Load the nearest configuration, apply command-line overrides and validate it.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Values keyed by `MarkdownConfig` field; None means "not given".

    Returns:
        MarkdownConfig: Validated configuration.

    Raises:
        ConfigError: If loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_format="json")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    config = replace(load_config(search_path), **changes)
    validate_config(config)
    return config
