"""Core utilities for the Atlassian wiki markup converter."""

from core.config import WikiConfig, get_environment_summary, get_wiki_config, reload_wiki_config
from core.errors import (
    ConfigurationError,
    ConversionError,
    SourceFileNotFoundError,
    UnknownFlavorError,
    ValidationError,
    WikiMarkupError,
    format_error,
)
from core.utils import (
    handle_conversion_errors,
    validate_heading_shift,
    validate_markdown,
    validate_path_within_base,
)

__all__ = [
    "ConfigurationError",
    "ConversionError",
    "format_error",
    "get_environment_summary",
    "get_wiki_config",
    "handle_conversion_errors",
    "reload_wiki_config",
    "SourceFileNotFoundError",
    "UnknownFlavorError",
    "validate_heading_shift",
    "validate_markdown",
    "validate_path_within_base",
    "ValidationError",
    "WikiConfig",
    "WikiMarkupError",
]
