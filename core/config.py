"""
Configuration Management for the Atlassian wiki markup converter.

All settings come from environment variables and are read once into a
`WikiConfig` instance. The CLI and the MCP tools use these values whenever the
caller does not pass an explicit option.

Environment variables:
    ATLASSIAN_WIKI_FLAVOR: "jira" (default) or "confluence"
    ATLASSIAN_WIKI_HEADING_SHIFT: integer added to every heading level (default 0)
    ATLASSIAN_WIKI_TOC: "true" to prepend the {toc} macro (default "false")
    ATLASSIAN_WIKI_BASE_DIR: directory the file tool may read from (default: cwd)
    ATLASSIAN_WIKI_LOG_LEVEL: logging level name for the CLI (default "INFO")
"""

import logging
import os

from core.errors import ConfigurationError

DEFAULT_FLAVOR = "jira"
SUPPORTED_FLAVORS = ("jira", "confluence")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _parse_bool(setting: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(setting, raw, "expected true or false")


class WikiConfig:
    """
    Centralized converter configuration.

    Values are validated eagerly so that a bad environment fails at startup
    instead of in the middle of a conversion.
    """

    def __init__(self):
        raw_flavor = os.getenv("ATLASSIAN_WIKI_FLAVOR", DEFAULT_FLAVOR)
        self.flavor = raw_flavor.strip().lower()
        if self.flavor not in SUPPORTED_FLAVORS:
            raise ConfigurationError("ATLASSIAN_WIKI_FLAVOR", raw_flavor, "expected 'jira' or 'confluence'")

        raw_shift = os.getenv("ATLASSIAN_WIKI_HEADING_SHIFT", "0")
        try:
            self.heading_shift = int(raw_shift)
        except ValueError:
            raise ConfigurationError("ATLASSIAN_WIKI_HEADING_SHIFT", raw_shift, "expected an integer") from None

        self.include_toc = _parse_bool("ATLASSIAN_WIKI_TOC", os.getenv("ATLASSIAN_WIKI_TOC", "false"))

        self.base_dir = os.path.abspath(os.path.expanduser(os.getenv("ATLASSIAN_WIKI_BASE_DIR", os.getcwd())))

        raw_level = os.getenv("ATLASSIAN_WIKI_LOG_LEVEL", "INFO")
        self.log_level = raw_level.strip().upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError("ATLASSIAN_WIKI_LOG_LEVEL", raw_level, "expected a logging level name")

    def get_environment_summary(self) -> dict:
        """
        Get a summary of the current configuration.

        Returns:
            Dictionary with the effective settings
        """
        return {
            "flavor": self.flavor,
            "heading_shift": self.heading_shift,
            "include_toc": self.include_toc,
            "base_dir": self.base_dir,
            "log_level": self.log_level,
        }


_wiki_config: WikiConfig | None = None


def get_wiki_config() -> WikiConfig:
    """
    Get the global configuration instance.

    Returns:
        The singleton configuration instance
    """
    global _wiki_config
    if _wiki_config is None:
        _wiki_config = WikiConfig()
    return _wiki_config


def reload_wiki_config() -> WikiConfig:
    """
    Reload the configuration from environment variables.

    This is useful for testing or when environment variables change.

    Returns:
        The reloaded configuration instance
    """
    global _wiki_config
    _wiki_config = WikiConfig()
    return _wiki_config


def get_environment_summary() -> dict:
    """Get the effective configuration as a dictionary."""
    return get_wiki_config().get_environment_summary()
