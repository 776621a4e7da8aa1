"""
Code block language names understood by Jira and Confluence.

The {code} macro only highlights a fixed set of languages. Fence info strings
written for GitHub-style Markdown are mapped onto that set; anything unknown
falls back to plain text.
"""

from types import MappingProxyType

DEFAULT_LANGUAGE = "text"

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "actionscript3",
    "applescript",
    "bash",
    "c#",
    "c++",
    "css",
    "coldfusion",
    "delphi",
    "diff",
    "erlang",
    "groovy",
    "xml",
    "java",
    "jfx",
    "javascript",
    "php",
    "text",
    "powershell",
    "python",
    "ruby",
    "sql",
    "sass",
    "scala",
    "vb",
    "yaml",
)

# supported language -> Markdown spellings that mean the same thing
LANGUAGE_ALIASES: dict[str, tuple[str, ...]] = {
    "actionscript3": ("as3", "actionscript"),
    "applescript": ("osascript",),
    "bash": ("console", "shell", "zsh", "sh"),
    "c#": ("csharp",),
    "c++": ("cpp",),
    "coldfusion": ("cfm", "cfml", "coldfusion html"),
    "delphi": ("pascal", "objectpascal"),
    "diff": ("udiff",),
    "xml": ("html",),
    "jfx": ("java fx",),
    "javascript": ("js", "node"),
    "php": ("inc",),
    "powershell": ("posh",),
    "ruby": ("jruby", "macruby", "rake", "rb", "rbx"),
    "sass": ("scss", "less", "stylus"),
    "vb": ("visual basic", "vb.net", "vbnet"),
}


def _build_language_map() -> MappingProxyType:
    language_map = {language: language for language in SUPPORTED_LANGUAGES}
    for language, aliases in LANGUAGE_ALIASES.items():
        for alias in aliases:
            language_map[alias] = language
    return MappingProxyType(language_map)


LANGUAGE_MAP = _build_language_map()


def resolve_language(token: str) -> str:
    """
    Map a fence language token to a supported language name.

    Matching is exact; callers lowercase the token first.

    Args:
        token: Language token from the fence info string.

    Returns:
        The supported language name, or "text" when the token is unknown.
    """
    return LANGUAGE_MAP.get(token, DEFAULT_LANGUAGE)
