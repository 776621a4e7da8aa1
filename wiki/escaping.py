"""Escaping for text placed inside wiki macros and monospace spans."""

ESCAPE_TABLE: dict[str, str] = {
    "{": "&#123;",
    "}": "&#125;",
    "*": "\\*",
}

_TRANSLATION = str.maketrans(ESCAPE_TABLE)


def escape(text: str) -> str:
    """
    Escape characters that would otherwise open macros or bold spans.

    A hyphen only breaks rendering at the very start of the text (it reads as
    a strikethrough or list marker there), so only a leading one is escaped.

    >>> escape("{a}*b")
    '&#123;a&#125;\\\\*b'
    >>> escape("-x-y")
    '\\\\-x-y'
    """
    escaped = text.translate(_TRANSLATION)
    if escaped.startswith("-"):
        escaped = "\\-" + escaped[1:]
    return escaped
