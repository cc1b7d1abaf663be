"""Escaping of query-parser metacharacters.

All functions are total: ``None`` maps to an empty string.
"""

import re

# Backslash is special too.
SPECIAL_CHARACTERS = '\\+-&|!(){}[]^~?*:;'
SPECIAL_CHARACTERS_WITH_BLANK = SPECIAL_CHARACTERS + " "

_SPECIALS_PATTERN = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")
_SPECIALS_WITH_BLANK_PATTERN = re.compile(
    "[" + re.escape(SPECIAL_CHARACTERS_WITH_BLANK) + "]"
)
_QUOTES_PATTERN = re.compile('"')


def escape_with_blanks(text: str | None) -> str:
    """Backslash-escape special characters and blanks."""
    if text is None:
        return ""
    return _SPECIALS_WITH_BLANK_PATTERN.sub(r"\\\g<0>", text)


def escape_keep_blanks(text: str | None) -> str:
    """Backslash-escape special characters, leaving blanks untouched."""
    if text is None:
        return ""
    return _SPECIALS_PATTERN.sub(r"\\\g<0>", text)


def escape_quotes(text: str | None) -> str:
    """Backslash-escape double quotes."""
    if text is None:
        return ""
    return _QUOTES_PATTERN.sub(r'\\"', text)


def remove_quotes(text: str | None) -> str:
    """Delete double quotes."""
    if text is None:
        return ""
    return _QUOTES_PATTERN.sub("", text)


def strip_specials(text: str | None) -> str:
    """Delete special characters and blanks, then escape quotes."""
    if text is None:
        return ""
    return escape_quotes(_SPECIALS_WITH_BLANK_PATTERN.sub("", text))


def escape_all(text: str | None) -> str:
    """Escape a literal so that it is matched as-is.

    This is the escaping used for every rendered value.

    Args:
        text: Raw literal, may be None

    Returns:
        Text with special characters, blanks and quotes backslash-escaped
    """
    return escape_quotes(escape_with_blanks(text))
