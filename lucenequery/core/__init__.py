"""Modifier algebra, escaping and errors shared by all query types."""

from .escaping import (
    SPECIAL_CHARACTERS,
    SPECIAL_CHARACTERS_WITH_BLANK,
    escape_all,
    escape_keep_blanks,
    escape_quotes,
    escape_with_blanks,
    remove_quotes,
    strip_specials,
)
from .exceptions import (
    EmptyQueryError,
    FieldScopeError,
    InvalidBoostError,
    InvalidFuzzinessError,
    InvalidRangeError,
    LuceneQueryError,
    MissingModifierError,
    QueryLockedError,
)
from .modifiers import (
    DEFAULT_FUZZINESS,
    DEFAULT_MODIFIER,
    ModifierBuilder,
    QueryModifier,
    TermModifier,
)

__all__ = [
    # Modifiers
    "TermModifier",
    "QueryModifier",
    "ModifierBuilder",
    "DEFAULT_MODIFIER",
    "DEFAULT_FUZZINESS",
    # Escaping
    "SPECIAL_CHARACTERS",
    "SPECIAL_CHARACTERS_WITH_BLANK",
    "escape_all",
    "escape_keep_blanks",
    "escape_quotes",
    "escape_with_blanks",
    "remove_quotes",
    "strip_specials",
    # Errors
    "LuceneQueryError",
    "InvalidFuzzinessError",
    "InvalidBoostError",
    "MissingModifierError",
    "InvalidRangeError",
    "QueryLockedError",
    "FieldScopeError",
    "EmptyQueryError",
]
