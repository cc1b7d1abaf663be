"""Build Lucene/Solr query-parser strings from structured search intent.

Values, groups of values, fields, ranges and sub-queries are rendered with
a ``QueryModifier`` controlling requiredness, wildcard and fuzzy
alternatives, token splitting and group semantics. Special characters are
escaped so that the produced text is always accepted by the query parser.

Main components:
- QueryModifier / ModifierBuilder: Rendering configuration
- TextQuery: Renders clauses into query text
- QueryBuilder: Lockable template producing fresh queries
- Escaping helpers for use with hand-written query text
"""

from .core import (
    DEFAULT_FUZZINESS,
    DEFAULT_MODIFIER,
    EmptyQueryError,
    FieldScopeError,
    InvalidBoostError,
    InvalidFuzzinessError,
    InvalidRangeError,
    LuceneQueryError,
    MissingModifierError,
    ModifierBuilder,
    QueryLockedError,
    QueryModifier,
    TermModifier,
    escape_all,
    escape_keep_blanks,
    escape_quotes,
    escape_with_blanks,
    remove_quotes,
    strip_specials,
)
from .query import ForwardingQuery, Query, QueryBuilder, TextQuery

__version__ = "1.0.0"


def new_query(modifier: QueryModifier | None = None) -> TextQuery:
    """Create an empty query with an optional default modifier."""
    return TextQuery(modifier)


def new_query_builder() -> QueryBuilder:
    """Create an unlocked query builder."""
    return QueryBuilder()


__all__ = [
    "new_query",
    "new_query_builder",
    # Queries
    "Query",
    "TextQuery",
    "ForwardingQuery",
    "QueryBuilder",
    # Modifiers
    "TermModifier",
    "QueryModifier",
    "ModifierBuilder",
    "DEFAULT_MODIFIER",
    "DEFAULT_FUZZINESS",
    # Escaping
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
