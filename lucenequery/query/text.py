"""Rendering of clauses into Lucene/Solr query-parser syntax.

Every clause written by this module is complete on its own: a field scope
is always closed, and a group that turns out to be empty is retracted, so
the text is well-formed after any sequence of calls (open field scopes
excepted).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Any

from lucenequery.core.escaping import escape_all, escape_quotes
from lucenequery.core.exceptions import FieldScopeError
from lucenequery.core.modifiers import QueryModifier

from .base import BaseQuery, ModifierArg, Query, check_boost, is_group
from .buffer import QueryBuffer

logger = logging.getLogger(__name__)

SPLIT_BOOST = "0.5"
EXACT_MATCH_BOOST = "2"


def _survives(item: Any) -> bool:
    """Whether a group member is kept for rendering."""
    if item is None:
        return False
    if is_group(item):
        return True
    return bool(str(item).strip())


def _phrase(value: str) -> str:
    return '"' + escape_quotes(value.replace("\\", "\\\\")) + '"'


class TextQuery(BaseQuery):
    """Query that renders clauses into a text buffer.

    Args:
        modifier: Default modifier, QueryModifier() when omitted
        text: Initial query text, inserted verbatim
    """

    def __init__(self, modifier: QueryModifier | None = None, text: str = ""):
        super().__init__(modifier)
        self._buffer = QueryBuffer(text)
        self._field_stack: list[str] = []

    @property
    def text(self) -> str:
        return self._buffer.getvalue()

    @property
    def open_fields(self) -> int:
        """Number of field scopes opened and not yet closed."""
        return len(self._field_stack)

    def __repr__(self) -> str:
        return f"TextQuery(text={self.text!r}, modifier={self._modifier!r})"

    def _add_text(self, value: str, modifier: QueryModifier) -> TextQuery:
        if modifier is None or value is None or not value.strip():
            self._set_last_successful(False)
            return self

        self._buffer.append(modifier.prefix, "(", self._render_body(value, modifier))
        if modifier.split and " " in value.strip():
            self._add_split(value, modifier)
        self._buffer.append(") ")

        self._set_last_successful(True)
        return self

    def _render_body(self, value: str, modifier: QueryModifier) -> str:
        """Render the alternatives for one literal, space separated.

        A wildcarded value matches exactly (boosted) or as a prefix; a fuzzy
        value additionally matches approximately.
        """
        escaped = escape_all(value)
        alternatives = []
        if modifier.wildcarded:
            alternatives.append(f"{_phrase(value)}^{EXACT_MATCH_BOOST}")
            alternatives.append(f"{escaped}*")
        if modifier.fuzzy_enabled:
            alternatives.append(f"{escaped}~{modifier.fuzziness}")
        if not alternatives:
            alternatives.append(escaped)
        return " ".join(alternatives)

    def _add_split(self, value: str, modifier: QueryModifier) -> None:
        # Tokens are combined like group members and never split again.
        token_modifier = modifier.element_modifier().copy().dont_split().build()
        self._buffer.append(" (")
        for token in value.split(" "):
            self._add_text(token, token_modifier)
        self._buffer.append(f")^{SPLIT_BOOST}")

    def _add_group(self, values: Iterable[Any], modifier: QueryModifier) -> TextQuery:
        if modifier is None or values is None:
            self._set_last_successful(False)
            return self

        items = [item for item in values if _survives(item)]
        if not items:
            self._set_last_successful(False)
            return self

        start = len(self._buffer)
        self._buffer.append(modifier.prefix, "(")
        opened = len(self._buffer)

        element_modifier = modifier.element_modifier()
        for item in items:
            self._dispatch(item, element_modifier)

        if len(self._buffer) == opened:
            # Every member rendered empty: retract the opening parenthesis.
            self._buffer.truncate(start)
            self._set_last_successful(False)
        else:
            self._buffer.append(") ")
            self._set_last_successful(True)
        return self

    def _add_subquery(self, query: Query | None, modifier: QueryModifier) -> TextQuery:
        subquery = query.text if query is not None else ""
        if modifier is None or not subquery:
            self._set_last_successful(False)
            return self

        self._buffer.append(modifier.prefix, "(", subquery, ") ")
        self._set_last_successful(True)
        return self

    def add_unescaped(self, value: str | None, mandatory: bool = False) -> TextQuery:
        if not value:
            self._set_last_successful(False)
            return self

        self._buffer.append("+" if mandatory else "", value, " ")
        self._set_last_successful(True)
        return self

    def add_unescaped_field(
        self, key: str, value: str | None, mandatory: bool = False
    ) -> TextQuery:
        if key is None or not key.strip() or not value:
            self._set_last_successful(False)
            return self

        self._buffer.append("+" if mandatory else "", key, ":(", value, ") ")
        self._set_last_successful(True)
        return self

    def start_field(self, name: str, modifier: ModifierArg = None) -> TextQuery:
        resolved = self._resolve_modifier(modifier)
        if name is None or not name.strip():
            logger.debug("Not opening field scope for blank name %r", name)
            self._set_last_successful(False)
            return self

        self._buffer.append(resolved.prefix, name, ":(")
        self._field_stack.append(name)
        self._set_last_successful(True)
        return self

    def end_field(self) -> TextQuery:
        if not self._field_stack:
            raise FieldScopeError()

        name = self._field_stack.pop()
        # Every clause ends with a blank, so "(" can only be the scope opener.
        if self._buffer.last_char() == "(":
            logger.debug("Closing empty field scope %r with placeholder", name)
            self._buffer.append('""')
        self._buffer.append(") ")
        self._set_last_successful(True)
        return self

    def _add_range(
        self, key: str | None, start: Any, end: Any, modifier: QueryModifier
    ) -> TextQuery:
        if modifier is None:
            self._set_last_successful(False)
            return self

        suffix = "*" if modifier.wildcarded else ""
        self._buffer.append(modifier.prefix)
        if key:
            self._buffer.append(key, ":")
        self._buffer.append(
            "[",
            escape_all(str(start)),
            suffix,
            " TO ",
            escape_all(str(end)),
            suffix,
            "] ",
        )
        self._set_last_successful(True)
        return self

    def add_boost(self, factor: float) -> TextQuery:
        """Boost the preceding clause.

        The factor is truncated (not rounded) to two decimal places. Nothing
        is appended for a factor of exactly 1, or when the preceding call
        wrote nothing.

        Raises:
            InvalidBoostError: If factor is not within (0, 10000000).
        """
        check_boost(factor)
        if factor == 1.0 or not self.last_successful:
            return self

        truncated = math.floor(factor * 100) / 100
        self._buffer.append("^", str(truncated), " ")
        return self
