"""Forwarding queries and the lockable query builder."""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Callable
from typing import Any

from lucenequery.core.exceptions import QueryLockedError
from lucenequery.core.modifiers import DEFAULT_FUZZINESS, QueryModifier

from .base import ModifierArg, Query
from .text import TextQuery

logger = logging.getLogger(__name__)

# Called with optional ``modifier`` and ``text`` keyword arguments.
QueryFactory = Callable[..., Query]


class ForwardingQuery(Query):
    """Query that forwards every call to a delegate.

    Mutating calls return the forwarding query, not the delegate, so that
    chained calls keep going through ``delegate()``.
    """

    @abstractmethod
    def delegate(self) -> Query:
        """Return the query that receives forwarded calls."""
        pass

    @property
    def modifier(self) -> QueryModifier:
        return self.delegate().modifier

    @modifier.setter
    def modifier(self, modifier: QueryModifier) -> None:
        self.delegate().modifier = modifier

    @property
    def wildcarded(self) -> bool:
        return self.delegate().wildcarded

    @wildcarded.setter
    def wildcarded(self, wildcarded: bool) -> None:
        self.delegate().wildcarded = wildcarded

    @property
    def last_successful(self) -> bool:
        return self.delegate().last_successful

    @property
    def text(self) -> str:
        return self.delegate().text

    def add_argument(self, value: Any, modifier: ModifierArg = None) -> ForwardingQuery:
        self.delegate().add_argument(value, modifier)
        return self

    def add_fuzzy_argument(
        self,
        value: Any,
        modifier: ModifierArg = None,
        fuzziness: float = DEFAULT_FUZZINESS,
    ) -> ForwardingQuery:
        self.delegate().add_fuzzy_argument(value, modifier, fuzziness)
        return self

    def add_field(
        self,
        key: str,
        value: Any,
        modifier: ModifierArg = None,
        boost: float | None = None,
        mandatory_value: bool | None = None,
    ) -> ForwardingQuery:
        self.delegate().add_field(key, value, modifier, boost, mandatory_value)
        return self

    def add_fuzzy_field(
        self,
        key: str,
        value: Any,
        modifier: ModifierArg = None,
        fuzziness: float = DEFAULT_FUZZINESS,
    ) -> ForwardingQuery:
        self.delegate().add_fuzzy_field(key, value, modifier, fuzziness)
        return self

    def add_range(self, start: Any, end: Any, modifier: ModifierArg = None) -> ForwardingQuery:
        self.delegate().add_range(start, end, modifier)
        return self

    def add_range_field(
        self, key: str, start: Any, end: Any, modifier: ModifierArg = None
    ) -> ForwardingQuery:
        self.delegate().add_range_field(key, start, end, modifier)
        return self

    def add_subquery(self, query: Query | None, modifier: ModifierArg = None) -> ForwardingQuery:
        self.delegate().add_subquery(query, modifier)
        return self

    def start_field(self, name: str, modifier: ModifierArg = None) -> ForwardingQuery:
        self.delegate().start_field(name, modifier)
        return self

    def end_field(self) -> ForwardingQuery:
        self.delegate().end_field()
        return self

    def add_boost(self, factor: float) -> ForwardingQuery:
        self.delegate().add_boost(factor)
        return self

    def add_unescaped(self, value: str | None, mandatory: bool = False) -> ForwardingQuery:
        self.delegate().add_unescaped(value, mandatory)
        return self

    def add_unescaped_field(
        self, key: str, value: str | None, mandatory: bool = False
    ) -> ForwardingQuery:
        self.delegate().add_unescaped_field(key, value, mandatory)
        return self


class QueryBuilder(ForwardingQuery):
    """Builder that can be frozen into a reusable query template.

    Until ``lock()`` is called every call is forwarded to an internal query.
    Afterwards mutating calls raise ``QueryLockedError`` while the text,
    the modifier and ``last_successful`` stay readable. ``build()`` always
    returns a new, independent query seeded with the current text.

    Example:
        builder = QueryBuilder()
        builder.add_field("type", "article", True).lock()
        query = builder.build().add_argument("quantum")
    """

    def __init__(self, factory: QueryFactory | None = None):
        self._factory: QueryFactory = factory or TextQuery
        self._delegate = self._factory()
        self._locked = False

    def delegate(self) -> Query:
        if self._locked:
            raise QueryLockedError()
        return self._delegate

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> QueryBuilder:
        """Reject all further changes."""
        self._locked = True
        logger.debug("Query builder locked with text %r", self._delegate.text)
        return self

    # Read accessors bypass the lock.

    @property
    def modifier(self) -> QueryModifier:
        return self._delegate.modifier

    @modifier.setter
    def modifier(self, modifier: QueryModifier) -> None:
        self.delegate().modifier = modifier

    @property
    def wildcarded(self) -> bool:
        return self._delegate.wildcarded

    @wildcarded.setter
    def wildcarded(self, wildcarded: bool) -> None:
        self.delegate().wildcarded = wildcarded

    @property
    def last_successful(self) -> bool:
        return self._delegate.last_successful

    @property
    def text(self) -> str:
        return self._delegate.text

    def build(self) -> Query:
        """Create a new, unlocked query seeded with the current text and modifier."""
        query = self._factory(
            modifier=self._delegate.modifier, text=self._delegate.text
        )
        logger.debug("Built query from template %r", query.text)
        return query
