"""Query interface, modifier resolution and argument dispatch."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from lucenequery.core.exceptions import (
    EmptyQueryError,
    InvalidBoostError,
    InvalidRangeError,
    MissingModifierError,
)
from lucenequery.core.modifiers import (
    DEFAULT_FUZZINESS,
    DEFAULT_MODIFIER,
    QueryModifier,
    TermModifier,
)

logger = logging.getLogger(__name__)

MAX_BOOST = 10_000_000.0

# A modifier argument: an explicit modifier, a "mandatory" flag, or None for
# the query's default modifier.
ModifierArg = QueryModifier | bool | None


class Query(ABC):
    """Abstract interface for query-text builders.

    Every mutating method returns the query itself so calls can be chained.
    """

    @property
    @abstractmethod
    def modifier(self) -> QueryModifier:
        """Default modifier used when a call omits one."""
        pass

    @modifier.setter
    @abstractmethod
    def modifier(self, modifier: QueryModifier) -> None:
        pass

    @property
    @abstractmethod
    def wildcarded(self) -> bool:
        """Whether the default modifier is wildcarded."""
        pass

    @wildcarded.setter
    @abstractmethod
    def wildcarded(self, wildcarded: bool) -> None:
        pass

    @property
    @abstractmethod
    def last_successful(self) -> bool:
        """Whether the most recent mutating call appended any text."""
        pass

    @property
    @abstractmethod
    def text(self) -> str:
        """Current query text, possibly empty."""
        pass

    def get_query(self) -> str:
        """Return the query text.

        Raises:
            EmptyQueryError: If nothing has been added yet.
        """
        text = self.text
        if not text:
            raise EmptyQueryError()
        return text

    @abstractmethod
    def add_argument(self, value: Any, modifier: ModifierArg = None) -> Query:
        """Add a literal, a group of values, or a sub-query."""
        pass

    @abstractmethod
    def add_fuzzy_argument(
        self,
        value: Any,
        modifier: ModifierArg = None,
        fuzziness: float = DEFAULT_FUZZINESS,
    ) -> Query:
        """Add a value with a fuzzy alternative."""
        pass

    @abstractmethod
    def add_field(
        self,
        key: str,
        value: Any,
        modifier: ModifierArg = None,
        boost: float | None = None,
        mandatory_value: bool | None = None,
    ) -> Query:
        """Add a value scoped to a field: ``key:( value )``."""
        pass

    @abstractmethod
    def add_fuzzy_field(
        self,
        key: str,
        value: Any,
        modifier: ModifierArg = None,
        fuzziness: float = DEFAULT_FUZZINESS,
    ) -> Query:
        """Add a field whose value has a fuzzy alternative."""
        pass

    @abstractmethod
    def add_range(self, start: Any, end: Any, modifier: ModifierArg = None) -> Query:
        """Add an inclusive range ``[start TO end]``."""
        pass

    @abstractmethod
    def add_range_field(
        self, key: str, start: Any, end: Any, modifier: ModifierArg = None
    ) -> Query:
        """Add an inclusive range scoped to a field."""
        pass

    @abstractmethod
    def add_subquery(self, query: Query | None, modifier: ModifierArg = None) -> Query:
        """Add the text of another query as one clause."""
        pass

    @abstractmethod
    def start_field(self, name: str, modifier: ModifierArg = None) -> Query:
        """Open a field scope ``name:(``."""
        pass

    @abstractmethod
    def end_field(self) -> Query:
        """Close the innermost field scope."""
        pass

    @abstractmethod
    def add_boost(self, factor: float) -> Query:
        """Boost the preceding clause."""
        pass

    @abstractmethod
    def add_unescaped(self, value: str | None, mandatory: bool = False) -> Query:
        """Append raw query text without escaping."""
        pass

    @abstractmethod
    def add_unescaped_field(
        self, key: str, value: str | None, mandatory: bool = False
    ) -> Query:
        """Append raw query text scoped to a field."""
        pass

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)


def is_group(value: Any) -> bool:
    """Check whether a value is rendered as a group of values."""
    return isinstance(value, Iterable) and not isinstance(
        value, (str, bytes, bytearray, Mapping, Query)
    )


def is_blank(value: Any) -> bool:
    """Check whether a value has nothing to search for.

    Groups are blank when every member is blank.
    """
    if value is None:
        return True
    if isinstance(value, Query):
        return not value.text
    if is_group(value):
        return all(is_blank(item) for item in value)
    return not str(value).strip()


def check_boost(factor: float) -> None:
    """Validate a boost factor.

    Raises:
        InvalidBoostError: If factor is not within (0, 10000000).
    """
    if not 0.0 < factor < MAX_BOOST:
        raise InvalidBoostError(factor)


def check_range(start: Any, end: Any) -> bool:
    """Validate range bounds.

    Returns:
        False if the range matches nothing: a bound is blank, or numeric
        bounds are inverted.

    Raises:
        InvalidRangeError: If a bound is absent.
    """
    if start is None or end is None:
        raise InvalidRangeError(start, end)
    if not str(start).strip() or not str(end).strip():
        return False
    if _is_number(start) and _is_number(end) and start > end:
        return False
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class BaseQuery(Query):
    """Query implementing modifier resolution and argument dispatch.

    Subclasses render the individual clause kinds. This class decides which
    renderer a value goes to and which modifier it is rendered with.
    """

    def __init__(self, modifier: QueryModifier | None = None):
        self._modifier = DEFAULT_MODIFIER if modifier is None else modifier
        self._last_successful = False

    @property
    def modifier(self) -> QueryModifier:
        return self._modifier

    @modifier.setter
    def modifier(self, modifier: QueryModifier) -> None:
        if modifier is None:
            raise MissingModifierError()
        self._modifier = modifier

    @property
    def wildcarded(self) -> bool:
        return self._modifier.wildcarded

    @wildcarded.setter
    def wildcarded(self, wildcarded: bool) -> None:
        self._modifier = self._modifier.copy().set_wildcarded(wildcarded).build()

    @property
    def last_successful(self) -> bool:
        return self._last_successful

    def _set_last_successful(self, successful: bool) -> None:
        self._last_successful = successful

    def _resolve_modifier(
        self, modifier: ModifierArg, group: bool = False
    ) -> QueryModifier:
        """Turn a modifier argument into a concrete modifier.

        A boolean means "mandatory": the default modifier with the term
        modifier REQUIRED or NONE. For groups, mandatory additionally means
        that all members must match (conjunction).
        """
        if modifier is None:
            return self._modifier
        if isinstance(modifier, bool):
            term = TermModifier.REQUIRED if modifier else TermModifier.NONE
            builder = self._modifier.copy().term_modifier(term)
            if group:
                builder.set_disjunct(not modifier)
            return builder.build()
        if isinstance(modifier, QueryModifier):
            return modifier
        raise TypeError(
            f"modifier must be a QueryModifier, bool or None, got {type(modifier).__name__}"
        )

    def add_argument(self, value: Any, modifier: ModifierArg = None) -> BaseQuery:
        return self._dispatch(value, self._resolve_modifier(modifier, is_group(value)))

    def add_fuzzy_argument(
        self,
        value: Any,
        modifier: ModifierArg = None,
        fuzziness: float = DEFAULT_FUZZINESS,
    ) -> BaseQuery:
        resolved = self._resolve_modifier(modifier, is_group(value))
        return self._dispatch(value, resolved.copy().set_fuzziness(fuzziness).build())

    def _dispatch(self, value: Any, modifier: QueryModifier) -> BaseQuery:
        """Route a value to the renderer for its kind."""
        if value is None:
            self._set_last_successful(False)
            return self
        if isinstance(value, str):
            return self._add_text(value, modifier)
        if isinstance(value, Query):
            return self._add_subquery(value, modifier)
        if is_group(value):
            return self._add_group(value, modifier)
        return self._add_text(str(value), modifier)

    def add_subquery(self, query: Query | None, modifier: ModifierArg = None) -> BaseQuery:
        return self._add_subquery(query, self._resolve_modifier(modifier))

    def add_field(
        self,
        key: str,
        value: Any,
        modifier: ModifierArg = None,
        boost: float | None = None,
        mandatory_value: bool | None = None,
    ) -> BaseQuery:
        if boost is not None:
            check_boost(boost)
        group = is_group(value)
        if group and not isinstance(value, (list, tuple)):
            value = list(value)
        resolved = self._resolve_modifier(modifier, group)
        if mandatory_value is not None:
            resolved = resolved.copy().set_disjunct(not mandatory_value).build()

        if key is None or not key.strip() or is_blank(value):
            logger.debug("Skipping field %r: nothing to search for", key)
            self._set_last_successful(False)
            return self

        self.start_field(key, resolved)
        self._dispatch(value, resolved.nested_argument_modifier())
        self.end_field()
        if boost is not None:
            self.add_boost(boost)
        return self

    def add_fuzzy_field(
        self,
        key: str,
        value: Any,
        modifier: ModifierArg = None,
        fuzziness: float = DEFAULT_FUZZINESS,
    ) -> BaseQuery:
        resolved = self._resolve_modifier(modifier, is_group(value))
        return self.add_field(key, value, resolved.copy().set_fuzziness(fuzziness).build())

    def add_range(self, start: Any, end: Any, modifier: ModifierArg = None) -> BaseQuery:
        if not check_range(start, end):
            logger.debug("Skipping empty range [%r TO %r]", start, end)
            self._set_last_successful(False)
            return self
        return self._add_range(None, start, end, self._resolve_modifier(modifier))

    def add_range_field(
        self, key: str, start: Any, end: Any, modifier: ModifierArg = None
    ) -> BaseQuery:
        if not check_range(start, end) or key is None or not key.strip():
            logger.debug("Skipping range on field %r: [%r TO %r]", key, start, end)
            self._set_last_successful(False)
            return self
        return self._add_range(key, start, end, self._resolve_modifier(modifier))

    @abstractmethod
    def _add_text(self, value: str, modifier: QueryModifier) -> BaseQuery:
        """Render one literal."""
        pass

    @abstractmethod
    def _add_group(self, values: Iterable[Any], modifier: QueryModifier) -> BaseQuery:
        """Render a group of values as one clause."""
        pass

    @abstractmethod
    def _add_subquery(self, query: Query | None, modifier: QueryModifier) -> BaseQuery:
        """Render another query's text as one clause."""
        pass

    @abstractmethod
    def _add_range(
        self, key: str | None, start: Any, end: Any, modifier: QueryModifier
    ) -> BaseQuery:
        """Render validated range bounds."""
        pass
