"""Modifier algebra for query clauses.

A ``QueryModifier`` is an immutable description of how a value is rendered:
its occurrence tag (required, prohibited or neither), whether a value is
split into tokens, whether members of a group are combined disjunctively,
and whether wildcard and fuzzy alternatives are added.

Key components:
- TermModifier: Occurrence tag emitted in front of a clause
- QueryModifier: Frozen modifier value with derived views for nested contexts
- ModifierBuilder: Mutable, fluent staging object producing modifiers
"""

from __future__ import annotations

from enum import Enum

import msgspec

from .exceptions import InvalidFuzzinessError, MissingModifierError

DEFAULT_FUZZINESS = 0.5


class TermModifier(str, Enum):
    """Occurrence tags for query clauses."""

    NONE = "none"
    REQUIRED = "required"
    PROHIBITED = "prohibited"

    @property
    def prefix(self) -> str:
        """Literal token written before a clause."""
        return _PREFIXES[self]


_PREFIXES = {
    TermModifier.NONE: "",
    TermModifier.REQUIRED: "+",
    TermModifier.PROHIBITED: "-",
}


def _check_fuzziness(fuzziness: float | None) -> None:
    if fuzziness is not None and not 0 <= fuzziness < 1:
        raise InvalidFuzzinessError(fuzziness)


class QueryModifier(
    msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True
):
    """Immutable rendering configuration for a query clause.

    Equality and hashing are structural, so modifiers can be shared freely
    between queries and used as dictionary keys.
    """

    term_modifier: TermModifier = TermModifier.NONE
    split: bool = False
    disjunct: bool = False
    wildcarded: bool = False
    fuzziness: float | None = None

    def __post_init__(self):
        if self.term_modifier is None:
            raise MissingModifierError("term modifier")
        if not isinstance(self.term_modifier, TermModifier):
            raise TypeError(
                "term_modifier must be a TermModifier, "
                f"got {type(self.term_modifier).__name__}"
            )
        _check_fuzziness(self.fuzziness)

    @property
    def prefix(self) -> str:
        """Prefix of the term modifier ("", "+" or "-")."""
        return self.term_modifier.prefix

    @property
    def fuzzy_enabled(self) -> bool:
        """Whether a fuzzy alternative is rendered."""
        return self.fuzziness is not None

    def element_modifier(self) -> QueryModifier:
        """Modifier for the members of a group rendered with this modifier.

        Members of a conjunctive group are each required, members of a
        disjunctive group carry no occurrence tag.
        """
        term = TermModifier.NONE if self.disjunct else TermModifier.REQUIRED
        if term == self.term_modifier:
            return self
        return msgspec.structs.replace(self, term_modifier=term)

    def nested_argument_modifier(self) -> QueryModifier:
        """Modifier for a value rendered inside a field scope.

        The enclosing ``name:( ... )`` already carries the occurrence tag.
        """
        if self.term_modifier == TermModifier.NONE:
            return self
        return msgspec.structs.replace(self, term_modifier=TermModifier.NONE)

    def copy(self) -> ModifierBuilder:
        """Start a builder preloaded with this modifier's values."""
        return ModifierBuilder.copy_of(self)

    @classmethod
    def start(cls) -> ModifierBuilder:
        """Start a builder with all defaults."""
        return ModifierBuilder()

    @classmethod
    def copy_of(cls, modifier: QueryModifier) -> ModifierBuilder:
        """Start a builder preloaded with ``modifier``'s values."""
        return ModifierBuilder.copy_of(modifier)


DEFAULT_MODIFIER = QueryModifier()


class ModifierBuilder:
    """Fluent builder for QueryModifier values."""

    def __init__(self):
        self._term_modifier = TermModifier.NONE
        self._split = False
        self._disjunct = False
        self._wildcarded = False
        self._fuzziness: float | None = None

    @classmethod
    def copy_of(cls, modifier: QueryModifier) -> ModifierBuilder:
        """Create a builder preloaded with an existing modifier."""
        if modifier is None:
            raise MissingModifierError()
        builder = cls()
        builder._term_modifier = modifier.term_modifier
        builder._split = modifier.split
        builder._disjunct = modifier.disjunct
        builder._wildcarded = modifier.wildcarded
        builder._fuzziness = modifier.fuzziness
        return builder

    def term_modifier(self, term_modifier: TermModifier) -> ModifierBuilder:
        """Set the term modifier."""
        if term_modifier is None:
            raise MissingModifierError("term modifier")
        self._term_modifier = TermModifier(term_modifier)
        return self

    def required(self) -> ModifierBuilder:
        """Mark clauses as required."""
        return self.term_modifier(TermModifier.REQUIRED)

    def prohibited(self) -> ModifierBuilder:
        """Mark clauses as prohibited."""
        return self.term_modifier(TermModifier.PROHIBITED)

    excluded = prohibited

    def optional(self) -> ModifierBuilder:
        """Remove any occurrence tag."""
        return self.term_modifier(TermModifier.NONE)

    def set_wildcarded(self, wildcarded: bool) -> ModifierBuilder:
        self._wildcarded = bool(wildcarded)
        return self

    def wildcarded(self) -> ModifierBuilder:
        return self.set_wildcarded(True)

    def not_wildcarded(self) -> ModifierBuilder:
        return self.set_wildcarded(False)

    def set_split(self, split: bool) -> ModifierBuilder:
        self._split = bool(split)
        return self

    def do_split(self) -> ModifierBuilder:
        return self.set_split(True)

    def dont_split(self) -> ModifierBuilder:
        return self.set_split(False)

    def set_disjunct(self, disjunct: bool) -> ModifierBuilder:
        self._disjunct = bool(disjunct)
        return self

    def disjunct(self) -> ModifierBuilder:
        """Combine group members as "any may match"."""
        return self.set_disjunct(True)

    def conjunct(self) -> ModifierBuilder:
        """Combine group members as "all must match"."""
        return self.set_disjunct(False)

    def set_fuzziness(self, fuzziness: float | None) -> ModifierBuilder:
        """Set the fuzziness, or disable it with None.

        Raises:
            InvalidFuzzinessError: If fuzziness is not within [0, 1).
        """
        _check_fuzziness(fuzziness)
        self._fuzziness = None if fuzziness is None else float(fuzziness)
        return self

    def no_fuzziness(self) -> ModifierBuilder:
        return self.set_fuzziness(None)

    def build(self) -> QueryModifier:
        """Build the immutable modifier."""
        return QueryModifier(
            term_modifier=self._term_modifier,
            split=self._split,
            disjunct=self._disjunct,
            wildcarded=self._wildcarded,
            fuzziness=self._fuzziness,
        )

    end = build
