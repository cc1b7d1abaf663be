"""Query-text builders."""

from .base import BaseQuery, ModifierArg, Query
from .buffer import QueryBuffer
from .builder import ForwardingQuery, QueryBuilder
from .text import TextQuery

__all__ = [
    "Query",
    "BaseQuery",
    "TextQuery",
    "ForwardingQuery",
    "QueryBuilder",
    "QueryBuffer",
    "ModifierArg",
]
