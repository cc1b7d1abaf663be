"""Pytest configuration and fixtures."""

import os

import pytest

from lucenequery import QueryModifier, TextQuery


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Isolate environment variables for each test.

    Configuration overrides are read from ``LUCENEQUERY_*`` variables, so
    any set in the calling shell are removed.
    """
    original_env = os.environ.copy()
    for name in list(os.environ):
        if name.startswith("LUCENEQUERY_"):
            monkeypatch.delenv(name)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def query() -> TextQuery:
    """Empty query with the default modifier."""
    return TextQuery()


@pytest.fixture
def required() -> QueryModifier:
    """Required, conjunctive modifier."""
    return QueryModifier.start().required().build()


@pytest.fixture
def wildcarded() -> QueryModifier:
    """Wildcarded modifier without occurrence tag."""
    return QueryModifier.start().wildcarded().build()
