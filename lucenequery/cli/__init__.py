"""Command line interface for building query strings.

Built with Click and Rich.
"""

from lucenequery.cli.main import cli

__all__ = ["cli"]
