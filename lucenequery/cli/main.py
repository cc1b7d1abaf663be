"""Main CLI entry point and application setup."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape as escape_markup

from lucenequery import __version__
from lucenequery.cli.config import load_config, modifier_from_config
from lucenequery.core.escaping import escape_all, escape_keep_blanks, strip_specials
from lucenequery.core.exceptions import LuceneQueryError
from lucenequery.core.modifiers import QueryModifier, TermModifier
from lucenequery.query import TextQuery

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s: %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


@dataclass
class Context:
    """Shared state for the commands."""

    console: Console
    modifier: QueryModifier
    config: dict | None = None
    debug: bool = False


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging from the global flags.

    --verbose and --debug show the debug records of skipped clauses and
    builder transitions, --quiet leaves only warnings.
    """
    if quiet:
        level = logging.WARNING
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=DEBUG_LOG_FORMAT if debug else LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def create_console(no_color: bool = False) -> Console:
    """Console for query output; queries are never highlighted or wrapped."""
    return Console(
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        color_system=None if no_color else "auto",
    )


class LuceneQueryGroup(click.Group):
    """Group that reports query errors as one line instead of a traceback."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except LuceneQueryError as e:
            if ctx.obj is None or ctx.obj.debug:
                raise
            ctx.obj.console.print(f"[red]Error:[/red] {escape_markup(str(e))}")
            ctx.exit(1)


@click.group(cls=LuceneQueryGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.version_option(
    version=__version__,
    prog_name="lucenequery",
    message="lucenequery version %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
) -> None:
    """Lucene/Solr query string builder.

    Renders search terms, fields and ranges into escaped query-parser
    syntax with wildcard, fuzzy and split alternatives.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)
    console = create_console(no_color=no_color)

    try:
        config_data = load_config(config)
        modifier = modifier_from_config(config_data)
    except ValueError as e:
        if debug:
            raise
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    logger.debug("Default modifier: %r", modifier)
    ctx.obj = Context(
        console=console, modifier=modifier, config=config_data, debug=debug
    )


def _parse_assignment(option: str, raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint=option)
    return name.strip(), value


def _parse_range(raw: str) -> tuple[str, Any, Any]:
    name, value = _parse_assignment("--range", raw)
    start, sep, end = value.partition("..")
    if not sep:
        raise click.BadParameter(
            f"expected NAME=FROM..TO, got {raw!r}", param_hint="--range"
        )
    return name, _parse_number(start), _parse_number(end)


def _parse_number(value: str) -> int | float | str:
    """Parse range value, trying to detect numeric values."""
    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


@cli.command()
@click.argument("terms", nargs=-1)
@click.option(
    "--field",
    "-f",
    "fields",
    multiple=True,
    metavar="NAME=VALUE",
    help="Search VALUE in field NAME (repeatable)",
)
@click.option(
    "--range",
    "-r",
    "ranges",
    multiple=True,
    metavar="NAME=FROM..TO",
    help="Inclusive range on field NAME (repeatable)",
)
@click.option(
    "--required", "term_modifier", flag_value="required", help="Every clause must match"
)
@click.option(
    "--prohibited", "term_modifier", flag_value="prohibited", help="No clause may match"
)
@click.option("--wildcard/--no-wildcard", default=None, help="Add prefix matches")
@click.option("--split/--no-split", default=None, help="Also match single words")
@click.option(
    "--disjunct/--conjunct", default=None, help="Any term may match instead of all"
)
@click.option("--fuzzy", type=float, default=None, help="Fuzziness in [0, 1)")
@click.option("--boost", type=float, default=None, help="Boost for the whole query")
@click.option("--raw", is_flag=True, help="Print only the query text")
@click.pass_context
def build(
    ctx: click.Context,
    terms: tuple[str, ...],
    fields: tuple[str, ...],
    ranges: tuple[str, ...],
    term_modifier: str | None,
    wildcard: bool | None,
    split: bool | None,
    disjunct: bool | None,
    fuzzy: float | None,
    boost: float | None,
    raw: bool,
) -> None:
    """Build a query from TERMS, fields and ranges.

    Examples:

        lucenequery build --wildcard adidas

        lucenequery build -f title="deep learning" -r year=2020..2024 --required
    """
    console = ctx.obj.console

    builder = ctx.obj.modifier.copy()
    if term_modifier is not None:
        builder.term_modifier(TermModifier(term_modifier))
    if wildcard is not None:
        builder.set_wildcarded(wildcard)
    if split is not None:
        builder.set_split(split)
    if disjunct is not None:
        builder.set_disjunct(disjunct)
    if fuzzy is not None:
        builder.set_fuzziness(fuzzy)
    modifier = builder.build()

    query = TextQuery(modifier)
    if len(terms) == 1:
        query.add_argument(terms[0])
    elif terms:
        query.add_argument(list(terms))

    for raw_field in fields:
        name, value = _parse_assignment("--field", raw_field)
        query.add_field(name, value)

    for raw_range in ranges:
        name, start, end = _parse_range(raw_range)
        query.add_range_field(name, start, end)

    if not query.text:
        raise click.UsageError("Nothing to search for: give terms, --field or --range")

    if boost is not None:
        subquery = query
        query = TextQuery(modifier).add_subquery(subquery, False).add_boost(boost)

    text = query.text.strip()
    if raw:
        click.echo(text)
    else:
        console.print(text, markup=False)


@cli.command()
@click.argument("text")
@click.option("--keep-blanks", is_flag=True, help="Do not escape blanks")
@click.option("--strip", "strip", is_flag=True, help="Remove special characters instead")
def escape(text: str, keep_blanks: bool, strip: bool) -> None:
    """Escape TEXT for use in a query."""
    if keep_blanks and strip:
        raise click.UsageError("--keep-blanks and --strip are mutually exclusive")

    if strip:
        result = strip_specials(text)
    elif keep_blanks:
        result = escape_keep_blanks(text)
    else:
        result = escape_all(text)

    click.echo(result)


if __name__ == "__main__":
    cli()
