from __future__ import annotations

import json
from typing import Dict, List, Optional

import typer

from slugline_app.config import get_settings
from slugline_app.database import reflect_table, session_scope
from slugline_app.slugging import (
    FieldRef,
    SlugGenerator,
    SlugNormalizer,
    SlugOptions,
    SQLConflictQuery,
    classify_identifier,
)
from slugline_app.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Slugline CLI utilities")
logger = get_logger(__name__)


def _parse_scope(values: List[str]) -> Dict[str, str]:
    scope: Dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"scope must look like column=value, got {item!r}")
        scope[name.strip()] = value
    return scope


class _Draft:
    """Unsaved row stand-in carrying the candidate text and scope values."""

    def __init__(self, text: str, scope: Dict[str, str], pk: Optional[str]) -> None:
        self.text = text
        self.id = pk
        self.slug: Optional[str] = None
        for name, value in scope.items():
            setattr(self, name, value)


@app.command()
def normalize(
    text: str = typer.Argument(..., help="Text to turn into a slug"),
) -> None:
    """Print the normalized form of TEXT."""

    config = get_settings().slug_config()
    typer.echo(SlugNormalizer(config.separator, config.max_length)(text))


@app.command()
def classify(
    value: str = typer.Argument(..., help="Lookup value to classify"),
) -> None:
    """Tell whether VALUE is a slug, a primary key or could be either."""

    typer.echo(classify_identifier(value).value)


@app.command()
def generate(
    text: str = typer.Argument(..., help="Base text for the slug"),
    table: str = typer.Option(..., "--table", help="Table holding existing slugs"),
    scope: List[str] = typer.Option([], "--scope", help="Scope filter as column=value, repeatable"),
    exclude: Optional[str] = typer.Option(None, "--exclude", help="Primary key of the row being updated"),
    json_output: bool = typer.Option(False, "--json", help="Print a JSON document instead of the bare slug"),
) -> None:
    """Show the unique slug TEXT would receive in TABLE. Nothing is written."""

    settings = get_settings()
    configure_logging(settings.log_level)
    scope_values = _parse_scope(scope)
    config = settings.slug_config()
    reflected = reflect_table(settings, table)
    draft = _Draft(text, scope_values, exclude)

    with session_scope(settings) as session:
        query = SQLConflictQuery(session, reflected, slug_column=config.slug_column)
        generator = SlugGenerator(query, config)
        options = SlugOptions(candidates=[FieldRef("text")], scope=tuple(scope_values))
        slug = generator.resolve(draft, options)

    logger.debug("Resolved %r in %s to %r", text, table, slug)
    if json_output:
        typer.echo(json.dumps({"text": text, "table": table, "scope": scope_values, "slug": slug}, indent=2))
        return
    typer.echo(slug)


if __name__ == "__main__":
    app()
