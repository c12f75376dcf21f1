"""Typer-based CLI entry point."""

from __future__ import annotations

import asyncio
from functools import wraps
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.table import Table

from .collection import LoadOutcome
from .errors import ReactiveCollectionError
from .sources import JsonFileSource, SourceCollection

app = typer.Typer(help="Page through JSON record files with a reactive collection")


def _handle_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ReactiveCollectionError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except (OSError, ValueError) as exc:
            typer.echo(f"Unreadable input: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


async def _load_pages(
    source: JsonFileSource, limit: int, pages: int, sort: Optional[str]
) -> SourceCollection:
    collection = SourceCollection(source, limit=limit, comparator=sort)
    for _ in range(pages):
        outcome = await collection.get_more()
        if outcome is not LoadOutcome.LOADED:
            break
    return collection


def _columns_for(collection: SourceCollection, columns: Optional[str]) -> List[str]:
    if columns:
        return [name.strip() for name in columns.split(",") if name.strip()]
    names: List[str] = []
    for model in collection:
        for key in model.attributes:
            if key not in names:
                names.append(key)
    return names


@app.command()
@_handle_errors
def browse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    limit: int = typer.Option(10, "--limit", "-l", min=1, help="Records per page"),
    pages: int = typer.Option(1, "--pages", "-p", min=1, help="Pages to load"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Attribute to keep the rows sorted by"),
    columns: Optional[str] = typer.Option(None, "--columns", help="Comma separated attribute names"),
) -> None:
    """Load FILE page by page and print the loaded rows."""

    collection = asyncio.run(_load_pages(JsonFileSource(file), limit, pages, sort))

    table = Table(title=file.name)
    names = _columns_for(collection, columns)
    for name in names:
        table.add_column(name)
    for model in collection:
        table.add_row(*("" if model.get(name) is None else str(model.get(name)) for name in names))
    print(table)
    print(
        f"[green]Loaded {collection.count()} of {collection.total_count()} records "
        f"({collection.has_more()} more)"
    )


@app.command()
@_handle_errors
def count(file: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Print the number of records in FILE."""

    print(JsonFileSource(file).count())


if __name__ == "__main__":  # pragma: no cover
    app()
