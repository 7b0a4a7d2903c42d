"""Item lookup commands.

- find: fetch items by ID
- search: search items with filters, a query, sorting and paging
"""

from __future__ import annotations

from typing import List, Optional

import typer

from webcrm.cli.app import app, create_client, echo_items
from webcrm.core.search import SearchFilter
from webcrm.errors import CrmError


def _parse_filter(expression: str) -> SearchFilter:
    """Parse "field:condition[:value]"."""
    parts = expression.split(":", 2)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise typer.BadParameter(f"Expected field:condition[:value], got '{expression}'")
    value = parts[2] if len(parts) == 3 else None
    return SearchFilter(field=parts[0], condition=parts[1], value=value)


@app.command(name="find")
def find_items(
    ids: List[str] = typer.Argument(..., help="Item IDs (base types may be mixed)"),
):
    """Fetch items by ID and print them as JSON.

    Examples:
        webcrm find e70a7123f499c5e0e9972ab4dbfb8fe3
        webcrm find abc def
    """
    with create_client() as client:
        try:
            echo_items(client.find(ids))
        except CrmError as e:
            typer.echo(f"❌ {type(e).__name__}: {e}", err=True)
            raise typer.Exit(1)


@app.command(name="search")
def search_items(
    filters: Optional[List[str]] = typer.Option(
        None, "--filter", "-f", help="Filter as field:condition[:value]; repeatable (ANDed)"
    ),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Full-text prefix search term"),
    limit: Optional[int] = typer.Option(20, "--limit", "-l", min=0, help="Maximum number of hits"),
    unlimited: bool = typer.Option(False, "--all", help="Return all hits"),
    offset: int = typer.Option(0, "--offset", min=0, help="Number of hits to skip"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="Attribute to sort by"),
    sort_order: Optional[str] = typer.Option(None, "--sort-order", help="asc or desc"),
    ids_only: bool = typer.Option(False, "--ids-only", help="Print IDs without fetching items"),
):
    """Search items and print them as JSON.

    Examples:
        webcrm search -f last_name:equals:Johnson -f locality:equals:Boston
        webcrm search -q john --sort-by last_name --sort-order asc --all
    """
    parsed = [_parse_filter(f) for f in filters or []]

    with create_client() as client:
        try:
            results = client.search(
                filters=parsed or None,
                query=query,
                limit=None if unlimited else limit,
                offset=offset,
                sort_by=sort_by,
                sort_order=sort_order,
            )
            if ids_only:
                for item_id in results.ids:
                    typer.echo(item_id)
            else:
                echo_items(results)
        except CrmError as e:
            typer.echo(f"❌ {type(e).__name__}: {e}", err=True)
            raise typer.Exit(1)

    typer.echo(f"{results.length} of {results.total} hits", err=True)
