"""CLI app setup and common utilities.

This module creates the main Typer app and provides the shared helpers
for building a client from the environment and printing items.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Iterable

import typer
from typer import Typer

from webcrm.client import CrmClient, from_configuration
from webcrm.config import Configuration, ConfigurationError
from webcrm.core.attributes import AttributeProvider

app = Typer(
    name="webcrm",
    help="Query a WebCRM tenant. Credentials come from WEBCRM_* environment variables or .env.",
)


def create_client() -> CrmClient:
    """Build a client from the environment, exiting with a message if incomplete."""
    config = Configuration.from_env()
    logging.basicConfig(level=config.log_level.upper())
    try:
        return from_configuration(config)
    except ConfigurationError as e:
        typer.echo(f"❌ {e}", err=True)
        typer.echo("   Set WEBCRM_API_KEY, WEBCRM_LOGIN and WEBCRM_TENANT (or WEBCRM_ENDPOINT).", err=True)
        raise typer.Exit(1)


def _to_json(value: Any) -> Any:
    if isinstance(value, AttributeProvider):
        return {name: value.raw(name) for name in value.attributes}
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "id"):
        return value.id
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def echo_items(items: Iterable[AttributeProvider]) -> int:
    """Print items as a JSON array and return how many were printed."""
    payload = [_to_json(item) for item in items]
    typer.echo(json.dumps(payload, indent=2, default=_to_json))
    return len(payload)
