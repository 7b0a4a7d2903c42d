"""CLI package for the WebCRM client.

The Typer app is created in app.py; importing the command modules registers
their commands with it.
"""

import webcrm.cli.commands_items  # noqa: F401, E402
from webcrm.cli.app import app

__all__ = ["app"]
