"""Cyclopts application and command routing for the formulary CLI.

The CLI provides the following commands:
- validate: Validate a document against a schema
- check-schema: Check a schema file
- list-rules: List available rules
"""

from cyclopts import App

from formulary import __version__
from formulary.cli import commands

app = App(
    name="formulary",
    help="Schema-driven validation and transformation",
    version=__version__,
)

app.command(commands.validate)
app.command(commands.check_schema, name="check-schema")
app.command(commands.list_rules, name="list-rules")
