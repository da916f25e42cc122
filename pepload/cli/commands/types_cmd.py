"""Types command: list the builtin attribute types."""

import typer

from ...core.types import BUILTIN_TYPES
from ..app import app, console, is_json_output
from ..utils import Output

_INFERRED_FROM = {
    "boolean": "boolean literal",
    "string": "string literal",
    "address": "native IP address",
    "network": "native IP network",
    "list of strings": "sequence starting with a string",
}


@app.command("types")
def types_command():
    """List the attribute types a fixture can declare."""
    out = Output(console=console, json_mode=is_json_output())
    rows = [[name, _INFERRED_FROM.get(name, "-")] for name in BUILTIN_TYPES]
    out.table("Builtin types", ["Type", "Inferred from"], rows, data_key="types")
    raise typer.Exit(out.finish())
