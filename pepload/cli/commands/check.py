"""Check command: load a fixture and show the typed assignments per request."""

import typer

from ...core.errors import PepLoadError
from ...requests import convert_requests, load_document
from ..app import app, console, is_json_output
from ..utils import (
    Output,
    assignment_rows,
    format_assignments_for_json,
    report_load_error,
)


@app.command("check")
def check_command(
    data: str = typer.Argument(
        ...,
        help="Fixture file (.yaml, .yml, .json) or a literal document string",
    ),
    raw_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Format of a literal document string: json or yaml (default from config)",
    ),
):
    """Load a requests fixture and show the typed attributes of each request.

    Examples:
        pepload check requests.yaml
        pepload check '{"attributes": {"age": "integer"}, "requests": [{"age": "30"}]}'
    """
    out = Output(console=console, json_mode=is_json_output())

    try:
        document = load_document(data, raw_format)
        batch = convert_requests(document)
    except (PepLoadError, OSError) as e:
        report_load_error(out, e)
        raise typer.Exit(out.finish())

    out.success(
        f"Loaded {len(batch)} request(s), {len(document.attributes)} declared attribute(s)",
        request_count=len(batch),
        declared_count=len(document.attributes),
    )
    if out.json_mode:
        out.set_data("requests", [format_assignments_for_json(a) for a in batch])
    else:
        for i, assignments in enumerate(batch, 1):
            out.table(f"Request {i}", ["Name", "Type", "Value"], assignment_rows(assignments))

    raise typer.Exit(out.finish())
