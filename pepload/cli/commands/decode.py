"""Decode command: show the assignments carried by encoded request messages."""

from pathlib import Path

import typer

from ...core.errors import EncodingError
from ...core.wire import unmarshal_request_assignments
from ..app import app, console, is_json_output
from ..utils import (
    ExitCode,
    Output,
    assignment_rows,
    format_assignments_for_json,
)


@app.command("decode")
def decode_command(
    files: list[Path] = typer.Argument(..., help="Encoded request files"),
):
    """Decode wire messages written by `pepload encode`.

    Example:
        pepload decode out/request-0001.bin out/request-0002.bin
    """
    out = Output(console=console, json_mode=is_json_output())

    decoded = {}
    for path in files:
        try:
            decoded[path.name] = unmarshal_request_assignments(path.read_bytes())
        except FileNotFoundError:
            out.error(f"File not found: {path}", exit_code=ExitCode.FILE_NOT_FOUND)
            raise typer.Exit(out.finish())
        except (EncodingError, OSError) as e:
            out.error(f"{path}: {e}", exit_code=ExitCode.ENCODING_ERROR)
            raise typer.Exit(out.finish())

    if out.json_mode:
        out.set_data(
            "messages",
            {name: format_assignments_for_json(a) for name, a in decoded.items()},
        )
    else:
        for name, assignments in decoded.items():
            out.table(name, ["Name", "Type", "Value"], assignment_rows(assignments))

    raise typer.Exit(out.finish())
