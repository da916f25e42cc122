"""Encode command: write each request of a fixture as a wire message."""

from pathlib import Path

import typer

from ...config import get_config
from ...core.errors import PepLoadError
from ...requests import assemble_requests, load_document, wire_encoder
from ..app import app, console, is_json_output
from ..utils import ExitCode, Output, report_load_error


@app.command("encode")
def encode_command(
    data: str = typer.Argument(
        ...,
        help="Fixture file (.yaml, .yml, .json) or a literal document string",
    ),
    output: Path = typer.Option(
        ..., "--output", "-o", help="Directory to write request-NNNN.bin files to"
    ),
    size: int | None = typer.Option(
        None,
        "--size",
        "-s",
        min=1,
        help="Per-request buffer size in bytes (default from config)",
    ),
    raw_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Format of a literal document string: json or yaml (default from config)",
    ),
):
    """Encode every request of a fixture into the PDP wire format.

    Nothing is written unless the whole batch encodes.

    Example:
        pepload encode requests.yaml -o out/
    """
    out = Output(console=console, json_mode=is_json_output())
    if size is None:
        size = get_config().defaults.buffer_size

    try:
        document = load_document(data, raw_format)
        messages = assemble_requests(document, wire_encoder(size))
    except (PepLoadError, OSError) as e:
        report_load_error(out, e)
        raise typer.Exit(out.finish())

    try:
        output.mkdir(parents=True, exist_ok=True)
        files = []
        for i, msg in enumerate(messages, 1):
            path = output / f"request-{i:04d}.bin"
            path.write_bytes(msg.body)
            files.append([path.name, str(len(msg.body))])
    except OSError as e:
        out.error(f"Failed to write messages: {e}", exit_code=ExitCode.ENCODING_ERROR)
        raise typer.Exit(out.finish())

    out.success(
        f"Encoded {len(messages)} request(s) to {output}",
        request_count=len(messages),
        output=str(output),
    )
    out.table("Messages", ["File", "Bytes"], files)
    raise typer.Exit(out.finish())
