"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for scripting

Example:
    from ..cli.utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Loaded requests", count=3)
        out.table("Request 1", ["Name", "Type", "Value"], [["age", "integer", "30"]])
        return out.finish()
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.values import AttributeAssignment


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Validation error (document, type or value problem)
        3 = File not found
        4 = Encoding error
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    FILE_NOT_FOUND = 3
    ENCODING_ERROR = 4


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output with colors and formatting.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        # Ensure _data is a fresh dict for each instance
        self._data = {
            "status": "success",
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def error(
        self,
        message: str,
        *,
        attribute: str | None = None,
        request: int | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if attribute:
                error_obj["attribute"] = attribute
            if request is not None:
                error_obj["request"] = request
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {escape(message)}")
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for col in columns:
                table.add_column(col)
            for row in rows:
                table.add_row(*(escape(cell) for cell in row))
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        Returns the exit code that should be passed to sys.exit().
        """
        if self.json_mode:
            # Add exit_code to JSON for programmatic access
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code


def assignment_rows(assignments: list[AttributeAssignment]) -> list[list[str]]:
    """Rows of (name, type, value) for an assignment table."""
    return [[a.name, str(a.type), a.value.describe()] for a in assignments]


def format_assignments_for_json(assignments: list[AttributeAssignment]) -> list[dict[str, Any]]:
    """Convert assignments to JSON-serializable dicts."""
    result = []
    for a in assignments:
        value = a.value.value
        if isinstance(value, tuple):
            value = list(value)
        elif not isinstance(value, (bool, int, float, str)):
            value = str(value)
        result.append({"name": a.name, "type": str(a.type), "value": value})
    return result


def report_load_error(out: Output, error: Exception) -> None:
    """Report a loader error with the exit code matching its kind."""
    from ..core.errors import EncodingError, InvalidAttributeError, InvalidRequestError

    if isinstance(error, FileNotFoundError):
        out.error(
            f"File not found: {error.filename}", exit_code=ExitCode.FILE_NOT_FOUND
        )
        return

    attribute = None
    cause = error.__cause__
    if isinstance(cause, InvalidAttributeError):
        attribute = cause.attribute

    request = None
    if isinstance(error, (InvalidRequestError, EncodingError)):
        request = error.index

    exit_code = (
        ExitCode.ENCODING_ERROR
        if isinstance(error, EncodingError)
        else ExitCode.VALIDATION_ERROR
    )
    out.error(str(error), attribute=attribute, request=request, exit_code=exit_code)
