"""Config command for viewing and managing pepload configuration."""

import typer

from ..app import app, console
from ...config import (
    get_config,
    reset_config,
    CONFIG_FILE,
    CLI_MODES,
    RAW_FORMATS,
)


VALID_KEYS = {
    "defaults.buffer_size",
    "defaults.raw_format",
    "cli.mode",
}

INT_FIELDS = {"buffer_size"}

CHOICE_FIELDS = {
    "raw_format": RAW_FORMATS,
    "mode": CLI_MODES,
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. defaults.buffer_size, cli.mode)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify pepload configuration.

    Examples:
        pepload config show
        pepload config set defaults.buffer_size 65536
        pepload config set defaults.raw_format yaml
        pepload config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] pepload config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]pepload Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Defaults[/bold cyan]")
    console.print(f"  buffer_size = {config.defaults.buffer_size}")
    console.print(f"  raw_format  = {config.defaults.raw_format}")

    console.print()
    console.print("[bold cyan]CLI[/bold cyan]")
    console.print(f"  mode        = {config.cli.mode}")

    # Config file
    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()

    zone, field_name = key.split(".", 1)
    target = config.defaults if zone == "defaults" else config.cli

    if field_name in INT_FIELDS:
        try:
            parsed = int(value)
        except ValueError:
            console.print(f"[red]Invalid integer value:[/red] {value}")
            raise typer.Exit(1)
        if parsed <= 0:
            console.print(f"[red]Value must be positive:[/red] {value}")
            raise typer.Exit(1)
        setattr(target, field_name, parsed)
    elif field_name in CHOICE_FIELDS:
        choice = value.lower()
        if choice not in CHOICE_FIELDS[field_name]:
            console.print(
                f"[red]Invalid value:[/red] {value} "
                f"(expected one of: {', '.join(CHOICE_FIELDS[field_name])})"
            )
            raise typer.Exit(1)
        setattr(target, field_name, choice)
    else:
        setattr(target, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
