"""Entry point for `python -m pepload`."""

from .cli.app import app

if __name__ == "__main__":
    app()
