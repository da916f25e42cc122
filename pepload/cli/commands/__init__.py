"""CLI commands for pepload."""

from . import (
    check,
    encode,
    decode,
    types_cmd,
    config_cmd,
)

__all__ = [
    "check",
    "encode",
    "decode",
    "types_cmd",
    "config_cmd",
]
