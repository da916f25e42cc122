"""Shape classification of raw fixture values."""

import ipaddress
from enum import Enum
from typing import Any


class RawShape(str, Enum):
    """Native shape of a raw value as produced by the document parser."""

    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    SEQUENCE = "sequence"
    ADDRESS = "address"
    NETWORK = "network"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def classify(value: Any) -> RawShape:
    """Classify a raw value by its native shape.

    bool is checked before int since bool is an int subclass.
    """
    if isinstance(value, bool):
        return RawShape.BOOLEAN
    if isinstance(value, str):
        return RawShape.STRING
    if isinstance(value, int):
        return RawShape.INTEGER
    if isinstance(value, float):
        return RawShape.FLOAT
    if isinstance(value, (list, tuple)):
        return RawShape.SEQUENCE
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return RawShape.ADDRESS
    if isinstance(value, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
        return RawShape.NETWORK
    return RawShape.OTHER


def describe(value: Any) -> str:
    """Short description of a raw value's shape for error messages."""
    shape = classify(value)
    if shape == RawShape.OTHER:
        return "null" if value is None else type(value).__name__
    return str(shape)
