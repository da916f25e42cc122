"""Builtin semantic types of the PDP attribute type system."""

from enum import Enum
from types import MappingProxyType


class SemanticType(str, Enum):
    """Semantic type of a PDP attribute value."""

    UNDEFINED = "undefined"
    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    ADDRESS = "address"
    NETWORK = "network"
    DOMAIN = "domain"
    LIST_OF_STRINGS = "list of strings"

    def __str__(self) -> str:
        return self.value


# Undefined is an error-path sentinel and never resolvable by name
BUILTIN_TYPES = MappingProxyType(
    {t.value: t for t in SemanticType if t is not SemanticType.UNDEFINED}
)


def lookup_type(name: str) -> SemanticType | None:
    """Look up a builtin type by name, case-insensitively.

    Examples:
        "Integer" → SemanticType.INTEGER
        "List of Strings" → SemanticType.LIST_OF_STRINGS
        "uuid" → None
    """
    return BUILTIN_TYPES.get(name.lower())
