"""Typed attribute values and assignments produced by the loader."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from .types import SemanticType


class AttributeValue(BaseModel):
    """A canonical value of one semantic type.

    Canonical representations:
    - boolean: bool
    - string: str
    - integer: int (signed 64-bit range)
    - float: float
    - address: ipaddress.IPv4Address | ipaddress.IPv6Address
    - network: ipaddress.IPv4Network | ipaddress.IPv6Network
    - domain: DomainName
    - list of strings: tuple[str, ...]
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: SemanticType
    value: Any

    def describe(self) -> str:
        """Human-readable rendering of the value."""
        if self.type == SemanticType.BOOLEAN:
            return "true" if self.value else "false"
        if self.type == SemanticType.STRING:
            return f'"{self.value}"'
        if self.type == SemanticType.LIST_OF_STRINGS:
            return "[" + ", ".join(f'"{s}"' for s in self.value) + "]"
        return str(self.value)


class AttributeAssignment(BaseModel):
    """Named attribute value, the unit sent to the PDP."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: AttributeValue

    @property
    def type(self) -> SemanticType:
        return self.value.type


class RequestMessage(BaseModel):
    """One encoded request, ready for transport."""

    model_config = ConfigDict(frozen=True)

    body: bytes
