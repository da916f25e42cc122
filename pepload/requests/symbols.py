"""Symbol table of declared attribute types."""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ..core.errors import UnknownDeclaredTypeError
from ..core.types import SemanticType, lookup_type

logger = logging.getLogger(__name__)


class SymbolTable(Mapping[str, SemanticType]):
    """Read-only mapping of attribute name -> declared semantic type.

    Built once per document; every declared type name is resolved up front so
    an unknown type fails the load before any request is touched.
    """

    def __init__(self, symbols: Mapping[str, SemanticType] | None = None):
        self._symbols = MappingProxyType(dict(symbols or {}))

    @classmethod
    def from_declarations(cls, declarations: Mapping[str, str]) -> "SymbolTable":
        """Resolve declared type names (case-insensitive).

        Raises:
            UnknownDeclaredTypeError: On the first type name outside the
                builtin set.
        """
        symbols: dict[str, SemanticType] = {}
        for name, type_name in declarations.items():
            t = lookup_type(type_name)
            if t is None:
                raise UnknownDeclaredTypeError(name, type_name)
            symbols[name] = t

        logger.debug("Built symbol table with %d declared attributes", len(symbols))
        return cls(symbols)

    def __getitem__(self, name: str) -> SemanticType:
        return self._symbols[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable({dict(self._symbols)!r})"
