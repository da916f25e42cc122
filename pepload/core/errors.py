"""Exceptions raised while loading and converting request fixtures.

Every failure is fatal to the enclosing unit: an attribute failure aborts its
request and a request failure aborts the whole batch. Context is added by
wrapping (``raise ... from exc``), so ``__cause__`` always holds the
underlying error.
"""

from typing import Any


class PepLoadError(Exception):
    """Base class for all pepload errors."""

    pass


class DocumentParseError(PepLoadError):
    """Raised when a fixture document can't be parsed into requests."""

    pass


class UnknownDeclaredTypeError(PepLoadError):
    """Raised when a declared attribute names a type outside the builtin set."""

    def __init__(self, attribute: str, type_name: str):
        self.attribute = attribute
        self.type_name = type_name
        super().__init__(f"unknown type {type_name!r} of {attribute!r} attribute")


class UnresolvableTypeError(PepLoadError):
    """Raised when the type of an undeclared attribute can't be derived."""

    def __init__(self, message: str, shape: Any = None):
        self.shape = shape
        super().__init__(message)


class ConversionError(PepLoadError):
    """Raised when a raw value can't be converted to its resolved type."""

    def __init__(self, message: str, target: Any = None, shape: Any = None):
        self.target = target
        self.shape = shape
        super().__init__(message)


class UnimplementedConversionError(PepLoadError):
    """Raised when a resolved type has no registered conversion routine."""

    def __init__(self, type: Any):
        self.type = type
        super().__init__(f"marshaling hasn't been implemented for type {str(type)!r}")


class InvalidAttributeError(PepLoadError):
    """Raised when a single (name, raw value) pair can't be resolved."""

    def __init__(self, message: str, attribute: str, type: Any = None):
        self.attribute = attribute
        self.type = type
        super().__init__(message)


class InvalidRequestError(PepLoadError):
    """Raised when a request of the batch contains an invalid attribute.

    ``index`` is 1-based.
    """

    def __init__(self, message: str, index: int):
        self.index = index
        super().__init__(message)


class EncodingError(PepLoadError):
    """Raised when assignments can't be encoded into (or decoded from) a message."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        super().__init__(message)
