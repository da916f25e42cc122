"""pepload: typed attribute loader for PDP authorization-request fixtures.

Reads a fixture declaring attribute types and a batch of requests, resolves
every attribute to one of the builtin semantic types and produces the
canonical typed assignments (or encoded request messages) for each request.

Example:
    from pepload import load_document, convert_requests

    doc = load_document('{"attributes": {"age": "integer"}, "requests": [{"age": "30"}]}')
    batch = convert_requests(doc)
"""

__version__ = "0.1.0"

from .core.errors import (
    PepLoadError,
    DocumentParseError,
    UnknownDeclaredTypeError,
    UnresolvableTypeError,
    ConversionError,
    UnimplementedConversionError,
    InvalidAttributeError,
    InvalidRequestError,
    EncodingError,
)
from .core.models import RequestsDocument
from .core.types import SemanticType, BUILTIN_TYPES, lookup_type
from .core.values import AttributeValue, AttributeAssignment, RequestMessage
from .requests import (
    SymbolTable,
    infer_type,
    make_attribute,
    convert_requests,
    assemble_requests,
    load,
    load_document,
)

__all__ = [
    "__version__",
    # Errors
    "PepLoadError",
    "DocumentParseError",
    "UnknownDeclaredTypeError",
    "UnresolvableTypeError",
    "ConversionError",
    "UnimplementedConversionError",
    "InvalidAttributeError",
    "InvalidRequestError",
    "EncodingError",
    # Models
    "RequestsDocument",
    "SemanticType",
    "BUILTIN_TYPES",
    "lookup_type",
    "AttributeValue",
    "AttributeAssignment",
    "RequestMessage",
    # Engine
    "SymbolTable",
    "infer_type",
    "make_attribute",
    "convert_requests",
    "assemble_requests",
    "load",
    "load_document",
]
