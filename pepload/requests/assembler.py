"""Request assembly: turn a whole document into typed (or encoded) requests.

The symbol table is built once per document, then every request is resolved
and encoded in input order. The first failure aborts the batch; no partial
results are returned.
"""

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from ..config import get_config
from ..core.errors import EncodingError, InvalidAttributeError, InvalidRequestError
from ..core.models import RequestsDocument
from ..core.values import AttributeAssignment, RequestMessage
from ..core.wire import marshal_request_assignments
from .loader import load_document
from .resolver import make_attribute
from .symbols import SymbolTable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def assemble_requests(
    document: RequestsDocument,
    encoder: Callable[[Sequence[AttributeAssignment]], T],
) -> list[T]:
    """Resolve every request and hand its assignments to ``encoder``.

    Returns:
        One encoder result per request, in input order.

    Raises:
        UnknownDeclaredTypeError: Before any request is processed.
        InvalidRequestError: With the 1-based index of the first bad request,
            chained to the InvalidAttributeError.
        EncodingError: With the 1-based index of the request the encoder
            rejected, chained to the encoder's error.
    """
    symbols = SymbolTable.from_declarations(document.attributes)

    out: list[T] = []
    for i, request in enumerate(document.requests, 1):
        attrs: list[AttributeAssignment] = []
        for name, value in request.items():
            try:
                attrs.append(make_attribute(name, value, symbols))
            except InvalidAttributeError as e:
                raise InvalidRequestError(
                    f"invalid attribute in request {i}: {e}", index=i
                ) from e

        try:
            out.append(encoder(attrs))
        except EncodingError as e:
            raise EncodingError(f"can't create request {i}: {e}", index=i) from e

    logger.debug("Assembled %d requests", len(out))
    return out


def convert_requests(document: RequestsDocument) -> list[list[AttributeAssignment]]:
    """Resolve every request of the document into typed assignments, unencoded."""
    return assemble_requests(document, list)


def wire_encoder(size: int) -> Callable[[Sequence[AttributeAssignment]], RequestMessage]:
    """Encoder producing wire messages from a buffer of ``size`` bytes."""

    def encode(attrs: Sequence[AttributeAssignment]) -> RequestMessage:
        return RequestMessage(body=marshal_request_assignments(attrs, size))

    return encode


def load(data: str, size: int | None = None) -> list[RequestMessage]:
    """Load a requests fixture and encode every request for the PDP.

    Args:
        data: Path to a .yaml/.yml/.json file, or a literal document string
        size: Per-request buffer size in bytes (config default: 10240)

    Returns:
        One message per request, in input order.
    """
    document = load_document(data)
    if size is None:
        size = get_config().defaults.buffer_size
    return assemble_requests(document, wire_encoder(size))
