"""Resolution of a single (name, raw value) pair into a typed assignment."""

import logging
from collections.abc import Mapping
from typing import Any

from ..core.errors import (
    ConversionError,
    InvalidAttributeError,
    UnimplementedConversionError,
    UnresolvableTypeError,
)
from ..core.types import SemanticType
from ..core.values import AttributeAssignment
from .inference import infer_type
from .marshallers import MARSHALLERS, AttributeMarshaller

logger = logging.getLogger(__name__)


def make_attribute(
    name: str,
    value: Any,
    symbols: Mapping[str, SemanticType],
    marshallers: Mapping[SemanticType, AttributeMarshaller] = MARSHALLERS,
) -> AttributeAssignment:
    """Build a typed assignment for one attribute of a request.

    The declared type wins; undeclared attributes get their type inferred
    from the raw value.

    Raises:
        InvalidAttributeError: Chained to the underlying
            UnresolvableTypeError, UnimplementedConversionError or
            ConversionError.
    """
    t = symbols.get(name)
    if t is None:
        try:
            t = infer_type(value)
        except UnresolvableTypeError as e:
            raise InvalidAttributeError(
                f"type of {name!r} attribute isn't defined and can't be derived: {e}",
                attribute=name,
                type=SemanticType.UNDEFINED,
            ) from e
        logger.debug("Attribute %r has no declared type, using %s", name, t)

    marshaller = marshallers.get(t)
    if marshaller is None:
        e = UnimplementedConversionError(t)
        raise InvalidAttributeError(
            f"marshaling hasn't been implemented for type {str(t)!r} of {name!r} attribute",
            attribute=name,
            type=t,
        ) from e

    try:
        v = marshaller(value)
    except ConversionError as e:
        raise InvalidAttributeError(
            f"can't marshal {name!r} attribute as {str(t)!r}: {e}",
            attribute=name,
            type=t,
        ) from e

    return AttributeAssignment(name=name, value=v)
