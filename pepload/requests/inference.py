"""Type inference for undeclared attributes.

Only shapes that are unambiguous at the native-literal level are inferred.
Numbers are never inferred (integer vs float is ambiguous) and strings are
always plain strings; anything else needs an explicit declaration.
"""

import logging
from typing import Any

from ..core.errors import UnresolvableTypeError
from ..core.types import SemanticType
from .shapes import RawShape, classify, describe

logger = logging.getLogger(__name__)

_INFERRED = {
    RawShape.BOOLEAN: SemanticType.BOOLEAN,
    RawShape.STRING: SemanticType.STRING,
    RawShape.ADDRESS: SemanticType.ADDRESS,
    RawShape.NETWORK: SemanticType.NETWORK,
}


def infer_type(value: Any) -> SemanticType:
    """Derive the semantic type of a raw value from its shape.

    Raises:
        UnresolvableTypeError: For empty sequences, sequences not led by a
            string, and every shape without an inference rule.
    """
    shape = classify(value)

    if shape in _INFERRED:
        t = _INFERRED[shape]
    elif shape == RawShape.SEQUENCE:
        if len(value) == 0:
            raise UnresolvableTypeError(
                "unable to infer element type of empty sequence", shape=shape
            )
        if classify(value[0]) != RawShape.STRING:
            raise UnresolvableTypeError(
                f"marshaling hasn't been implemented for sequence of {describe(value[0])}",
                shape=shape,
            )
        t = SemanticType.LIST_OF_STRINGS
    else:
        raise UnresolvableTypeError(
            f"marshaling hasn't been implemented for {describe(value)}", shape=shape
        )

    logger.debug("Inferred type %s from %s shape", t, shape)
    return t
