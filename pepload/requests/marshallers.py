"""Per-type conversion routines from raw fixture values to typed values.

Each routine takes a raw value and returns an ``AttributeValue`` of its type,
or raises ``ConversionError`` naming the target type and the raw shape.
``MARSHALLERS`` maps every builtin semantic type to its routine.
"""

import ipaddress
import math
import re
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from ..core.domain import DomainName
from ..core.errors import ConversionError
from ..core.types import SemanticType
from ..core.values import AttributeValue
from .shapes import RawShape, classify, describe

# Largest magnitude below which every integer is exactly representable as a
# double. Some parsers produce every number as a double, so integers coming in
# as floats must stay strictly inside (-2**53, 2**53).
MAX_FLOAT64_INT = 1 << 53

MIN_INT64 = -(1 << 63)
MAX_INT64 = (1 << 63) - 1

_TRUE_STRINGS = frozenset({"1", "t", "true"})
_FALSE_STRINGS = frozenset({"0", "f", "false"})
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INFINITY_STRINGS = frozenset({"inf", "infinity"})

AttributeMarshaller = Callable[[Any], AttributeValue]


def _fail(
    value: Any, target: SemanticType, shape: RawShape, detail: str = ""
) -> ConversionError:
    if shape == RawShape.STRING:
        message = f"can't marshal {value!r} as {target}"
    else:
        message = f"can't marshal {describe(value)} as {target}"
    if detail:
        message = f"{message}: {detail}"
    return ConversionError(message, target=target, shape=shape)


def marshal_boolean(value: Any) -> AttributeValue:
    shape = classify(value)
    if shape == RawShape.BOOLEAN:
        return AttributeValue(type=SemanticType.BOOLEAN, value=value)
    if shape == RawShape.STRING:
        s = value.lower()
        if s in _TRUE_STRINGS:
            return AttributeValue(type=SemanticType.BOOLEAN, value=True)
        if s in _FALSE_STRINGS:
            return AttributeValue(type=SemanticType.BOOLEAN, value=False)
    raise _fail(value, SemanticType.BOOLEAN, shape)


def marshal_string(value: Any) -> AttributeValue:
    shape = classify(value)
    if shape == RawShape.STRING:
        return AttributeValue(type=SemanticType.STRING, value=value)
    raise _fail(value, SemanticType.STRING, shape)


def marshal_integer(value: Any) -> AttributeValue:
    """Convert to a signed 64-bit integer.

    Accepts ints within the int64 range, floats strictly inside
    (-2**53, 2**53) (truncated toward zero) and base-10 integer strings.
    """
    shape = classify(value)

    if shape == RawShape.INTEGER:
        if MIN_INT64 <= value <= MAX_INT64:
            return AttributeValue(type=SemanticType.INTEGER, value=value)
        raise _fail(value, SemanticType.INTEGER, shape, f"{value} is out of int64 range")

    if shape == RawShape.FLOAT:
        if -MAX_FLOAT64_INT < value < MAX_FLOAT64_INT:
            return AttributeValue(type=SemanticType.INTEGER, value=int(value))
        raise _fail(
            value,
            SemanticType.INTEGER,
            shape,
            f"{value:g} is outside the exact integer range of a double",
        )

    if shape == RawShape.STRING:
        if _INT_RE.fullmatch(value):
            i = int(value)
            if MIN_INT64 <= i <= MAX_INT64:
                return AttributeValue(type=SemanticType.INTEGER, value=i)
        raise _fail(value, SemanticType.INTEGER, shape)

    raise _fail(value, SemanticType.INTEGER, shape)


def marshal_float(value: Any) -> AttributeValue:
    """Convert to a double. Numbers pass without bound check, strings are parsed."""
    shape = classify(value)

    if shape == RawShape.INTEGER:
        try:
            return AttributeValue(type=SemanticType.FLOAT, value=float(value))
        except OverflowError as e:
            raise _fail(value, SemanticType.FLOAT, shape, str(e)) from e

    if shape == RawShape.FLOAT:
        return AttributeValue(type=SemanticType.FLOAT, value=value)

    if shape == RawShape.STRING:
        # float() tolerates surrounding whitespace and digit separators
        if value == value.strip() and "_" not in value:
            try:
                f = float(value)
            except ValueError:
                pass
            else:
                if not math.isinf(f) or value.lstrip("+-").lower() in _INFINITY_STRINGS:
                    return AttributeValue(type=SemanticType.FLOAT, value=f)
        raise _fail(value, SemanticType.FLOAT, shape)

    raise _fail(value, SemanticType.FLOAT, shape)


def marshal_address(value: Any) -> AttributeValue:
    shape = classify(value)
    if shape == RawShape.ADDRESS:
        if getattr(value, "scope_id", None):
            raise _fail(
                value, SemanticType.ADDRESS, shape, "zoned addresses are not supported"
            )
        return AttributeValue(type=SemanticType.ADDRESS, value=value)
    if shape == RawShape.STRING:
        # no IPv6 zone index
        if "%" in value:
            raise _fail(value, SemanticType.ADDRESS, shape)
        try:
            addr = ipaddress.ip_address(value)
        except ValueError as e:
            raise _fail(value, SemanticType.ADDRESS, shape) from e
        return AttributeValue(type=SemanticType.ADDRESS, value=addr)
    raise _fail(value, SemanticType.ADDRESS, shape)


def marshal_network(value: Any) -> AttributeValue:
    """Convert to a network. Strings must be CIDR; host bits are masked off."""
    shape = classify(value)
    if shape == RawShape.NETWORK:
        return AttributeValue(type=SemanticType.NETWORK, value=value)
    if shape == RawShape.STRING:
        _, sep, prefix = value.partition("/")
        if "%" in value or not sep or not (prefix.isascii() and prefix.isdigit()):
            raise _fail(value, SemanticType.NETWORK, shape)
        try:
            net = ipaddress.ip_network(value, strict=False)
        except ValueError as e:
            raise _fail(value, SemanticType.NETWORK, shape) from e
        return AttributeValue(type=SemanticType.NETWORK, value=net)
    raise _fail(value, SemanticType.NETWORK, shape)


def marshal_domain(value: Any) -> AttributeValue:
    shape = classify(value)
    if shape != RawShape.STRING:
        raise _fail(value, SemanticType.DOMAIN, shape)
    try:
        domain = DomainName.from_string(value)
    except ValueError as e:
        raise _fail(value, SemanticType.DOMAIN, shape, str(e)) from e
    return AttributeValue(type=SemanticType.DOMAIN, value=domain)


def marshal_list_of_strings(value: Any) -> AttributeValue:
    shape = classify(value)
    if shape != RawShape.SEQUENCE:
        raise _fail(value, SemanticType.LIST_OF_STRINGS, shape)

    for i, item in enumerate(value):
        if classify(item) != RawShape.STRING:
            raise ConversionError(
                f"can't marshal {describe(item)} at {i} as string in list of strings",
                target=SemanticType.LIST_OF_STRINGS,
                shape=shape,
            )

    return AttributeValue(type=SemanticType.LIST_OF_STRINGS, value=tuple(value))


MARSHALLERS: MappingProxyType[SemanticType, AttributeMarshaller] = MappingProxyType(
    {
        SemanticType.BOOLEAN: marshal_boolean,
        SemanticType.STRING: marshal_string,
        SemanticType.INTEGER: marshal_integer,
        SemanticType.FLOAT: marshal_float,
        SemanticType.ADDRESS: marshal_address,
        SemanticType.NETWORK: marshal_network,
        SemanticType.DOMAIN: marshal_domain,
        SemanticType.LIST_OF_STRINGS: marshal_list_of_strings,
    }
)
