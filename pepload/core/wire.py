"""Binary request wire format.

Layout (little-endian):

    u16 version (1)
    u16 assignment count
    repeated:
        u8 name length, name (UTF-8)
        u8 value tag
        payload (depends on tag)

Payloads by tag:

    0  boolean false       -
    1  boolean true        -
    2  string              u16 length + UTF-8
    3  integer             i64
    4  float               f64
    5  IPv4 address        4 bytes
    6  IPv6 address        16 bytes
    7  IPv4 network        u8 prefix + 4 bytes
    8  IPv6 network        u8 prefix + 16 bytes
    9  domain              u16 length + ASCII
    10 list of strings     u16 count + (u16 length + UTF-8) per item

Requests are serialized into a caller-provided, pre-sized buffer; running out
of space is an ``EncodingError``, never a silent truncation.
"""

import ipaddress
import logging
import struct
from collections.abc import Sequence

from .domain import DomainName
from .errors import EncodingError
from .types import SemanticType
from .values import AttributeAssignment, AttributeValue

logger = logging.getLogger(__name__)

REQUEST_VERSION = 1
DEFAULT_BUFFER_SIZE = 10240

MAX_NAME_LENGTH = 0xFF
MAX_STRING_LENGTH = 0xFFFF
MAX_ASSIGNMENTS = 0xFFFF

TAG_BOOLEAN_FALSE = 0
TAG_BOOLEAN_TRUE = 1
TAG_STRING = 2
TAG_INTEGER = 3
TAG_FLOAT = 4
TAG_IPV4_ADDRESS = 5
TAG_IPV6_ADDRESS = 6
TAG_IPV4_NETWORK = 7
TAG_IPV6_NETWORK = 8
TAG_DOMAIN = 9
TAG_LIST_OF_STRINGS = 10

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_I64 = struct.Struct("<q")
_F64 = struct.Struct("<d")
_HEADER = struct.Struct("<HH")


# =============================================================================
# Encoding
# =============================================================================


class _Writer:
    """Bounds-checked writer over a fixed-size buffer."""

    def __init__(self, buffer: bytearray):
        self.buffer = buffer
        self.offset = 0

    def _reserve(self, size: int) -> int:
        if self.offset + size > len(self.buffer):
            raise EncodingError(
                f"buffer of {len(self.buffer)} bytes is too small: "
                f"need at least {self.offset + size} bytes"
            )
        offset = self.offset
        self.offset += size
        return offset

    def pack(self, fmt: struct.Struct, *values) -> None:
        offset = self._reserve(fmt.size)
        try:
            fmt.pack_into(self.buffer, offset, *values)
        except struct.error as e:
            raise EncodingError(f"can't encode {values!r}: {e}") from e

    def raw(self, data: bytes) -> None:
        offset = self._reserve(len(data))
        self.buffer[offset : offset + len(data)] = data

    def string(self, s: str) -> None:
        data = s.encode("utf-8")
        if len(data) > MAX_STRING_LENGTH:
            raise EncodingError(
                f"string of {len(data)} bytes exceeds maximum of {MAX_STRING_LENGTH}"
            )
        self.pack(_U16, len(data))
        self.raw(data)


def _write_value(w: _Writer, value: AttributeValue) -> None:
    t = value.type
    v = value.value

    if t == SemanticType.BOOLEAN:
        w.pack(_U8, TAG_BOOLEAN_TRUE if v else TAG_BOOLEAN_FALSE)
    elif t == SemanticType.STRING:
        w.pack(_U8, TAG_STRING)
        w.string(v)
    elif t == SemanticType.INTEGER:
        w.pack(_U8, TAG_INTEGER)
        w.pack(_I64, v)
    elif t == SemanticType.FLOAT:
        w.pack(_U8, TAG_FLOAT)
        w.pack(_F64, v)
    elif t == SemanticType.ADDRESS:
        w.pack(_U8, TAG_IPV4_ADDRESS if v.version == 4 else TAG_IPV6_ADDRESS)
        w.raw(v.packed)
    elif t == SemanticType.NETWORK:
        w.pack(_U8, TAG_IPV4_NETWORK if v.version == 4 else TAG_IPV6_NETWORK)
        w.pack(_U8, v.prefixlen)
        w.raw(v.network_address.packed)
    elif t == SemanticType.DOMAIN:
        w.pack(_U8, TAG_DOMAIN)
        w.string(str(v))
    elif t == SemanticType.LIST_OF_STRINGS:
        if len(v) > MAX_STRING_LENGTH:
            raise EncodingError(
                f"list of {len(v)} strings exceeds maximum of {MAX_STRING_LENGTH}"
            )
        w.pack(_U8, TAG_LIST_OF_STRINGS)
        w.pack(_U16, len(v))
        for s in v:
            w.string(s)
    else:
        raise EncodingError(f"can't encode value of type {str(t)!r}")


def marshal_request_assignments_to_buffer(
    buffer: bytearray, assignments: Sequence[AttributeAssignment]
) -> int:
    """Serialize assignments into ``buffer``.

    Returns:
        Number of bytes written.

    Raises:
        EncodingError: If the buffer is too small or a value exceeds format limits.
    """
    if len(assignments) > MAX_ASSIGNMENTS:
        raise EncodingError(
            f"too many assignments: {len(assignments)} (maximum {MAX_ASSIGNMENTS})"
        )

    w = _Writer(buffer)
    w.pack(_HEADER, REQUEST_VERSION, len(assignments))
    for a in assignments:
        name = a.name.encode("utf-8")
        if len(name) > MAX_NAME_LENGTH:
            raise EncodingError(
                f"attribute name {a.name!r} exceeds maximum of {MAX_NAME_LENGTH} bytes"
            )
        w.pack(_U8, len(name))
        w.raw(name)
        _write_value(w, a.value)

    return w.offset


def marshal_request_assignments(
    assignments: Sequence[AttributeAssignment], size: int = DEFAULT_BUFFER_SIZE
) -> bytes:
    """Serialize assignments into a new buffer of ``size`` bytes.

    Returns:
        The used part of the buffer.
    """
    buffer = bytearray(size)
    n = marshal_request_assignments_to_buffer(buffer, assignments)
    logger.debug("Encoded %d assignments into %d bytes", len(assignments), n)
    return bytes(buffer[:n])


# =============================================================================
# Decoding
# =============================================================================


class _Reader:
    """Bounds-checked reader over an encoded message."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def _take(self, size: int) -> int:
        if self.offset + size > len(self.data):
            raise EncodingError(
                f"unexpected end of message at offset {self.offset} "
                f"(need {size} more bytes, have {len(self.data) - self.offset})"
            )
        offset = self.offset
        self.offset += size
        return offset

    def unpack(self, fmt: struct.Struct):
        values = fmt.unpack_from(self.data, self._take(fmt.size))
        return values[0] if len(values) == 1 else values

    def raw(self, size: int) -> bytes:
        offset = self._take(size)
        return bytes(self.data[offset : offset + size])

    def string(self) -> str:
        data = self.raw(self.unpack(_U16))
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"invalid UTF-8 string: {e}") from e


def _read_network(r: _Reader, size: int) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    prefix = r.unpack(_U8)
    addr = ipaddress.ip_address(r.raw(size))
    try:
        return ipaddress.ip_network((addr, prefix))
    except ValueError as e:
        raise EncodingError(f"invalid network: {e}") from e


def _read_value(r: _Reader) -> AttributeValue:
    tag = r.unpack(_U8)

    if tag in (TAG_BOOLEAN_FALSE, TAG_BOOLEAN_TRUE):
        return AttributeValue(type=SemanticType.BOOLEAN, value=tag == TAG_BOOLEAN_TRUE)
    if tag == TAG_STRING:
        return AttributeValue(type=SemanticType.STRING, value=r.string())
    if tag == TAG_INTEGER:
        return AttributeValue(type=SemanticType.INTEGER, value=r.unpack(_I64))
    if tag == TAG_FLOAT:
        return AttributeValue(type=SemanticType.FLOAT, value=r.unpack(_F64))
    if tag == TAG_IPV4_ADDRESS:
        return AttributeValue(
            type=SemanticType.ADDRESS, value=ipaddress.IPv4Address(r.raw(4))
        )
    if tag == TAG_IPV6_ADDRESS:
        return AttributeValue(
            type=SemanticType.ADDRESS, value=ipaddress.IPv6Address(r.raw(16))
        )
    if tag == TAG_IPV4_NETWORK:
        return AttributeValue(type=SemanticType.NETWORK, value=_read_network(r, 4))
    if tag == TAG_IPV6_NETWORK:
        return AttributeValue(type=SemanticType.NETWORK, value=_read_network(r, 16))
    if tag == TAG_DOMAIN:
        text = r.string()
        try:
            domain = DomainName.from_string(text)
        except ValueError as e:
            raise EncodingError(f"invalid domain {text!r}: {e}") from e
        return AttributeValue(type=SemanticType.DOMAIN, value=domain)
    if tag == TAG_LIST_OF_STRINGS:
        count = r.unpack(_U16)
        items = tuple(r.string() for _ in range(count))
        return AttributeValue(type=SemanticType.LIST_OF_STRINGS, value=items)

    raise EncodingError(f"unknown value tag {tag}")


def unmarshal_request_assignments(data: bytes) -> list[AttributeAssignment]:
    """Decode a message produced by ``marshal_request_assignments``.

    Raises:
        EncodingError: If the message is truncated, has trailing bytes,
            an unsupported version or an unknown value tag.
    """
    r = _Reader(data)
    version, count = r.unpack(_HEADER)
    if version != REQUEST_VERSION:
        raise EncodingError(
            f"unsupported request version {version} (expected {REQUEST_VERSION})"
        )

    assignments = []
    for _ in range(count):
        name_raw = r.raw(r.unpack(_U8))
        try:
            name = name_raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"invalid UTF-8 attribute name: {e}") from e
        assignments.append(AttributeAssignment(name=name, value=_read_value(r)))

    if r.offset != len(data):
        raise EncodingError(
            f"{len(data) - r.offset} trailing bytes after {count} assignments"
        )

    return assignments
