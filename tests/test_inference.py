"""Tests for raw shape classification and type inference."""

import ipaddress

import pytest

from pepload.core.errors import UnresolvableTypeError
from pepload.core.types import SemanticType
from pepload.requests.inference import infer_type
from pepload.requests.shapes import RawShape, classify


class TestClassify:
    """Tests for raw value shape classification."""

    def test_bool_before_int(self):
        assert classify(True) == RawShape.BOOLEAN
        assert classify(0) == RawShape.INTEGER

    @pytest.mark.parametrize(
        "value,shape",
        [
            ("x", RawShape.STRING),
            (2**64, RawShape.INTEGER),
            (1.5, RawShape.FLOAT),
            ([], RawShape.SEQUENCE),
            (("a",), RawShape.SEQUENCE),
            (ipaddress.ip_address("::1"), RawShape.ADDRESS),
            (ipaddress.ip_network("10.0.0.0/8"), RawShape.NETWORK),
            (None, RawShape.OTHER),
            ({"a": 1}, RawShape.OTHER),
        ],
    )
    def test_shapes(self, value, shape):
        assert classify(value) == shape


class TestInferType:
    """Tests for infer_type decision table."""

    def test_boolean(self):
        assert infer_type(True) is SemanticType.BOOLEAN
        assert infer_type(False) is SemanticType.BOOLEAN

    def test_string(self):
        assert infer_type("x") is SemanticType.STRING

    def test_strings_never_inferred_as_other_types(self):
        """Strings that look like numbers, addresses or domains stay strings."""
        for text in ("10", "3.14", "192.168.0.1", "10.0.0.0/24", "example.com"):
            assert infer_type(text) is SemanticType.STRING

    def test_native_address(self):
        assert infer_type(ipaddress.ip_address("192.168.0.1")) is SemanticType.ADDRESS
        assert infer_type(ipaddress.ip_address("2001:db8::1")) is SemanticType.ADDRESS

    def test_native_network(self):
        assert infer_type(ipaddress.ip_network("10.0.0.0/24")) is SemanticType.NETWORK

    def test_sequence_led_by_string(self):
        assert infer_type(["a", "b"]) is SemanticType.LIST_OF_STRINGS

    def test_mixed_sequence_led_by_string_is_inferred(self):
        """Only the first element decides; conversion checks the rest."""
        assert infer_type(["a", 2]) is SemanticType.LIST_OF_STRINGS

    def test_empty_sequence_fails(self):
        with pytest.raises(UnresolvableTypeError, match="empty"):
            infer_type([])

    def test_sequence_led_by_non_string_fails(self):
        with pytest.raises(UnresolvableTypeError):
            infer_type([1, "a"])

    @pytest.mark.parametrize("value", [1, -7, 2**64, 1.5, 0.0])
    def test_numbers_fail(self, value):
        with pytest.raises(UnresolvableTypeError):
            infer_type(value)

    @pytest.mark.parametrize("value", [None, {"a": "b"}, object()])
    def test_other_shapes_fail(self, value):
        with pytest.raises(UnresolvableTypeError) as exc_info:
            infer_type(value)
        assert exc_info.value.shape == RawShape.OTHER
