"""Tests for document-level request assembly."""

import ipaddress
import logging

import pytest

from pepload.core.errors import (
    EncodingError,
    InvalidAttributeError,
    InvalidRequestError,
    UnknownDeclaredTypeError,
)
from pepload.core.models import RequestsDocument
from pepload.core.types import SemanticType
from pepload.core.values import RequestMessage
from pepload.core.wire import unmarshal_request_assignments
from pepload.requests.assembler import (
    assemble_requests,
    convert_requests,
    load,
    wire_encoder,
)


def _doc(attributes=None, requests=None) -> RequestsDocument:
    return RequestsDocument(attributes=attributes or {}, requests=requests or [])


def _values(assignments) -> dict:
    return {a.name: a.value.value for a in assignments}


class TestConvertRequests:
    """Scenario tests for convert_requests."""

    def test_declared_integer_from_string(self):
        batch = convert_requests(_doc({"age": "integer"}, [{"age": "30"}]))
        assert len(batch) == 1
        (a,) = batch[0]
        assert a.type is SemanticType.INTEGER
        assert a.value.value == 30

    def test_inferred_boolean(self):
        batch = convert_requests(_doc(requests=[{"flag": True}]))
        (a,) = batch[0]
        assert a.type is SemanticType.BOOLEAN
        assert a.value.value is True

    def test_declared_network(self):
        batch = convert_requests(_doc({"net": "network"}, [{"net": "10.0.0.0/24"}]))
        (a,) = batch[0]
        assert a.type is SemanticType.NETWORK
        assert a.value.value == ipaddress.ip_network("10.0.0.0/24")

    def test_empty_document(self):
        assert convert_requests(_doc()) == []

    def test_empty_request(self):
        assert convert_requests(_doc(requests=[{}])) == [[]]

    def test_batch_order_preserved(self):
        requests = [{"n": str(i)} for i in range(10)]
        batch = convert_requests(_doc({"n": "integer"}, requests))
        assert [_values(b)["n"] for b in batch] == list(range(10))

    def test_mixed_declared_and_inferred(self):
        batch = convert_requests(
            _doc(
                {"age": "integer", "rate": "float", "host": "domain"},
                [
                    {
                        "age": 42,
                        "rate": "3.14",
                        "host": "example.com",
                        "user": "alice",
                        "groups": ["admin", "dev"],
                    }
                ],
            )
        )
        values = _values(batch[0])
        assert values["age"] == 42
        assert values["rate"] == 3.14
        assert str(values["host"]) == "example.com"
        assert values["user"] == "alice"
        assert values["groups"] == ("admin", "dev")

    def test_later_request_failure_aborts_batch(self):
        doc = _doc(
            {"host": "domain"},
            [{"host": "example.com"}, {"host": "bad..domain"}],
        )
        with pytest.raises(InvalidRequestError) as exc_info:
            convert_requests(doc)
        err = exc_info.value
        assert err.index == 2
        assert "request 2" in str(err)
        assert isinstance(err.__cause__, InvalidAttributeError)
        assert err.__cause__.attribute == "host"

    def test_unknown_type_fails_before_requests(self, monkeypatch):
        from pepload.requests import assembler

        def fail(*args, **kwargs):
            raise AssertionError("no request may be processed")

        monkeypatch.setattr(assembler, "make_attribute", fail)
        with pytest.raises(UnknownDeclaredTypeError):
            convert_requests(_doc({"x": "blob"}, [{"x": "1"}]))

    def test_undeclared_number_fails(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            convert_requests(_doc(requests=[{"count": 3}]))
        assert exc_info.value.index == 1


class TestAssembleRequests:
    """Tests for assemble_requests with an encoder."""

    def test_encoder_called_per_request_in_order(self):
        seen = []

        def encoder(attrs):
            seen.append(_values(attrs))
            return len(seen)

        doc = _doc({"n": "integer"}, [{"n": 1}, {"n": 2}, {"n": 3}])
        assert assemble_requests(doc, encoder) == [1, 2, 3]
        assert seen == [{"n": 1}, {"n": 2}, {"n": 3}]

    def test_encoding_error_carries_request_index(self):
        def encoder(attrs):
            raise EncodingError("buffer too small")

        with pytest.raises(EncodingError) as exc_info:
            assemble_requests(_doc(requests=[{"a": "x"}]), encoder)
        err = exc_info.value
        assert err.index == 1
        assert "request 1" in str(err)
        assert "buffer too small" in str(err)
        assert isinstance(err.__cause__, EncodingError)

    def test_wire_encoder_too_small_buffer(self):
        doc = _doc(requests=[{"s": "x" * 100}])
        with pytest.raises(EncodingError) as exc_info:
            assemble_requests(doc, wire_encoder(16))
        assert exc_info.value.index == 1

    def test_logs_assembly(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pepload"):
            assemble_requests(_doc(requests=[{"a": "x"}]), list)
        assert "Assembled 1 requests" in caplog.text


class TestLoad:
    """Tests for the document-level load entry point."""

    def test_load_literal_json(self):
        messages = load(
            '{"attributes": {"age": "integer"}, '
            '"requests": [{"age": "30"}, {"ok": true}]}'
        )
        assert len(messages) == 2
        assert all(isinstance(m, RequestMessage) for m in messages)
        first = unmarshal_request_assignments(messages[0].body)
        assert _values(first) == {"age": 30}
        second = unmarshal_request_assignments(messages[1].body)
        assert _values(second) == {"ok": True}

    def test_load_yaml_file(self, tmp_path):
        path = tmp_path / "requests.yaml"
        path.write_text(
            "attributes:\n"
            "  addr: address\n"
            "requests:\n"
            "  - addr: 192.168.1.1\n"
            "    tags: [a, b]\n"
        )
        (msg,) = load(str(path))
        decoded = _values(unmarshal_request_assignments(msg.body))
        assert decoded == {
            "addr": ipaddress.ip_address("192.168.1.1"),
            "tags": ("a", "b"),
        }

    def test_load_uses_configured_buffer_size(self):
        from pepload.config import DefaultsConfig, PepLoadConfig, configure

        configure(PepLoadConfig(defaults=DefaultsConfig(buffer_size=8)))
        with pytest.raises(EncodingError):
            load('{"requests": [{"a": "hello"}]}')

    def test_explicit_size_overrides_config(self):
        (msg,) = load('{"requests": [{"a": "hello"}]}', size=64)
        assert len(msg.body) < 64
