"""Request fixture document model and its YAML/JSON I/O.

A fixture declares attribute types and an ordered batch of requests:

    attributes:
      age: integer
      net: network
    requests:
      - age: "30"
        net: 10.0.0.0/24
        flag: true

Raw request values are kept exactly as the parser produced them; type
resolution and conversion happen later in ``pepload.requests``.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import DocumentParseError


class RequestsDocument(BaseModel):
    """Declared attribute types plus the batch of raw requests."""

    attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Attribute name -> builtin type name (case-insensitive)",
    )
    requests: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Ordered requests, each a mapping of attribute name -> raw value",
    )

    @classmethod
    def from_data(cls, data: Any) -> "RequestsDocument":
        """Validate already-decoded document data.

        Raises:
            DocumentParseError: If the data doesn't have the document shape.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DocumentParseError(
                f"expected a mapping at document top level, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DocumentParseError(f"invalid requests document: {e}") from e

    @classmethod
    def from_string(cls, text: str, fmt: str = "json") -> "RequestsDocument":
        """Parse a document from a raw JSON or YAML string."""
        if fmt == "json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise DocumentParseError(f"can't parse JSON document: {e}") from e
        elif fmt == "yaml":
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise DocumentParseError(f"can't parse YAML document: {e}") from e
        else:
            raise DocumentParseError(f"unsupported document format {fmt!r}")

        return cls.from_data(data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "RequestsDocument":
        """Load document from YAML file."""
        path = Path(path)

        with open(path) as f:
            text = f.read()

        return cls.from_string(text, "yaml")

    @classmethod
    def from_json(cls, path: Path | str) -> "RequestsDocument":
        """Load document from JSON file."""
        path = Path(path)

        with open(path) as f:
            text = f.read()

        return cls.from_string(text, "json")
