"""Validated domain names."""

import re
from dataclasses import dataclass

MAX_LABEL_LENGTH = 63
MAX_NAME_LENGTH = 253

_LABEL_RE = re.compile(r"^[a-z0-9_](?:[a-z0-9_-]*[a-z0-9_])?$")


@dataclass(frozen=True)
class DomainName:
    """A domain name split into lowercased labels, leftmost label first.

    Build instances with ``DomainName.from_string``; the constructor does not
    validate.
    """

    labels: tuple[str, ...]

    @classmethod
    def from_string(cls, text: str) -> "DomainName":
        """Parse and validate a domain name.

        Rules:
        - one trailing dot (fully qualified form) is allowed and dropped
        - labels are 1-63 characters of letters, digits, '-' and '_'
        - labels don't start or end with '-'
        - a lone '*' is allowed as the leftmost label
        - the whole name is at most 253 characters

        Raises:
            ValueError: If the name violates any rule.
        """
        name = text[:-1] if text.endswith(".") else text
        if not name:
            raise ValueError("empty domain name")
        if not name.isascii():
            raise ValueError("domain name must be ASCII")
        if len(name) > MAX_NAME_LENGTH:
            raise ValueError(
                f"domain name is {len(name)} characters long, "
                f"maximum is {MAX_NAME_LENGTH}"
            )

        labels = tuple(name.lower().split("."))
        for i, label in enumerate(labels):
            if not label:
                raise ValueError(f"empty label at position {i}")
            if len(label) > MAX_LABEL_LENGTH:
                raise ValueError(
                    f"label {label!r} is {len(label)} characters long, "
                    f"maximum is {MAX_LABEL_LENGTH}"
                )
            if label == "*" and i == 0:
                continue
            if not _LABEL_RE.match(label):
                raise ValueError(f"invalid label {label!r}")

        return cls(labels=labels)

    def __str__(self) -> str:
        return ".".join(self.labels)
