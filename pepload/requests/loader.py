"""Document ingestion: fixture files by extension, or literal strings."""

import logging
from pathlib import Path

from ..config import RAW_FORMATS, get_config
from ..core.errors import DocumentParseError
from ..core.models import RequestsDocument

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = frozenset({"yaml", "yml"})
JSON_EXTENSIONS = frozenset({"json"})


def _extension(data: str) -> str:
    return Path(data).suffix.lstrip(".").lower()


def load_document(data: str, raw_format: str | None = None) -> RequestsDocument:
    """Load a requests document.

    If ``data`` is a path ending in .yaml/.yml or .json, the file is read and
    parsed with the matching parser. Anything else is taken as the document
    itself, in ``raw_format`` (config default: json).

    Raises:
        DocumentParseError: If the document is malformed.
        OSError: If a fixture file can't be read.
    """
    ext = _extension(data)

    if ext in YAML_EXTENSIONS:
        logger.debug("Loading YAML requests from %s", data)
        return RequestsDocument.from_yaml(data)
    if ext in JSON_EXTENSIONS:
        logger.debug("Loading JSON requests from %s", data)
        return RequestsDocument.from_json(data)

    fmt = raw_format or get_config().defaults.raw_format
    if fmt not in RAW_FORMATS:
        raise DocumentParseError(f"unsupported document format {fmt!r}")
    logger.debug("Parsing literal %s requests document", fmt)
    return RequestsDocument.from_string(data, fmt)
