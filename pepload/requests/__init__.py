"""Type resolution and value marshalling for request fixtures.

- shapes: raw value shape classification
- inference: type inference for undeclared attributes
- marshallers: per-type conversion routines and their registry
- symbols: symbol table of declared attribute types
- resolver: single attribute resolution
- assembler: document-level conversion and encoding
- loader: document ingestion from files or literal strings
"""

from .shapes import RawShape, classify
from .inference import infer_type
from .marshallers import MARSHALLERS, MAX_FLOAT64_INT
from .symbols import SymbolTable
from .resolver import make_attribute
from .loader import load_document
from .assembler import assemble_requests, convert_requests, wire_encoder, load

__all__ = [
    "RawShape",
    "classify",
    "infer_type",
    "MARSHALLERS",
    "MAX_FLOAT64_INT",
    "SymbolTable",
    "make_attribute",
    "load_document",
    "assemble_requests",
    "convert_requests",
    "wire_encoder",
    "load",
]
