from __future__ import annotations

from inidoc.parsers.builder import DocumentBuilder, build_document, parse, try_parse
from inidoc.parsers.common import document_to_dict, flatten_document
from inidoc.parsers.lexer import Lexer, LexState, tokenize
from inidoc.parsers.types import Token

__all__ = [
    "DocumentBuilder",
    "LexState",
    "Lexer",
    "Token",
    "build_document",
    "document_to_dict",
    "flatten_document",
    "parse",
    "tokenize",
    "try_parse",
]
