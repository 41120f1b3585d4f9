r"""
inidoc: parse INI-style configuration text into an ordered document tree.

    >>> from inidoc import parse
    >>> doc = parse("app", "[user]\nname=Adam\n")
    >>> doc.sections[0].name, doc.sections[0].pairs[0].value
    ('user', 'Adam')
"""
from __future__ import annotations

from inidoc.core.errors import ExitCode, ParseError
from inidoc.core.models import (
    Document,
    ErrorKind,
    KeyValuePair,
    ParseIssue,
    ParseOptions,
    ParseResult,
    Section,
    TokenType,
)
from inidoc.parsers import Lexer, Token, parse, tokenize, try_parse

__version__ = "0.1.0"

__all__ = [
    "Document",
    "ErrorKind",
    "ExitCode",
    "KeyValuePair",
    "Lexer",
    "ParseError",
    "ParseIssue",
    "ParseOptions",
    "ParseResult",
    "Section",
    "Token",
    "TokenType",
    "parse",
    "tokenize",
    "try_parse",
]
