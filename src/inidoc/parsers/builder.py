from __future__ import annotations

from typing import Iterable, List, Optional

from inidoc.core.errors import ParseError
from inidoc.core.models import (
    Document,
    ErrorKind,
    KeyValuePair,
    ParseOptions,
    ParseResult,
    Section,
    TokenType,
)
from inidoc.parsers.lexer import tokenize
from inidoc.parsers.types import Token


class DocumentBuilder:
    """
    Assemble a Document from a token stream.

    The current section is kept as a name plus a list of pairs and frozen into
    a Section only when it is flushed to the document.
    """

    def __init__(self, name: str, options: Optional[ParseOptions] = None) -> None:
        self.name = name
        self.options = options or ParseOptions()
        self._sections: List[Section] = []
        self._current_name = ""
        self._current_pairs: List[KeyValuePair] = []
        self._pending: Optional[Token] = None
        self._done = False

    def _fail(self, kind: ErrorKind, message: str, tok: Token) -> ParseError:
        return ParseError(
            kind,
            message,
            name=self.name,
            line=tok.line,
            column=tok.column,
            offset=tok.offset,
        )

    def _check_no_pending(self) -> None:
        if self._pending is not None:
            raise self._fail(
                ErrorKind.DANGLING_KEY,
                f"key {self._pending.value!r} has no value",
                self._pending,
            )

    def _flush(self, *, force: bool = False) -> None:
        keep = force or bool(self._current_pairs)
        if not keep and self.options.keep_empty_sections and self._current_name:
            keep = True
        if keep:
            self._sections.append(
                Section(name=self._current_name, pairs=tuple(self._current_pairs))
            )

    def feed(self, tok: Token) -> bool:
        """
        Apply one token. Returns True once the document is complete.
        Raises ParseError for error tokens and for malformed streams.
        """
        if self._done:
            raise RuntimeError("builder already finished")

        t = tok.type
        if t == TokenType.ERROR:
            self._done = True
            raise self._fail(tok.error_kind or ErrorKind.UNEXPECTED_CHARACTER, tok.value, tok)

        if t == TokenType.SECTION_NAME:
            self._check_no_pending()
            self._flush()
            self._current_name = tok.value
            self._current_pairs = []

        elif t == TokenType.KEY:
            self._check_no_pending()
            self._pending = tok

        elif t == TokenType.VALUE:
            if self._pending is None:
                raise self._fail(ErrorKind.ORPHAN_VALUE, "value without a key", tok)
            self._current_pairs.append(KeyValuePair(key=self._pending.value, value=tok.value))
            self._pending = None

        elif t == TokenType.EOF:
            self._check_no_pending()
            # always flushed so a document has at least one section
            self._flush(force=True)
            self._done = True

        return self._done

    def build(self) -> Document:
        if not self._done:
            raise RuntimeError("token stream ended before EOF")
        return Document(name=self.name, sections=tuple(self._sections))


def build_document(
    name: str,
    tokens: Iterable[Token],
    options: Optional[ParseOptions] = None,
) -> Document:
    builder = DocumentBuilder(name, options)
    for tok in tokens:
        if builder.feed(tok):
            break
    return builder.build()


def parse(name: str, text: str, options: Optional[ParseOptions] = None) -> Document:
    """
    Parse `text` into a Document named `name`.

    Raises ParseError on malformed input; a returned Document is always
    complete.
    """
    return build_document(name, tokenize(text, options), options)


def try_parse(name: str, text: str, options: Optional[ParseOptions] = None) -> ParseResult:
    try:
        doc = parse(name, text, options)
    except ParseError as e:
        return ParseResult(name=name, error=e.to_issue())
    return ParseResult(name=name, document=doc)
