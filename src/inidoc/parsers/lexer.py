from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional

from inidoc.core.models import ErrorKind, ParseOptions, TokenType
from inidoc.parsers.types import Token


LEFT_BRACKET = "["
RIGHT_BRACKET = "]"
EQUAL_SIGN = "="
NEWLINE = "\n"


class LexState(str, Enum):
    START = "start"
    SECTION_OPEN = "section_open"
    SECTION_NAME = "section_name"
    SECTION_CLOSE = "section_close"
    KEY = "key"
    SEPARATOR = "separator"
    VALUE = "value"
    DONE = "done"
    FAILED = "failed"


_TERMINAL = (LexState.DONE, LexState.FAILED)


class Lexer:
    """
    Pull-based tokenizer over one fixed input string.

    Each call to next_token() runs only the state transitions needed to
    produce a single token, then returns it. After EOF or an error token the
    lexer is exhausted and next_token() returns None. Iterating a Lexer
    yields the same tokens; a Lexer can be iterated once.

    Positions: `start` marks where the pending token begins, `pos` is the
    scan cursor. Line/column of `start` are tracked incrementally.
    """

    def __init__(self, text: str, options: Optional[ParseOptions] = None) -> None:
        self.text = text or ""
        self.options = options or ParseOptions()
        self.state = LexState.START
        self.start = 0
        self.pos = 0
        self._line = 1
        self._col = 1
        self._start_line = 1
        self._start_col = 1

    # ----------------------------
    # Iteration
    # ----------------------------

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok is None:
                return
            yield tok

    @property
    def finished(self) -> bool:
        return self.state in _TERMINAL

    def next_token(self) -> Optional[Token]:
        tok: Optional[Token] = None
        while tok is None and self.state not in _TERMINAL:
            tok = self._step()
        return tok

    def _step(self) -> Optional[Token]:
        s = self.state
        if s == LexState.START:
            return self._lex_start()
        if s == LexState.SECTION_OPEN:
            return self._lex_punct(TokenType.SECTION_OPEN, LexState.SECTION_NAME)
        if s == LexState.SECTION_NAME:
            return self._lex_section_name()
        if s == LexState.SECTION_CLOSE:
            return self._lex_punct(TokenType.SECTION_CLOSE, LexState.START)
        if s == LexState.KEY:
            return self._lex_key()
        if s == LexState.SEPARATOR:
            return self._lex_punct(TokenType.SEPARATOR, LexState.VALUE)
        if s == LexState.VALUE:
            return self._lex_value()
        raise RuntimeError(f"lexer stepped in terminal state {s.value}")

    # ----------------------------
    # Cursor helpers
    # ----------------------------

    def _peek(self) -> str:
        """Next character or "" at end of input."""
        if self.pos >= len(self.text):
            return ""
        return self.text[self.pos]

    def _advance(self) -> str:
        ch = self._peek()
        if not ch:
            return ch
        self.pos += 1
        if ch == NEWLINE:
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _ignore(self) -> None:
        self.start = self.pos
        self._start_line = self._line
        self._start_col = self._col

    def _emit(self, ttype: TokenType) -> Token:
        tok = Token(
            type=ttype,
            value=self.text[self.start:self.pos],
            offset=self.start,
            line=self._start_line,
            column=self._start_col,
        )
        self._ignore()
        return tok

    def _error(self, kind: ErrorKind, message: str) -> Token:
        # reported at the scan cursor, which sits on the offending character
        tok = Token(
            type=TokenType.ERROR,
            value=message,
            offset=self.pos,
            line=self._line,
            column=self._col,
            error_kind=kind,
        )
        self.state = LexState.FAILED
        return tok

    # ----------------------------
    # States
    # ----------------------------

    def _lex_start(self) -> Optional[Token]:
        while True:
            ch = self._peek()
            if not ch:
                self.state = LexState.DONE
                return self._emit(TokenType.EOF)
            if ch == LEFT_BRACKET:
                self.state = LexState.SECTION_OPEN
                return None
            if ch.isspace():
                self._advance()
                self._ignore()
                continue
            if ch.isalpha():
                self.state = LexState.KEY
                return None

            if self.options.stray_characters == "skip":
                self._advance()
                self._ignore()
                continue
            return self._error(
                ErrorKind.UNEXPECTED_CHARACTER,
                f"unexpected character {ch!r}: expected a section header or a key",
            )

    def _lex_punct(self, ttype: TokenType, then: LexState) -> Token:
        # entered only with the delimiter under the cursor
        self._advance()
        self.state = then
        return self._emit(ttype)

    def _lex_section_name(self) -> Token:
        while True:
            ch = self._peek()
            if ch == RIGHT_BRACKET:
                if self.pos == self.start:
                    return self._error(ErrorKind.INVALID_SECTION_NAME, "empty section name")
                self.state = LexState.SECTION_CLOSE
                return self._emit(TokenType.SECTION_NAME)
            if not ch or ch == NEWLINE:
                return self._error(
                    ErrorKind.UNCLOSED_SECTION,
                    f"unclosed section: expected {RIGHT_BRACKET!r} before end of line",
                )
            if not ch.isalpha():
                return self._error(
                    ErrorKind.INVALID_SECTION_NAME,
                    f"invalid section name: {ch!r} is not a letter",
                )
            self._advance()

    def _lex_key(self) -> Token:
        while True:
            ch = self._peek()
            if ch == EQUAL_SIGN:
                self.state = LexState.SEPARATOR
                return self._emit(TokenType.KEY)
            if not ch or ch == NEWLINE:
                return self._error(
                    ErrorKind.UNASSIGNED_KEY,
                    f"unassigned key {self.text[self.start:self.pos]!r}: expected {EQUAL_SIGN!r}",
                )
            if not ch.isalpha():
                return self._error(
                    ErrorKind.INVALID_KEY,
                    f"invalid key: {ch!r} is not a letter",
                )
            self._advance()

    def _lex_value(self) -> Token:
        while True:
            ch = self._peek()
            if ch == NEWLINE:
                self.state = LexState.START
                return self._emit(TokenType.VALUE)
            if not ch:
                return self._error(
                    ErrorKind.UNEXPECTED_END_OF_INPUT,
                    "unexpected end of input: value must end with a newline",
                )
            self._advance()


def tokenize(text: str, options: Optional[ParseOptions] = None) -> Lexer:
    """Fresh single-use token iterator over `text`."""
    return Lexer(text, options)
