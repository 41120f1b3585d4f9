from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from inidoc.core.models import ErrorKind, TokenType


@dataclass(frozen=True)
class Token:
    """A classified slice of the input, positioned where it starts."""
    type: TokenType
    value: str
    offset: int = 0
    line: int = 1
    column: int = 1
    error_kind: Optional[ErrorKind] = None

    @property
    def is_terminal(self) -> bool:
        return self.type in (TokenType.EOF, TokenType.ERROR)

    def __str__(self) -> str:
        if self.type == TokenType.EOF:
            return "EOF"
        if self.type == TokenType.ERROR:
            return self.value
        if len(self.value) > 10:
            return repr(self.value[:10]) + "..."
        return repr(self.value)
