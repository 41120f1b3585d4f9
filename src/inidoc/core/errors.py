from __future__ import annotations

from enum import IntEnum
from typing import Optional

from inidoc.core.models import ErrorKind, ParseIssue


class ExitCode(IntEnum):
    OK = 0
    PARSE_ERROR = 1
    ERROR = 2


class ParseError(Exception):
    """
    Raised when a document cannot be parsed.

    Carries the error kind and the 1-based position of the token that failed,
    so callers can tell an aborted parse apart from a short document.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        name: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.name = name
        self.line = line
        self.column = column
        self.offset = offset

    def __str__(self) -> str:
        where = self.name or "<input>"
        if self.line is not None:
            where = f"{where}:{self.line}:{self.column or 1}"
        return f"{where}: {self.message}"

    def to_issue(self) -> ParseIssue:
        return ParseIssue(
            name=self.name,
            kind=self.kind,
            message=self.message,
            line=self.line,
            column=self.column,
        )
