from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ================================
# Enums
# ================================


class TokenType(str, Enum):
    SECTION_OPEN = "section_open"
    SECTION_CLOSE = "section_close"
    SECTION_NAME = "section_name"
    KEY = "key"
    SEPARATOR = "separator"
    VALUE = "value"
    EOF = "eof"
    ERROR = "error"


class ErrorKind(str, Enum):
    UNCLOSED_SECTION = "unclosed_section"
    INVALID_SECTION_NAME = "invalid_section_name"
    UNASSIGNED_KEY = "unassigned_key"
    INVALID_KEY = "invalid_key"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    UNEXPECTED_CHARACTER = "unexpected_character"
    DANGLING_KEY = "dangling_key"
    ORPHAN_VALUE = "orphan_value"


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"
    FLAT = "flat"


# ================================
# Document tree
# ================================


class KeyValuePair(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class Section(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    pairs: Tuple[KeyValuePair, ...] = Field(default=(), alias="keyValuePairs")

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Last value written for `key` in this section."""
        for kv in reversed(self.pairs):
            if kv.key == key:
                return kv.value
        return default

    def keys(self) -> List[str]:
        return [kv.key for kv in self.pairs]


class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    sections: Tuple[Section, ...] = Field(default=())

    def section(self, name: str) -> Optional[Section]:
        for s in self.sections:
            if s.name == name:
                return s
        return None

    def section_names(self) -> List[str]:
        return [s.name for s in self.sections]

    def pair_count(self) -> int:
        return sum(len(s.pairs) for s in self.sections)


# ================================
# Parse outcome
# ================================


class ParseIssue(BaseModel):
    name: str
    kind: ErrorKind
    message: str
    line: Optional[int] = None
    column: Optional[int] = None


class ParseResult(BaseModel):
    name: str
    document: Optional[Document] = None
    error: Optional[ParseIssue] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.document is not None


# ================================
# Options (defaults only)
# ================================


class ParseOptions(BaseModel):
    """
    Parser behavior. Defaults live here.
    Repo/global/CLI overrides are merged by core/config.py.
    """

    keep_empty_sections: bool = Field(
        default=False,
        description="Keep named sections that collected no pairs before the next header.",
    )
    stray_characters: Literal["error", "skip"] = Field(
        default="error",
        description="What to do with a top-level character that starts neither a section nor a key.",
    )


class OutputConfig(BaseModel):
    format: OutputFormat = Field(default=OutputFormat.JSON)
    indent: int = Field(default=2, ge=0, le=8)
