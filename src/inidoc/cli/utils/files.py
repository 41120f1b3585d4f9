from __future__ import annotations

import sys
from pathlib import Path

STDIN_MARK = "-"


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def write_file(path: Path, content: str, *, force: bool) -> bool:
    if path.exists() and not force:
        return False
    path.write_text(content, encoding="utf-8")
    return True


def read_source(path: Path) -> str:
    """Read a document from disk, or from stdin when path is '-'."""
    if str(path) == STDIN_MARK:
        return sys.stdin.read()
    # newline="" keeps \r\n intact; values are kept raw
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def document_name(path: Path) -> str:
    if str(path) == STDIN_MARK:
        return "stdin"
    return path.stem or path.name
