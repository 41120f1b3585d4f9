from __future__ import annotations

from typing import Any, Dict, List, Tuple

from inidoc.core.models import Document


def _join(prefix: str, key: str) -> str:
    return key if not prefix else f"{prefix}.{key}"


def flatten_document(doc: Document) -> List[Tuple[str, str]]:
    """
    Flatten a document into dot-path keys, in source order.

    Examples:
      key=1 (preamble)       -> [("key", "1")]
      [user] name=Adam       -> [("user.name", "Adam")]
    """
    out: List[Tuple[str, str]] = []
    for section in doc.sections:
        for kv in section.pairs:
            out.append((_join(section.name, kv.key), kv.value))
    return out


def document_to_dict(doc: Document) -> Dict[str, Any]:
    """Plain-data form of a document using the wire field names."""
    return doc.model_dump(mode="json", by_alias=True)
