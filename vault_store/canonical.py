from __future__ import annotations

import json
from typing import Any, Mapping


def canonicalize(value: Any) -> Any:
    """
    Return a copy of `value` with every mapping's keys sorted, recursively.

    Sequence order is preserved; only mapping key order changes.
    """
    if isinstance(value, Mapping):
        return {k: canonicalize(value[k]) for k in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [canonicalize(v) for v in value]
    return value


def encode_document(doc: Mapping[str, Any], *, indent: int = 2) -> str:
    """Canonical plaintext for a document: sorted keys, fixed indent, trailing newline."""
    return json.dumps(canonicalize(doc), indent=indent, sort_keys=True, ensure_ascii=False) + "\n"


def decode_document(text: str) -> Any:
    # Raises ValueError (json.JSONDecodeError) on malformed input.
    return json.loads(text)
