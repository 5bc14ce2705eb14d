"""
Canonical JSON

Implements the Amino JSON sign-bytes encoding: object keys sorted
lexicographically at every nesting level, no extra whitespace, UTF-8 output,
and the HTML-sensitive characters &, < and > escaped as \\u0026, \\u003c and
\\u003e so the bytes match what chain-side verifiers serialize.
"""

import json
from typing import Any

from .runtime.errors import EncodingError

_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
)


def dumps_canonical(obj: Any) -> str:
    """
    Encode object as canonical JSON string.

    Args:
        obj: Object to encode (dict, list, str, int, bool, None)

    Returns:
        Canonical JSON string with sorted keys and no extra whitespace

    Raises:
        EncodingError: If the object contains floats or non-JSON values
    """
    try:
        text = json.dumps(_canonicalize(obj), separators=(',', ':'), ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Value is not canonical-JSON encodable: {e}", cause=e)
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def dumps_canonical_bytes(obj: Any) -> bytes:
    """UTF-8 bytes of dumps_canonical(obj)."""
    return dumps_canonical(obj).encode("utf-8")


def _canonicalize(v: Any) -> Any:
    """
    Recursively canonicalize a value.

    - Maps: Sort keys lexicographically, recursively canonicalize values
    - Lists/tuples: Recursively canonicalize elements, preserve order
    - Floats: rejected, amounts must already be decimal strings
    """
    if isinstance(v, dict):
        return {str(k): _canonicalize(v[k]) for k in sorted(v.keys(), key=str)}
    elif isinstance(v, (list, tuple)):
        return [_canonicalize(item) for item in v]
    elif isinstance(v, float):
        raise EncodingError(f"Floating point value {v!r} in canonical document")
    else:
        return v
