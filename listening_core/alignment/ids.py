"""Deterministic identifiers for tokens, events and phrase spans."""
from __future__ import annotations

import hashlib
import json
from typing import Any, Callable, Dict

Hasher = Callable[[Dict[str, Any]], str]

ID_LENGTH = 12


def stable_id(fields: Dict[str, Any]) -> str:
    """SHA-1 of the canonical JSON encoding of ``fields``, truncated to 12 hex chars.

    The same fields always produce the same id, across processes and runs.
    """
    payload = json.dumps(fields, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()[:ID_LENGTH]
