"""Null-guarded lookups and scalar coercion for raw provider payloads.

Every helper here returns ``None`` instead of raising when the input is
missing or has the wrong shape. Extractors rely on that: ``None`` means
"the payload said nothing", and nothing downstream stores it.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional


_WHITESPACE_RE = re.compile(r"\s+")

_TRUE_FLAGS = {"y", "yes", "true", "t", "1"}
_FALSE_FLAGS = {"n", "no", "false", "f", "0"}


def is_empty(value: Any) -> bool:
    """A value the merger never stores: null or the empty string."""
    return value is None or (isinstance(value, str) and value == "")


def dig(node: Any, *keys: Any) -> Any:
    """Chained lookup that tolerates missing or wrongly-typed intermediates.

    String keys index mappings, integer keys index lists.
    """
    current = node
    for key in keys:
        if isinstance(key, int) and not isinstance(key, bool):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        elif isinstance(current, dict):
            current = current.get(key)
        else:
            return None
        if current is None:
            return None
    return current


def first(*values: Any) -> Any:
    for value in values:
        if not is_empty(value):
            return value
    return None


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(value)).strip()


def as_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    cleaned = clean_text(value)
    return cleaned or None


def as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw: Any = value
    elif isinstance(value, str):
        raw = value.replace(",", "").replace("$", "").strip()
        # float() would accept "1_000".
        if not raw or "_" in raw:
            return None
    else:
        return None
    try:
        out = float(raw)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(out):
        return None
    return out


def as_int(value: Any) -> Optional[int]:
    out = as_float(value)
    if out is None:
        return None
    return int(round(out))


def as_flag(value: Any) -> Optional[bool]:
    """Provider indicator fields: ``"Y"``/``"N"`` (or real booleans).

    Anything unrecognised is treated as absent rather than ``False``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_FLAGS:
            return True
        if v in _FALSE_FLAGS:
            return False
    return None

