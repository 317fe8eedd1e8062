"""
Decoding of primitives returned by the page script engine.

The engine hands back whatever `returnByValue` produced (str, bool, int,
float or None). Raw accessors surface that value as text the way the page
itself would print it; typed helpers parse the text strictly and raise
`DecodeFailure` instead of falling back to a default. Objects and arrays
raise `DecodeFailure` with kind `non-primitive`.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, TypeVar

from .errors import DecodeFailure, ScriptResultMissing

E = TypeVar("E", bound=Enum)

_INT_RE = re.compile(r"[+-]?\d+")


def as_text(raw: Any, statement: str = "") -> str:
    if raw is None:
        raise ScriptResultMissing(statement)
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        if math.isnan(raw):
            return "NaN"
        if math.isinf(raw):
            return "Infinity" if raw > 0 else "-Infinity"
        if raw.is_integer():
            return str(int(raw))
        return repr(raw)
    # Objects and arrays are not primitives; the bridge never stringifies them.
    raise DecodeFailure(raw=raw, target="text", statement=statement, kind="non-primitive")


def decode_bool(raw: Any, statement: str = "") -> bool:
    if isinstance(raw, bool):
        return raw
    text = as_text(raw, statement).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise DecodeFailure(raw=raw, target="bool", statement=statement)


def decode_int(raw: Any, statement: str = "") -> int:
    if isinstance(raw, bool):
        raise DecodeFailure(raw=raw, target="int", statement=statement)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    text = as_text(raw, statement).strip()
    if not _INT_RE.fullmatch(text):
        raise DecodeFailure(raw=raw, target="int", statement=statement)
    return int(text)


def decode_float(raw: Any, statement: str = "") -> float:
    if isinstance(raw, bool):
        raise DecodeFailure(raw=raw, target="float", statement=statement)
    if isinstance(raw, (int, float)):
        return float(raw)
    text = as_text(raw, statement).strip()
    try:
        return float(text)
    except ValueError as exc:
        raise DecodeFailure(raw=raw, target="float", statement=statement) from exc


def decode_enum(raw: Any, enum_cls: type[E], statement: str = "") -> E:
    """Match the returned text against member values first, then member names (case-insensitive)."""
    text = as_text(raw, statement).strip()
    for member in enum_cls:
        if str(member.value) == text:
            return member
    folded = text.casefold()
    for member in enum_cls:
        if member.name.casefold() == folded:
            return member
    raise DecodeFailure(raw=raw, target=enum_cls.__name__, statement=statement)


__all__ = [
    "as_text",
    "decode_bool",
    "decode_enum",
    "decode_float",
    "decode_int",
]
