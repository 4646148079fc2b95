# src/divan/core/encoder.py
"""
Flat record -> JSON object text.

A record maps field names to one of:

    str | int | float | list/tuple of (str | int | float)

Anything else (bool, None, nan/inf, nested mappings, objects) is dropped
from the output. Strings are quoted verbatim unless escape=True, so a value
holding a double quote produces invalid JSON in the default mode.
"""

import dataclasses
import json
import math
from typing import Any, Mapping

from divan.core.errors import ValidationError


def as_record(obj: Any) -> Mapping[str, Any]:
    """Field mapping for a dict, dataclass instance, or plain object."""
    if isinstance(obj, Mapping):
        return obj
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if hasattr(obj, "__dict__") and not isinstance(obj, type):
        return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
    raise ValidationError(f"Cannot encode {type(obj).__name__} as a record")


def _quote(text: str, escape: bool) -> str:
    if escape:
        return json.dumps(text, ensure_ascii=False)
    return f'"{text}"'


def _scalar(value: Any, escape: bool) -> str | None:
    match value:
        case bool():
            return None
        case str():
            return _quote(value, escape)
        case int():
            return str(int(value))
        case float() if not math.isfinite(value):
            return None
        case float():
            return repr(float(value))
        case _:
            return None


def _value(value: Any, escape: bool) -> str | None:
    match value:
        case list() | tuple():
            items = [_scalar(v, escape) for v in value]
            return "[" + ",".join(i for i in items if i is not None) + "]"
        case _:
            return _scalar(value, escape)


def encode(record: Any, *, escape: bool = False) -> str:
    """Encode a flat record as a JSON object, one field per line."""
    fields = as_record(record)

    pairs = []
    for key, value in fields.items():
        formatted = _value(value, escape)
        if formatted is None:
            continue
        pairs.append(f"{_quote(str(key), escape)}: {formatted}")

    if not pairs:
        return "{}"
    return "{\n" + ",\n".join(pairs) + "\n}"
