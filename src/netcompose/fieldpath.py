"""
Field path lookups into nested resource documents.

A field path is a dotted path with optional list indices, e.g.
``spec.id`` or ``spec.forProvider.tags[0].key``. ``get_value`` raises
FieldPathError when a segment is missing, the typed getters additionally
raise when the value has the wrong type. Callers that want best-effort
lookups catch FieldPathError and fall back to a zero value.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from netcompose.models import FieldPathError

_PART = re.compile(r"([^.\[\]]+)((?:\[\d+\])*)")
_INDEX = re.compile(r"\[(\d+)\]")


def parse(path: str) -> list[str | int]:
    """split a field path into field names and list indices"""
    if not path:
        raise FieldPathError("empty field path")
    segments: list[str | int] = []
    for part in path.split("."):
        match = _PART.fullmatch(part)
        if match is None:
            raise FieldPathError(f"invalid segment '{part}' in field path '{path}'")
        segments.append(match.group(1))
        segments.extend(int(idx) for idx in _INDEX.findall(match.group(2)))
    return segments


def get_value(obj: Any, path: str) -> Any:
    """return the value at path, raise FieldPathError if it does not exist"""
    current = obj
    walked = ""
    for segment in parse(path):
        if isinstance(segment, int):
            if isinstance(current, (str, bytes)) or not isinstance(current, Sequence):
                raise FieldPathError(f"{path}: {walked or 'value'} is not an array")
            if segment >= len(current):
                raise FieldPathError(f"{path}: index {segment} is out of bounds")
            current = current[segment]
            walked = f"{walked}[{segment}]"
            continue
        if not isinstance(current, Mapping):
            raise FieldPathError(f"{path}: {walked or 'value'} is not an object")
        if segment not in current:
            raise FieldPathError(f"{path}: no such field")
        current = current[segment]
        walked = f"{walked}.{segment}" if walked else segment
    return current


def get_string(obj: Any, path: str) -> str:
    value = get_value(obj, path)
    if not isinstance(value, str):
        raise FieldPathError(f"{path}: not a string")
    return value


def get_integer(obj: Any, path: str) -> int:
    """return an integer, whole floats are accepted since JSON numbers and
    protobuf Struct values are decoded as floats"""
    value = get_value(obj, path)
    if isinstance(value, bool):
        raise FieldPathError(f"{path}: not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise FieldPathError(f"{path}: not an integer")


def get_bool(obj: Any, path: str) -> bool:
    value = get_value(obj, path)
    if not isinstance(value, bool):
        raise FieldPathError(f"{path}: not a bool")
    return value
