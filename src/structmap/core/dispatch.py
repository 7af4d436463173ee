"""Per-value kind classification and conversion to plain Python values."""

from __future__ import annotations

import datetime
import decimal
import enum
import numbers
import pathlib
import types
import typing
import uuid
from collections.abc import Iterator, Mapping, Sequence, Set
from typing import Any

from structmap.core.records import describe_fields, field_value, is_record
from structmap.core.tags import Flag, TagDirective

# Returned by dispatch_value when a value produces no output entry
DROPPED = object()

_SCALAR_TYPES = (
    enum.Enum,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    pathlib.PurePath,
)
_CONTAINER_TYPES = (Mapping, Sequence, Set, Iterator, bytes, bytearray, memoryview)


class Kind(enum.Enum):
    NIL = "nil"
    ANY = "any"
    BOOL = "bool"
    STRING = "string"
    RECORD = "record"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    SCALAR = "scalar"
    CONTAINER = "container"
    UNSUPPORTED = "unsupported"


def classify(value: Any, declared: Any = None) -> Kind:
    """Decide how a field value is handled.

    ``declared`` is the field's annotation; fields declared as ``Any`` or
    ``object`` hold their value opaquely and are never inspected further.
    """
    if value is None:
        return Kind.NIL
    if declared is Any or declared is object:
        return Kind.ANY
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, str):
        return Kind.STRING
    if is_record(value):
        return Kind.RECORD
    if isinstance(value, numbers.Integral):
        return Kind.INT
    if isinstance(value, numbers.Real):
        return Kind.FLOAT
    if isinstance(value, numbers.Complex):
        return Kind.COMPLEX
    if isinstance(value, _SCALAR_TYPES):
        return Kind.SCALAR
    if isinstance(value, _CONTAINER_TYPES):
        return Kind.CONTAINER
    return Kind.UNSUPPORTED


def dispatch_value(value: Any, kind: Kind, directive: TagDirective) -> Any:
    """Convert a non-record value, or return ``DROPPED``."""
    if kind in (Kind.NIL, Kind.UNSUPPORTED):
        return DROPPED
    if kind is Kind.RECORD:
        raise ValueError("record values are composed by the mapper, not dispatched")
    if kind is Kind.BOOL:
        return bool(value)
    if kind is Kind.INT:
        return int(value)
    if kind is Kind.FLOAT:
        return float(value)
    if kind is Kind.COMPLEX:
        return complex(value)
    if kind is Kind.STRING:
        text = str.__str__(value)
        if directive.has(Flag.WILDCARD):
            return f"%{text}%"
        return text
    # ANY, SCALAR and CONTAINER pass through untouched
    return value


def is_nullable(declared: Any) -> bool:
    """True for annotations whose zero value is ``None``: ``Any``, ``object`` and optionals."""
    if declared is Any or declared is object:
        return True
    origin = typing.get_origin(declared)
    if origin is typing.Annotated:
        return is_nullable(typing.get_args(declared)[0])
    if origin is typing.Union or origin is types.UnionType:
        return type(None) in typing.get_args(declared)
    return False


def is_zero(value: Any, declared: Any = None) -> bool:
    """True when ``value`` is the zero value of its declared type.

    For nullable declarations only ``None`` is zero, so ``Optional[int]``
    holding 0 is still emitted. Without a declaration the runtime value decides.
    """
    if value is None:
        return True
    if is_nullable(declared):
        return False
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (str, bytes, bytearray)):
        return len(value) == 0
    if isinstance(value, numbers.Number):
        return value == 0
    if is_record(value):
        return all(is_zero(field_value(value, f.name), f.annotation) for f in describe_fields(type(value)))
    if isinstance(value, (Mapping, Sequence, Set)):
        return len(value) == 0
    return False
