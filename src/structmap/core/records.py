"""Record introspection for dataclasses and pydantic models."""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    tags: Mapping[str, Any]
    # Resolved annotation, or None when it could not be resolved
    annotation: Optional[Any] = None

    @property
    def exported(self) -> bool:
        return not self.name.startswith("_")


def is_record_type(tp: Any) -> bool:
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(obj: Any) -> bool:
    return not isinstance(obj, type) and is_record_type(type(obj))


def _resolved_hints(record_type: Type[Any]) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except Exception:
        # Forward references that cannot be resolved are treated as opaque
        return {}


def _pydantic_tags(extra: Any) -> Mapping[str, Any]:
    if isinstance(extra, Mapping):
        return extra
    return {}


def describe_fields(record_type: Type[Any]) -> Tuple[FieldDescriptor, ...]:
    """List a record type's fields in declaration order."""
    if dataclasses.is_dataclass(record_type):
        hints = _resolved_hints(record_type)
        return tuple(
            FieldDescriptor(name=f.name, tags=f.metadata, annotation=hints.get(f.name))
            for f in dataclasses.fields(record_type)
        )
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return tuple(
            FieldDescriptor(
                name=name,
                tags=_pydantic_tags(info.json_schema_extra),
                annotation=info.annotation,
            )
            for name, info in record_type.model_fields.items()
        )
    raise TypeError(f"{record_type!r} is not a record type")


def field_value(record: Any, name: str) -> Any:
    return getattr(record, name)
