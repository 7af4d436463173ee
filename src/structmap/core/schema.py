"""Per-type conversion schemas.

Tags are parsed once per ``(record type, namespace)`` and kept in
:class:`SchemaRegistry`, so converting many instances of one type does not
re-read field metadata.
"""

from __future__ import annotations

import types
import typing
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Set, Tuple, Type

from structmap.core.exceptions import CyclicRecordError, NotARecordError
from structmap.core.logger import get_logger
from structmap.core.records import describe_fields, is_record_type
from structmap.core.tags import Flag, TagDirective, parse_tag

logger = get_logger(__name__)

SchemaKey = Tuple[Type[Any], str]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    directive: TagDirective
    annotation: Optional[Any] = None

    @property
    def key(self) -> str:
        return self.directive.key

    @property
    def flags(self) -> Flag:
        return self.directive.flags


@dataclass(frozen=True)
class RecordSchema:
    record_type: Type[Any]
    namespace: str
    # Exported, non-ignored fields in declaration order
    fields: Tuple[FieldSpec, ...]

    def keys(self) -> List[str]:
        return [f.key for f in self.fields]


def build_schema(record_type: Type[Any], namespace: str) -> RecordSchema:
    if not is_record_type(record_type):
        raise NotARecordError(
            reason=f"{getattr(record_type, '__name__', record_type)!s} is not a record type",
            details={"type": getattr(record_type, "__name__", repr(record_type))},
        )
    specs = []
    for descriptor in describe_fields(record_type):
        if not descriptor.exported:
            continue
        directive = parse_tag(descriptor.tags, namespace)
        if directive.ignored:
            continue
        specs.append(FieldSpec(name=descriptor.name, directive=directive, annotation=descriptor.annotation))
    logger.debug("Built schema for %s[%s]: %s", record_type.__name__, namespace, [s.name for s in specs])
    return RecordSchema(record_type=record_type, namespace=namespace, fields=tuple(specs))


def record_types_in(annotation: Any) -> Iterator[Type[Any]]:
    """Yield record types an annotation can hold directly.

    ``Optional``, ``Union`` and ``Annotated`` are unwrapped; containers are
    opaque to the mapper and are not followed.
    """
    if annotation is None:
        return
    if is_record_type(annotation):
        yield annotation
        return
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        for arg in typing.get_args(annotation):
            yield from record_types_in(arg)
    elif origin is typing.Annotated:
        yield from record_types_in(typing.get_args(annotation)[0])


class SchemaRegistry:
    _registry: ClassVar[Dict[SchemaKey, RecordSchema]] = {}
    _acyclic: ClassVar[Set[SchemaKey]] = set()

    @classmethod
    def get(cls, record_type: Type[Any], namespace: str, *, validate_acyclic: bool = True) -> RecordSchema:
        key = (record_type, namespace)
        schema = cls._registry.get(key)
        if schema is None:
            schema = build_schema(record_type, namespace)
            cls._registry[key] = schema
        if validate_acyclic and key not in cls._acyclic:
            cls._check_acyclic(record_type, namespace, [])
        return schema

    @classmethod
    def try_get(cls, record_type: Type[Any], namespace: str) -> Optional[RecordSchema]:
        return cls._registry.get((record_type, namespace))

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()
        cls._acyclic.clear()

    @classmethod
    def _check_acyclic(cls, record_type: Type[Any], namespace: str, stack: List[Type[Any]]) -> None:
        if record_type in stack:
            path = [t.__name__ for t in stack[stack.index(record_type):]] + [record_type.__name__]
            raise CyclicRecordError(
                reason=f"record type {record_type.__name__} refers to itself",
                details={"path": " -> ".join(path), "namespace": namespace},
            )
        key = (record_type, namespace)
        if key in cls._acyclic:
            return
        schema = cls.get(record_type, namespace, validate_acyclic=False)
        stack.append(record_type)
        for spec in schema.fields:
            for nested in record_types_in(spec.annotation):
                cls._check_acyclic(nested, namespace, stack)
        stack.pop()
        cls._acyclic.add(key)
