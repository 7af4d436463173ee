"""Record to dict conversion driven by field tags.

Key can be specified per tag namespace, like ``json`` or ``map``; the
namespace to read is chosen by the caller. Options are:

- ``omitempty`` to omit fields holding the zero value of their type
- ``dive`` to map a nested record's fields directly into the parent dict
- ``wildcard`` to wrap a string value in ``%``
- ``dotted`` to prefix a nested record's keys with ``"<key>."``

Example::

    @dataclass
    class B:
        c: str = tagged_field(default="", json="c")

    @dataclass
    class A:
        aa: str = tagged_field(default="", json="aa")
        b: B = tagged_field(default_factory=B, json="b,dive")

    struct_to_map(A(aa="x", b=B(c="y")), "json")
    # {"aa": "x", "c": "y"}

With ``"b,dotted"`` instead the result is ``{"aa": "x", "b.c": "y"}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from structmap.core.dispatch import DROPPED, Kind, classify, dispatch_value, is_zero
from structmap.core.exceptions import NilInputError, NotARecordError
from structmap.core.logger import get_logger, push_record_path, reset_record_path
from structmap.core.override import try_override
from structmap.core.records import field_value, is_record
from structmap.core.schema import FieldSpec, SchemaRegistry
from structmap.core.tags import Flag
from structmap.models.options import ConversionOptions

logger = get_logger(__name__)

MappedStruct = Dict[str, Any]


class StructMapper:
    """Converts records to dicts using one fixed set of options.

    Usage:
        >>> mapper = StructMapper(namespace="map", override_method="to_map_entry")
        >>> params = mapper.convert(search_filter)
    """

    def __init__(self, options: Optional[ConversionOptions] = None, **overrides: Any):
        if options is None:
            options = ConversionOptions(**overrides)
        elif overrides:
            options = ConversionOptions(**{**options.model_dump(), **overrides})
        self.options = options

    def convert(self, data: Any) -> MappedStruct:
        """Map ``data`` to a new dict.

        Raises:
            NilInputError: ``data`` is ``None``.
            NotARecordError: ``data`` is not a dataclass or pydantic model instance.
            InvalidOverrideSignatureError: an override method has the wrong shape.
            CyclicRecordError: the record type refers to itself through tagged fields.
        """
        if data is None:
            raise NilInputError(reason="data is a nil reference")
        if not is_record(data):
            kind = type(data).__name__
            raise NotARecordError(
                reason=f"data is not a record but {kind}",
                details={"type": kind},
            )

        token = push_record_path(type(data).__name__)
        try:
            return self._convert_record(data)
        finally:
            reset_record_path(token)

    def _convert_record(self, data: Any) -> MappedStruct:
        schema = SchemaRegistry.get(
            type(data),
            self.options.namespace,
            validate_acyclic=self.options.validate_acyclic,
        )

        result: MappedStruct = {}
        for spec in schema.fields:
            value = field_value(data, spec.name)
            if spec.directive.has(Flag.OMITEMPTY) and is_zero(value, spec.annotation):
                logger.debug("Skipping %s: empty value with omitempty", spec.name)
                continue
            if value is None:
                logger.debug("Skipping %s: nil value", spec.name)
                continue

            override = try_override(value, self.options.override_method)
            if override is not None and override.key:
                logger.debug("Override %s() on %s supplied key %r", self.options.override_method, spec.name, override.key)
                result[override.key] = override.value
                continue

            kind = classify(value, spec.annotation)
            if kind is Kind.RECORD:
                self._compose(result, spec, value)
                continue

            converted = dispatch_value(value, kind, spec.directive)
            if converted is DROPPED:
                logger.debug("Dropping %s: unsupported value type %s", spec.name, type(value).__name__)
                continue
            self._assign(result, spec.key, converted, spec.name)

        return result

    def _compose(self, result: MappedStruct, spec: FieldSpec, value: Any) -> None:
        token = push_record_path(spec.name)
        try:
            nested = self._convert_record(value)
        finally:
            reset_record_path(token)

        if spec.directive.has(Flag.DIVE):
            result.update(nested)
        elif spec.directive.has(Flag.DOTTED):
            result.update({f"{spec.key}.{k}": v for k, v in nested.items()})
        else:
            self._assign(result, spec.key, nested, spec.name)

    @staticmethod
    def _assign(result: MappedStruct, key: str, value: Any, field_name: str) -> None:
        if not key:
            logger.warning("Field %s has an empty tag key; writing it under ''", field_name)
        result[key] = value


def struct_to_map(data: Any, tag: str = "json", method: str = "") -> MappedStruct:
    """Map a record by its ``tag`` namespace, optionally honouring a ``method`` hook."""
    return StructMapper(namespace=tag, override_method=method).convert(data)
