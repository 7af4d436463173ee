"""Conversion options.

These are per-mapper settings, fixed for the lifetime of a
:class:`structmap.mapper.StructMapper`. Any string is a valid namespace or
method name: a namespace no field declares ignores every field, and a method
name no type defines leaves the hook inactive.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConversionOptions(BaseModel):
    """Options controlling how records are mapped."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str = Field(default="json")  # Tag namespace to read, e.g. "json" or "map"
    override_method: str = ""  # Per-value hook name; empty disables the hook
    validate_acyclic: bool = True  # Reject self-referential record types up front
