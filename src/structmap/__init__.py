"""structmap.

Tag-driven conversion of dataclass and pydantic records into plain dicts,
for building query parameters, dynamic filters and generic payloads.

Public API for clients using this library.
"""

from structmap.core.exceptions import (
    CyclicRecordError,
    ErrorKind,
    InvalidOverrideSignatureError,
    NilInputError,
    NotARecordError,
    StructMapError,
)
from structmap.core.override import SupportsMapOverride
from structmap.core.tags import (
    OPTION_DIVE,
    OPTION_DOTTED,
    OPTION_IGNORE,
    OPTION_OMITEMPTY,
    OPTION_WILDCARD,
    Flag,
    TagDirective,
    parse_tag,
    tag,
    tagged_field,
)
from structmap.mapper import MappedStruct, StructMapper, struct_to_map
from structmap.models.options import ConversionOptions

__version__ = "0.1.0"

__all__ = [
    "struct_to_map",
    "StructMapper",
    "ConversionOptions",
    "MappedStruct",
    "Flag",
    "TagDirective",
    "parse_tag",
    "tag",
    "tagged_field",
    "SupportsMapOverride",
    "OPTION_IGNORE",
    "OPTION_OMITEMPTY",
    "OPTION_DIVE",
    "OPTION_WILDCARD",
    "OPTION_DOTTED",
    "StructMapError",
    "ErrorKind",
    "NilInputError",
    "NotARecordError",
    "InvalidOverrideSignatureError",
    "CyclicRecordError",
]
