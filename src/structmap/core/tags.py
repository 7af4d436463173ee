"""Tag parsing: turn one field's tag string into a key and option flags.

Tags are plain strings stored per namespace in a field's metadata, in the
familiar ``"name,opt1,opt2"`` format:

    @dataclass
    class Filter:
        name: str = tagged_field(default="", json="name,omitempty,wildcard")
"""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Any, Dict, Mapping

OPTION_IGNORE = "-"
OPTION_OMITEMPTY = "omitempty"
OPTION_DIVE = "dive"
OPTION_WILDCARD = "wildcard"
OPTION_DOTTED = "dotted"


class Flag(enum.IntFlag):
    NONE = 0
    IGNORE = 1
    OMITEMPTY = 2
    DIVE = 4
    WILDCARD = 8
    DOTTED = 16


_OPTIONS: Dict[str, Flag] = {
    OPTION_IGNORE: Flag.IGNORE,
    OPTION_OMITEMPTY: Flag.OMITEMPTY,
    OPTION_DIVE: Flag.DIVE,
    OPTION_WILDCARD: Flag.WILDCARD,
    OPTION_DOTTED: Flag.DOTTED,
}


@dataclass(frozen=True)
class TagDirective:
    """Parsed form of a single tag value."""

    key: str
    flags: Flag = Flag.NONE

    @property
    def ignored(self) -> bool:
        return bool(self.flags & Flag.IGNORE)

    def has(self, flag: Flag) -> bool:
        return bool(self.flags & flag)


IGNORED = TagDirective(key="", flags=Flag.IGNORE)


def parse_tag(tags: Mapping[str, Any], namespace: str) -> TagDirective:
    """Read the tag stored under ``namespace`` and parse it.

    A missing namespace (or a non-string tag value) yields the ignore
    directive. Unknown options are dropped silently; this never raises.
    """
    raw = tags.get(namespace) if tags else None
    if not isinstance(raw, str):
        return IGNORED

    opts = raw.split(",")
    flags = Flag.NONE
    # The key token is matched too, so a bare "-" ignores the field
    for opt in opts:
        flags |= _OPTIONS.get(opt, Flag.NONE)
    return TagDirective(key=opts[0], flags=flags)


def tag(**namespaces: str) -> Dict[str, str]:
    """Build a tag mapping, e.g. ``tag(json="id", map="id,omitempty")``."""
    return dict(namespaces)


def tagged_field(*, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
    """``dataclasses.field`` that takes namespace tags as extra keyword arguments.

    Keyword arguments understood by ``dataclasses.field`` are forwarded to it;
    every other keyword becomes a tag namespace.
    """
    field_kwargs = {k: kwargs.pop(k) for k in _FIELD_KWARGS if k in kwargs}
    merged = dict(metadata or {})
    merged.update(tag(**kwargs))
    return dataclasses.field(metadata=merged, **field_kwargs)


_FIELD_KWARGS = ("default", "default_factory", "init", "repr", "hash", "compare", "kw_only")
