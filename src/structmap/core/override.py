from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

from structmap.core.exceptions import InvalidOverrideSignatureError

_RESULTS_TOTAL = 2


@runtime_checkable
class SupportsMapOverride(Protocol):
    """Types that supply their own ``(key, value)`` entry when converted."""

    def to_map_entry(self) -> Tuple[str, Any]:
        ...


@dataclass(frozen=True)
class OverrideResult:
    key: str
    value: Any


def _accepts_no_arguments(method: Any) -> bool:
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures; let the call decide
        return True
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


def try_override(value: Any, method_name: str) -> Optional[OverrideResult]:
    """Call ``value.<method_name>()`` if the value's type defines it.

    Returns ``None`` when the hook is disabled (empty name) or the type has no
    such callable attribute. The method must take no arguments and return a
    pair whose first item is a ``str``.

    Raises:
        InvalidOverrideSignatureError: the method exists but has the wrong shape.
    """
    if not method_name:
        return None

    if not callable(getattr(type(value), method_name, None)):
        return None

    method = getattr(value, method_name)
    owner = type(value).__name__
    if not _accepts_no_arguments(method):
        raise InvalidOverrideSignatureError(
            reason=f"wrong method {method_name}, should take no arguments and return (str, Any)",
            details={"method": method_name, "type": owner},
        )

    results = method()
    if not isinstance(results, (tuple, list)) or len(results) != _RESULTS_TOTAL:
        raise InvalidOverrideSignatureError(
            reason=f"wrong method {method_name}, should have 2 outputs: (str, Any)",
            details={"method": method_name, "type": owner},
        )
    key, result_value = results
    if not isinstance(key, str):
        raise InvalidOverrideSignatureError(
            reason=f"wrong method {method_name}, first output should be str",
            details={"method": method_name, "type": owner, "got": type(key).__name__},
        )

    return OverrideResult(key=key, value=result_value)
