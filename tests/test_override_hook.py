import pytest

from structmap.core.exceptions import ErrorKind, InvalidOverrideSignatureError
from structmap.core.override import OverrideResult, SupportsMapOverride, try_override


class Custom:
    def to_map_entry(self):
        return "custom", 42


class DeferToGeneric:
    def to_map_entry(self):
        return "", "ignored"


class ThreeOutputs:
    def to_map_entry(self):
        return "a", 1, 2


class NonStringKey:
    def to_map_entry(self):
        return 1, 2


class SingleOutput:
    def to_map_entry(self):
        return "only"


class NeedsArgument:
    def to_map_entry(self, prefix):
        return prefix, 1


class OptionalArgument:
    def to_map_entry(self, prefix="p"):
        return prefix, 1


class NotCallable:
    to_map_entry = "not a method"


class Exploding:
    def to_map_entry(self):
        raise RuntimeError("boom")


def test_empty_method_name_is_noop():
    assert try_override(Custom(), "") is None


def test_missing_method_is_noop():
    assert try_override(object(), "to_map_entry") is None
    assert try_override(5, "to_map_entry") is None


def test_non_callable_attribute_is_noop():
    assert try_override(NotCallable(), "to_map_entry") is None


def test_instance_attribute_is_not_a_method():
    obj = object.__new__(DeferToGeneric)
    obj.__dict__["other"] = lambda: ("k", 1)

    assert try_override(obj, "other") is None


def test_valid_method_returns_pair():
    assert try_override(Custom(), "to_map_entry") == OverrideResult(key="custom", value=42)


def test_empty_key_is_returned_for_caller_to_defer():
    result = try_override(DeferToGeneric(), "to_map_entry")

    assert result is not None
    assert result.key == ""


def test_list_result_is_accepted():
    class AsList:
        def to_map_entry(self):
            return ["k", "v"]

    assert try_override(AsList(), "to_map_entry") == OverrideResult("k", "v")


def test_optional_parameters_are_allowed():
    assert try_override(OptionalArgument(), "to_map_entry") == OverrideResult("p", 1)


@pytest.mark.parametrize("cls", [ThreeOutputs, SingleOutput, NeedsArgument])
def test_wrong_shape_raises(cls):
    with pytest.raises(InvalidOverrideSignatureError, match="wrong method to_map_entry") as exc_info:
        try_override(cls(), "to_map_entry")

    assert exc_info.value.kind is ErrorKind.INVALID_OVERRIDE_SIGNATURE
    assert exc_info.value.details["type"] == cls.__name__


def test_non_string_first_output_raises():
    with pytest.raises(InvalidOverrideSignatureError, match="first output should be str"):
        try_override(NonStringKey(), "to_map_entry")


def test_errors_inside_hook_propagate_unchanged():
    with pytest.raises(RuntimeError, match="boom"):
        try_override(Exploding(), "to_map_entry")


def test_protocol_is_runtime_checkable():
    assert isinstance(Custom(), SupportsMapOverride)
    assert not isinstance(object(), SupportsMapOverride)
