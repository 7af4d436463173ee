from dataclasses import dataclass

import pytest
from pydantic import ValidationError

from structmap import ConversionOptions, StructMapper, struct_to_map, tagged_field
from structmap.core.schema import SchemaRegistry


@dataclass
class Labelled:
    label: str = tagged_field(default="x", json="label")

    def to_map_entry(self):
        return "custom", 1


@dataclass
class Holder:
    item: Labelled = tagged_field(default_factory=Labelled, json="item")


def setup_function() -> None:
    SchemaRegistry.clear()


class TestConversionOptions:
    """Tests for the conversion options model."""

    def test_defaults(self):
        opts = ConversionOptions()
        assert opts.namespace == "json"
        assert opts.override_method == ""
        assert opts.validate_acyclic is True

    def test_namespace_is_kept_verbatim(self):
        assert ConversionOptions(namespace="json ").namespace == "json "
        assert ConversionOptions(namespace="").namespace == ""

    def test_any_override_method_name_is_accepted(self):
        assert ConversionOptions(override_method="to map").override_method == "to map"

    def test_options_are_frozen(self):
        opts = ConversionOptions()
        with pytest.raises(ValidationError):
            opts.namespace = "map"

    def test_unknown_options_rejected(self):
        with pytest.raises(ValidationError):
            ConversionOptions(tag="json")


class TestStructMapperOptions:
    """Tests for how StructMapper resolves its options."""

    def test_keyword_options(self):
        mapper = StructMapper(namespace="map")
        assert mapper.options.namespace == "map"

    def test_options_object(self):
        opts = ConversionOptions(namespace="db")
        assert StructMapper(opts).options is opts

    def test_keyword_overrides_on_top_of_options(self):
        opts = ConversionOptions(namespace="db", override_method="entry")
        mapper = StructMapper(opts, namespace="json")
        assert mapper.options.namespace == "json"
        assert mapper.options.override_method == "entry"

    def test_empty_namespace_ignores_every_field(self):
        assert struct_to_map(Holder(), "") == {}

    def test_namespace_with_whitespace_is_a_different_namespace(self):
        assert struct_to_map(Holder(), "json ") == {}

    def test_non_identifier_method_name_leaves_hook_inactive(self):
        assert struct_to_map(Holder(), "json", "to map") == {"item": {"label": "x"}}
