"""
Unit tests for descriptor unwrapping and type classification.
"""

import logging

from entityforms.models.contracts.schema_nodes import (
    ArrayNode,
    ObjectNode,
    ScalarNode,
    WrappedNode,
    nullable,
    optional,
    with_default,
)
from entityforms.models.enums import FieldDataType
from entityforms.services.entity_form.descriptors import (
    array_element_type,
    classify,
    get_metadata,
    get_object_shape,
    is_metadata_true,
    metadata_int,
    metadata_number,
    metadata_str,
    unqualified_name,
    unwrap,
)


def _chain(depth: int) -> WrappedNode:
    node = ScalarNode(kind="string")
    for _ in range(depth):
        node = optional(node)
    return node


class TestUnwrap:
    """Tests for stripping wrapper layers."""

    def test_base_node_passes_through(self):
        """An unwrapped node is returned with no flags set."""
        node = ScalarNode(kind="integer")
        result = unwrap(node)
        assert result.node is node
        assert result.is_optional is False
        assert result.is_nullable is False
        assert result.has_default is False

    def test_collects_optional_and_nullable(self):
        """Flags accumulate across every layer."""
        result = unwrap(optional(nullable(ScalarNode(kind="string"))))
        assert isinstance(result.node, ScalarNode)
        assert result.is_optional is True
        assert result.is_nullable is True

    def test_outermost_default_wins(self):
        """The default of the outermost has-default layer is kept."""
        node = with_default(optional(with_default(ScalarNode(kind="integer"), 1)), 2)
        result = unwrap(node)
        assert result.has_default is True
        assert result.default == 2
        assert result.is_optional is True

    def test_chain_at_ceiling_fully_unwraps(self):
        """A chain exactly as deep as the ceiling reaches the base node."""
        result = unwrap(_chain(10), max_depth=10)
        assert isinstance(result.node, ScalarNode)

    def test_chain_beyond_ceiling_stops_and_warns(self, caplog):
        """Traversal stops at the ceiling, returns the remaining wrapper and logs a warning."""
        with caplog.at_level(logging.WARNING):
            result = unwrap(_chain(12), max_depth=10, path="deep")

        assert isinstance(result.node, WrappedNode)
        assert result.is_optional is True
        assert any("deep" in r.message and r.levelno == logging.WARNING for r in caplog.records)

    def test_over_deep_chain_classifies_as_any(self):
        """Whatever is left after the ceiling classifies as any."""
        assert classify(_chain(12), max_depth=10) == FieldDataType.ANY


class TestGetMetadata:
    """Tests for locating the nearest metadata bag."""

    def test_returns_empty_when_absent(self):
        """No bag anywhere yields an empty dict."""
        assert get_metadata(optional(ScalarNode(kind="string"))) == {}

    def test_outermost_bag_wins(self):
        """Scanning starts at the outermost layer."""
        node = optional(ScalarNode(kind="string", meta={"x-label": "Inner"}), meta={"x-label": "Outer"})
        assert get_metadata(node)["x-label"] == "Outer"

    def test_finds_bag_on_inner_layer(self):
        """An empty outer bag is skipped in favour of an inner one."""
        node = nullable(optional(ScalarNode(kind="string", meta={"x-label": "Inner"})), meta={})
        assert get_metadata(node) == {"x-label": "Inner"}

    def test_returns_copy(self):
        """Mutating the result does not touch the node."""
        node = ScalarNode(kind="string", meta={"x-label": "Name"})
        get_metadata(node)["x-label"] = "Changed"
        assert node.meta["x-label"] == "Name"

    def test_malformed_bag_is_ignored_and_logged(self, caplog):
        """A non-mapping bag is treated as empty with a warning."""
        node = optional(ScalarNode(kind="string", meta={"x-label": "Inner"}), meta=["not", "a", "map"])
        with caplog.at_level(logging.WARNING):
            meta = get_metadata(node, path="weird")

        assert meta == {"x-label": "Inner"}
        assert any("weird" in r.message for r in caplog.records)

    def test_description_folded_in(self):
        """A node description is exposed as the description key."""
        node = ScalarNode(kind="string", description="Shown as help", meta={"x-label": "Name"})
        assert get_metadata(node)["description"] == "Shown as help"

    def test_explicit_description_key_kept(self):
        """An explicit description key is not overwritten."""
        node = ScalarNode(kind="string", description="Node text", meta={"description": "Meta text"})
        assert get_metadata(node)["description"] == "Meta text"


class TestClassify:
    """Tests for mapping base shapes to data kinds."""

    def test_scalar_kinds(self):
        """Every scalar kind maps to the matching data kind."""
        for kind in ("string", "number", "integer", "boolean", "date", "datetime", "null", "any"):
            assert classify(ScalarNode(kind=kind)) == FieldDataType(kind)

    def test_wrapped_nodes_are_unwrapped(self):
        """Wrappers do not change the data kind."""
        assert classify(optional(nullable(ScalarNode(kind="boolean")))) == FieldDataType.BOOLEAN

    def test_array_and_object(self):
        """Arrays and objects classify structurally."""
        assert classify(ArrayNode(element=ScalarNode(kind="string"))) == FieldDataType.ARRAY
        assert classify(ObjectNode(shape={})) == FieldDataType.OBJECT

    def test_array_element_type(self):
        """Element kind is reported for typed arrays only."""
        assert array_element_type(ArrayNode(element=optional(ScalarNode(kind="string")))) == FieldDataType.STRING
        assert array_element_type(ArrayNode()) is None
        assert array_element_type(ScalarNode(kind="string")) is None

    def test_get_object_shape(self):
        """The shape of a wrapped object is returned; other nodes give {}."""
        shape = {"a": ScalarNode(kind="string")}
        assert get_object_shape(optional(ObjectNode(shape=shape))) == shape
        assert get_object_shape(ScalarNode(kind="string")) == {}


class TestMetadataReaders:
    """Tests for normalising metadata values."""

    def test_boolean_like_values(self):
        """Real booleans and 'true' strings are true; anything else is false."""
        assert is_metadata_true(True) is True
        assert is_metadata_true("true") is True
        assert is_metadata_true("True") is True
        assert is_metadata_true(False) is False
        assert is_metadata_true("false") is False
        assert is_metadata_true(1) is False
        assert is_metadata_true(None) is False

    def test_numbers(self):
        """Numbers and numeric strings are read; bools are not numbers."""
        assert metadata_number(5) == 5
        assert metadata_number(2.5) == 2.5
        assert metadata_number("10") == 10
        assert metadata_number("1.5") == 1.5
        assert metadata_number(True) is None
        assert metadata_number("abc") is None
        assert metadata_int("7") == 7

    def test_non_finite_numbers_are_rejected(self):
        """NaN and infinities read as missing instead of raising on int conversion."""
        for value in ("NaN", "inf", "-Infinity", "1e400", float("inf"), float("nan")):
            assert metadata_number(value) is None
            assert metadata_int(value) is None

    def test_strings(self):
        """Only non-empty strings are read."""
        assert metadata_str("x") == "x"
        assert metadata_str("") is None
        assert metadata_str(3) is None

    def test_unqualified_name(self):
        """The segment after the last dot is returned."""
        assert unqualified_name("Catalog.Models.Manufacturer") == "Manufacturer"
        assert unqualified_name("Manufacturer") == "Manufacturer"
