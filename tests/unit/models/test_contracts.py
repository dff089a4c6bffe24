"""
Unit tests for contract models and schema node parsing.
"""

import pytest
from pydantic import ValidationError

from entityforms.models.contracts.entity_forms import (
    CompileOptions,
    EntityFormSchema,
    EntityMetadata,
    FieldDefinition,
)
from entityforms.models.contracts.schema_nodes import (
    ArrayNode,
    ObjectNode,
    ScalarNode,
    WrappedNode,
    parse_schema_node,
)
from entityforms.models.enums import FieldDataType, FieldEditorType


class TestParseSchemaNode:
    """Tests for building nodes from raw mappings."""

    def test_nested_tree(self):
        node = parse_schema_node({
            "kind": "object",
            "shape": {
                "tags": {"kind": "array", "element": {"kind": "string"}},
                "price": {"kind": "has-default", "default": 0, "inner": {"kind": "number"}},
            },
        })
        assert isinstance(node, ObjectNode)
        assert isinstance(node.shape["tags"], ArrayNode)
        assert isinstance(node.shape["tags"].element, ScalarNode)
        assert isinstance(node.shape["price"], WrappedNode)
        assert node.shape["price"].default == 0

    def test_shape_order_preserved(self):
        node = parse_schema_node({"kind": "object", "shape": {"b": {"kind": "string"}, "a": {"kind": "string"}}})
        assert list(node.shape) == ["b", "a"]

    def test_unknown_kinds_become_any(self):
        """Unknown kinds (including missing ones) load as any scalars, keeping their metadata."""
        node = parse_schema_node({"kind": "union", "meta": {"x-label": "Either"}, "options": []})
        assert node.kind == "any"
        assert node.meta == {"x-label": "Either"}
        assert parse_schema_node({}).kind == "any"

    def test_malformed_meta_is_accepted(self):
        """Non-mapping metadata is kept for the compiler to ignore."""
        assert parse_schema_node({"kind": "string", "meta": "oops"}).meta == "oops"

    def test_wrapper_requires_inner(self):
        with pytest.raises(ValidationError):
            parse_schema_node({"kind": "nullable"})

    def test_nodes_pass_through(self):
        node = ScalarNode(kind="string")
        assert parse_schema_node(node) is node


class TestContractSerialization:
    """Tests for camelCase serialization."""

    def test_to_dict_uses_camel_case_and_drops_none(self):
        schema = EntityFormSchema(
            entity=EntityMetadata(read_model="QueryAModel", label="A", plural_label="As", primary_key="aId"),
            fields={
                "aId": FieldDefinition(
                    name="aId",
                    label="A ID",
                    data_type=FieldDataType.INTEGER,
                    editor_type=FieldEditorType.READONLY,
                    sort_order=1000,
                    field_set="general",
                    is_primary_key=True,
                ),
            },
            field_order=["aId"],
        )
        data = schema.to_dict()

        assert data["version"] == "1.0"
        assert data["entity"]["readModel"] == "QueryAModel"
        assert "writeModel" not in data["entity"]
        assert data["fields"]["aId"]["editorType"] == "readonly"
        assert data["fields"]["aId"]["isPrimaryKey"] is True
        assert data["fieldOrder"] == ["aId"]
        assert data["editableFields"] == []

    def test_accepts_either_spelling(self):
        assert CompileOptions(writeModelId="SaveA").write_model_id == "SaveA"
        assert CompileOptions(write_model_id="SaveA").write_model_id == "SaveA"

    def test_round_trip_from_camel_case(self):
        data = {
            "entity": {"readModel": "QueryAModel", "label": "A", "pluralLabel": "As", "primaryKey": "id"},
            "fieldSets": [],
        }
        schema = EntityFormSchema.model_validate(data)
        assert schema.entity.plural_label == "As"
