"""
Unit tests for the schema registry and descriptor document loading.
"""

import json

import pytest

from entityforms.core.exceptions import DescriptorError
from entityforms.models.contracts.schema_nodes import ObjectNode, ScalarNode, WrappedNode
from entityforms.services.schema_registry import (
    InMemorySchemaRegistry,
    load_descriptor_document,
    registry_from_document,
)

DOCUMENT = {
    "models": {
        "QueryProductModel": {
            "kind": "object",
            "meta": {"x-api-path": "/api/products"},
            "shape": {
                "productId": {"kind": "integer", "meta": {"x-navigation-key": True}},
                "productName": {"kind": "optional", "inner": {"kind": "string"}},
                "dimensions": {"kind": "tuple"},
            },
        },
        "SaveProductModel": {
            "kind": "object",
            "shape": {"productName": {"kind": "string"}},
        },
    }
}

YAML_DOCUMENT = """
models:
  QueryTagModel:
    kind: object
    shape:
      tagId: {kind: integer, meta: {x-navigation-key: true}}
      label: {kind: string, meta: {x-label: Tag}}
"""


class TestInMemorySchemaRegistry:
    """Tests for the dict-backed registry."""

    async def test_register_and_lookup(self):
        registry = InMemorySchemaRegistry()
        node = ObjectNode(shape={"a": ScalarNode(kind="string")})
        registry.register("QueryAModel", node)

        assert registry.exists("QueryAModel") is True
        assert await registry.lookup("QueryAModel") is node

    async def test_missing_model(self):
        registry = InMemorySchemaRegistry()
        assert registry.exists("QueryAModel") is False
        assert await registry.lookup("QueryAModel") is None

    async def test_register_raw_mapping(self):
        """Raw mappings are parsed into schema nodes."""
        registry = InMemorySchemaRegistry()
        registry.register("QueryAModel", {"kind": "object", "shape": {"a": {"kind": "string"}}})
        node = await registry.lookup("QueryAModel")
        assert isinstance(node, ObjectNode)
        assert isinstance(node.shape["a"], ScalarNode)

    def test_unregister_and_model_ids(self):
        registry = InMemorySchemaRegistry({
            "A": ScalarNode(kind="string"),
            "B": ScalarNode(kind="string"),
        })
        registry.unregister("A")
        registry.unregister("missing")
        assert registry.model_ids() == ["B"]


class TestRegistryFromDocument:
    """Tests for building a registry from a parsed document."""

    async def test_loads_models(self):
        registry = registry_from_document(DOCUMENT)
        assert registry.model_ids() == ["QueryProductModel", "SaveProductModel"]

        node = await registry.lookup("QueryProductModel")
        assert node.meta == {"x-api-path": "/api/products"}
        assert isinstance(node.shape["productName"], WrappedNode)

    async def test_unknown_kinds_load_as_any(self):
        registry = registry_from_document(DOCUMENT)
        node = await registry.lookup("QueryProductModel")
        assert node.shape["dimensions"].kind == "any"

    def test_missing_models_key(self):
        with pytest.raises(DescriptorError) as exc_info:
            registry_from_document({"schemas": {}}, source="bad.yaml")
        assert "bad.yaml" in exc_info.value.message

    def test_invalid_descriptor(self):
        """Structurally invalid nodes are reported with the model id."""
        document = {"models": {"QueryAModel": {"kind": "optional"}}}
        with pytest.raises(DescriptorError) as exc_info:
            registry_from_document(document)
        assert "QueryAModel" in exc_info.value.message


class TestLoadDescriptorDocument:
    """Tests for reading JSON and YAML files."""

    def test_json(self, tmp_path):
        path = tmp_path / "models.json"
        path.write_text(json.dumps(DOCUMENT))
        assert load_descriptor_document(path).exists("SaveProductModel")

    async def test_yaml(self, tmp_path):
        path = tmp_path / "models.yaml"
        path.write_text(YAML_DOCUMENT)
        registry = load_descriptor_document(str(path))

        node = await registry.lookup("QueryTagModel")
        assert node.shape["label"].meta == {"x-label": "Tag"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DescriptorError):
            load_descriptor_document(tmp_path / "missing.yaml")

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "models.json"
        path.write_text("{not json")
        with pytest.raises(DescriptorError) as exc_info:
            load_descriptor_document(path)
        assert exc_info.value.source == str(path)
