"""
Schema Registry

Named read/write model descriptors consumed by the compiler. The compiler
depends only on the SchemaRegistry protocol; InMemorySchemaRegistry is the
implementation used by the command line and the tests.

Descriptor documents (JSON or YAML) have the layout:

    models:
      QueryProductModel:
        kind: object
        meta: {x-api-path: /products}
        shape:
          productId: {kind: integer, meta: {x-navigation-key: true}}
          productName: {kind: string}
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import ValidationError

from entityforms.core.exceptions import DescriptorError
from entityforms.models.contracts.schema_nodes import SchemaNode, parse_schema_node

logger = logging.getLogger(__name__)


class SchemaRegistry(Protocol):
    """Lookup contract the compiler requires of a schema source."""

    async def lookup(self, model_id: str) -> SchemaNode | None:
        """Return the named descriptor, or None when it is not registered."""
        ...

    def exists(self, model_id: str) -> bool:
        """Check whether a descriptor is registered under the name."""
        ...


class InMemorySchemaRegistry:
    """Dict-backed schema registry."""

    def __init__(self, models: Mapping[str, SchemaNode] | None = None):
        self._models: dict[str, SchemaNode] = {}
        if models:
            self.register_many(models)

    def register(self, model_id: str, node: SchemaNode | dict[str, Any]) -> None:
        """Register (or replace) a descriptor; raw mappings are parsed first."""
        self._models[model_id] = parse_schema_node(node)

    def register_many(self, models: Mapping[str, SchemaNode | dict[str, Any]]) -> None:
        for model_id, node in models.items():
            self.register(model_id, node)

    def unregister(self, model_id: str) -> None:
        self._models.pop(model_id, None)

    def model_ids(self) -> list[str]:
        """Registered ids in registration order."""
        return list(self._models)

    async def lookup(self, model_id: str) -> SchemaNode | None:
        return self._models.get(model_id)

    def exists(self, model_id: str) -> bool:
        return model_id in self._models


# =============================================================================
# Descriptor documents
# =============================================================================


def registry_from_document(data: Any, source: str | None = None) -> InMemorySchemaRegistry:
    """
    Build a registry from a parsed descriptor document.

    Args:
        data: Parsed document, expected to hold a "models" mapping
        source: Document name used in error messages

    Returns:
        InMemorySchemaRegistry with every model registered

    Raises:
        DescriptorError: If the document or any model descriptor is invalid
    """
    if not isinstance(data, dict) or not isinstance(data.get("models"), dict):
        raise DescriptorError("document must contain a 'models' mapping", source=source)

    registry = InMemorySchemaRegistry()
    for model_id, raw in data["models"].items():
        try:
            registry.register(str(model_id), raw)
        except ValidationError as e:
            raise DescriptorError(f"invalid descriptor for {model_id}: {e}", source=source) from e

    logger.debug(f"Loaded {len(registry.model_ids())} model descriptors from {source or 'document'}")
    return registry


def load_descriptor_document(path: str | Path) -> InMemorySchemaRegistry:
    """
    Load a JSON or YAML descriptor document into a registry.

    Files ending in .json are parsed as JSON; everything else as YAML.

    Raises:
        DescriptorError: If the file cannot be read or parsed, or is invalid
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorError(f"cannot read document: {e}", source=str(path)) from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DescriptorError(f"cannot parse document: {e}", source=str(path)) from e

    return registry_from_document(data, source=str(path))
