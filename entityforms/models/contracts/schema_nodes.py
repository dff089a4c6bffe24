"""
Schema Node Definitions

Recursive structural descriptors for read and write models. A node is
either a base shape (scalar, array, object) or a wrapper around another
node tagged optional, nullable or has-default. Any node may carry a
metadata annotation bag in ``meta``.

Nodes are owned by the schema registry; the compiler only reads them.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, Field, TypeAdapter


# -----------------------------------------------------------------------------
# Literal Types
# -----------------------------------------------------------------------------

ScalarKind = Literal[
    "string",
    "number",
    "integer",
    "boolean",
    "date",
    "datetime",
    "null",
    "any",
]

WrapperTag = Literal["optional", "nullable", "has-default"]

SCALAR_KINDS: frozenset[str] = frozenset(get_args(ScalarKind))
WRAPPER_TAGS: frozenset[str] = frozenset(get_args(WrapperTag))


# -----------------------------------------------------------------------------
# Node Base
# -----------------------------------------------------------------------------


class NodeBase(BaseModel):
    """Fields shared by every schema node."""

    meta: Any = Field(
        default=None,
        description="Metadata annotation bag (expected to be a mapping)",
    )
    description: str | None = Field(
        default=None, description="Schema-level description of the node"
    )


class ScalarNode(NodeBase):
    """Scalar base shape."""

    kind: ScalarKind = Field(default="any", description="Scalar kind")


class ArrayNode(NodeBase):
    """Array base shape with an optional element descriptor."""

    kind: Literal["array"] = Field(default="array", description="Node kind")
    element: SchemaNode | None = Field(
        default=None, description="Element descriptor"
    )


class ObjectNode(NodeBase):
    """Object base shape with an ordered field mapping."""

    kind: Literal["object"] = Field(default="object", description="Node kind")
    shape: dict[str, SchemaNode] = Field(
        default_factory=dict, description="Field name to descriptor, in declaration order"
    )


class WrappedNode(NodeBase):
    """Wrapper layer around another node."""

    kind: WrapperTag = Field(description="Wrapper tag")
    inner: SchemaNode = Field(description="Wrapped descriptor")
    default: Any = Field(
        default=None, description="Default value (has-default wrappers only)"
    )


SchemaNode = Annotated[
    Union[ScalarNode, ArrayNode, ObjectNode, WrappedNode],
    Field(discriminator="kind"),
]

ArrayNode.model_rebuild()
ObjectNode.model_rebuild()
WrappedNode.model_rebuild()

_node_adapter: TypeAdapter[SchemaNode] = TypeAdapter(SchemaNode)


# -----------------------------------------------------------------------------
# Construction helpers
# -----------------------------------------------------------------------------


def _normalize_kinds(data: Any) -> Any:
    """Map unrecognised kinds in a raw node tree to ``any``."""
    if not isinstance(data, dict):
        return data

    item = dict(data)
    kind = item.get("kind")
    if kind not in SCALAR_KINDS and kind not in WRAPPER_TAGS and kind not in ("array", "object"):
        # Exotic shapes classify as any; their children are irrelevant
        return {
            "kind": "any",
            "meta": item.get("meta"),
            "description": item.get("description"),
        }

    if kind == "array" and item.get("element") is not None:
        item["element"] = _normalize_kinds(item["element"])
    elif kind == "object" and isinstance(item.get("shape"), dict):
        item["shape"] = {
            name: _normalize_kinds(child) for name, child in item["shape"].items()
        }
    elif kind in WRAPPER_TAGS and "inner" in item:
        item["inner"] = _normalize_kinds(item["inner"])
    return item


def parse_schema_node(data: Any) -> SchemaNode:
    """
    Build a schema node from a raw mapping.

    Unknown kinds are loaded as ``any`` scalars rather than rejected.

    Args:
        data: Raw node mapping, e.g. {"kind": "string", "meta": {...}}

    Returns:
        Validated schema node

    Raises:
        pydantic.ValidationError: If the mapping is structurally invalid
    """
    if isinstance(data, (ScalarNode, ArrayNode, ObjectNode, WrappedNode)):
        return data
    return _node_adapter.validate_python(_normalize_kinds(data))


def optional(node: SchemaNode, meta: Any = None) -> WrappedNode:
    """Wrap a node as optional."""
    return WrappedNode(kind="optional", inner=node, meta=meta)


def nullable(node: SchemaNode, meta: Any = None) -> WrappedNode:
    """Wrap a node as nullable."""
    return WrappedNode(kind="nullable", inner=node, meta=meta)


def with_default(node: SchemaNode, default: Any, meta: Any = None) -> WrappedNode:
    """Wrap a node with a schema-level default value."""
    return WrappedNode(kind="has-default", inner=node, default=default, meta=meta)
