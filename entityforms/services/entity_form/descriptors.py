"""
Descriptor unwrapping and type classification.

Strips optional/nullable/has-default wrapper layers from schema nodes,
finds the nearest metadata annotation bag, and maps base shapes to a
closed set of data kinds. Traversal is iterative and bounded, so
malformed or unexpectedly deep chains never loop.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

from entityforms.models.contracts.schema_nodes import (
    ArrayNode,
    ObjectNode,
    ScalarNode,
    SchemaNode,
    WrappedNode,
)
from entityforms.models.enums import FieldDataType, WrapperKind

logger = logging.getLogger(__name__)

MAX_UNWRAP_DEPTH = 10

_SCALAR_DATA_TYPES = {
    "string": FieldDataType.STRING,
    "number": FieldDataType.NUMBER,
    "integer": FieldDataType.INTEGER,
    "boolean": FieldDataType.BOOLEAN,
    "date": FieldDataType.DATE,
    "datetime": FieldDataType.DATETIME,
    "null": FieldDataType.NULL,
    "any": FieldDataType.ANY,
}


@dataclass
class UnwrappedNode:
    """Result of stripping wrapper layers from a node."""

    node: SchemaNode
    is_optional: bool = False
    is_nullable: bool = False
    has_default: bool = False
    default: Any = None


def unwrap(node: SchemaNode, max_depth: int = MAX_UNWRAP_DEPTH, path: str | None = None) -> UnwrappedNode:
    """
    Strip wrapper layers down to the base node.

    When the iteration ceiling is reached the traversal stops and the
    remaining wrapper is returned as the base, which classifies as ``any``.
    The ceiling is logged only for calls that name a field path, so
    internal probes of the same node do not repeat the warning.

    Args:
        node: Schema node, possibly wrapped
        max_depth: Maximum number of wrapper layers to strip
        path: Field path used in log messages

    Returns:
        UnwrappedNode with the innermost node and the wrapper flags seen
    """
    result = UnwrappedNode(node=node)
    current = node

    for _ in range(max_depth):
        if not isinstance(current, WrappedNode):
            break
        if current.kind == WrapperKind.OPTIONAL.value:
            result.is_optional = True
        elif current.kind == WrapperKind.NULLABLE.value:
            result.is_nullable = True
        elif not result.has_default:
            # Outermost default wins
            result.has_default = True
            result.default = current.default
        current = current.inner
    else:
        if isinstance(current, WrappedNode) and path is not None:
            logger.warning(
                f"Wrapper chain for {path} exceeds {max_depth} layers; "
                f"stopping at '{current.kind}' wrapper"
            )

    result.node = current
    return result


def get_metadata(node: SchemaNode, max_depth: int = MAX_UNWRAP_DEPTH, path: str | None = None) -> dict[str, Any]:
    """
    Find the nearest non-empty metadata bag, scanning from the outermost node inward.

    A bag that is present but not a mapping is treated as empty and logged.
    A node description is folded in under ``description`` when the bag
    does not already carry one. Never raises.

    Args:
        node: Schema node, possibly wrapped
        max_depth: Maximum number of wrapper layers to visit
        path: Field path used in log messages

    Returns:
        Copy of the metadata bag, or an empty dict
    """
    current: SchemaNode | None = node
    description: str | None = None
    bag: dict[str, Any] = {}

    # One extra step so the base node under a full-depth chain is still visited
    for _ in range(max_depth + 1):
        if current is None:
            break
        if description is None and current.description:
            description = current.description

        meta = current.meta
        if meta is not None and not isinstance(meta, dict):
            logger.warning(
                f"Ignoring malformed metadata on {path or 'schema node'}: "
                f"expected a mapping, got {type(meta).__name__}"
            )
        elif meta:
            bag = {str(key): value for key, value in meta.items()}
            break

        current = current.inner if isinstance(current, WrappedNode) else None

    if description and "description" not in bag:
        bag["description"] = description
    return bag


def get_object_shape(node: SchemaNode, max_depth: int = MAX_UNWRAP_DEPTH) -> dict[str, SchemaNode]:
    """Return the field mapping of an (optionally wrapped) object node, else {}."""
    base = unwrap(node, max_depth).node
    if isinstance(base, ObjectNode):
        return base.shape
    return {}


def classify(node: SchemaNode, max_depth: int = MAX_UNWRAP_DEPTH) -> FieldDataType:
    """
    Map a node to its data kind.

    Wrapped nodes are unwrapped first; exotic shapes classify as ``any``.
    """
    return classify_base(unwrap(node, max_depth).node)


def classify_base(base: SchemaNode) -> FieldDataType:
    """Map an already unwrapped node to its data kind."""
    if isinstance(base, ScalarNode):
        return _SCALAR_DATA_TYPES.get(base.kind, FieldDataType.ANY)
    if isinstance(base, ArrayNode):
        return FieldDataType.ARRAY
    if isinstance(base, ObjectNode):
        return FieldDataType.OBJECT
    return FieldDataType.ANY


def array_element_type(base: SchemaNode, max_depth: int = MAX_UNWRAP_DEPTH) -> FieldDataType | None:
    """Data kind of an unwrapped array node's elements, or None when not an array or untyped."""
    if not isinstance(base, ArrayNode) or base.element is None:
        return None
    return classify(base.element, max_depth)


# =============================================================================
# Metadata value readers
# =============================================================================


def is_metadata_true(value: Any) -> bool:
    """Check a boolean-like metadata value (real bools or 'true'/'True' strings)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def metadata_number(value: Any) -> int | float | None:
    """Read a numeric metadata value; bools, NaN, infinities and non-numeric values yield None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def metadata_int(value: Any) -> int | None:
    """Read an integral metadata value."""
    number = metadata_number(value)
    if number is None:
        return None
    return int(number)


def metadata_str(value: Any) -> str | None:
    """Read a non-empty string metadata value."""
    if isinstance(value, str) and value:
        return value
    return None


def unqualified_name(value: str) -> str:
    """Segment after the last dot of a qualified model path."""
    return value.rsplit(".", 1)[-1] if "." in value else value
