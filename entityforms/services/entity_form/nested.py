"""
Nested object expansion.

Flattens one level of an object field into dot-path pseudo-fields
(``nutrition.calories``) that share one fieldset synthesized for the
parent. Expansion is single-level: members that are themselves objects
are skipped.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from entityforms.config import Settings, get_settings
from entityforms.models.contracts.entity_forms import FieldDefinition
from entityforms.models.contracts.schema_nodes import SchemaNode
from entityforms.models.enums import FieldDataType
from entityforms.services.entity_form.descriptors import (
    classify,
    get_object_shape,
    metadata_str,
)
from entityforms.services.entity_form.field_builder import build_field_definition
from entityforms.services.entity_form.labels import fieldset_id_from_label, format_field_label

logger = logging.getLogger(__name__)


@dataclass
class NestedExpansion:
    """Fields produced from one parent object field."""

    parent: str
    fieldset_id: str
    fieldset_label: str
    fields: list[FieldDefinition] = field(default_factory=list)


def nested_fieldset_label(parent_name: str, parent_meta: dict[str, Any]) -> str:
    """x-field-set > x-label > formatted parent name."""
    return (
        metadata_str(parent_meta.get("x-field-set"))
        or metadata_str(parent_meta.get("x-label"))
        or format_field_label(parent_name)
    )


def expand_nested_object(
    parent_name: str,
    parent_node: SchemaNode,
    parent_meta: dict[str, Any],
    editable_fields: set[str],
    primary_key_field: str | None = None,
    settings: Settings | None = None,
) -> NestedExpansion | None:
    """
    Expand an object field into one FieldDefinition per member.

    A member is editable when either the parent name or its full dot-path
    is in the editable set. Hidden members are not emitted.

    Args:
        parent_name: Object field name
        parent_node: Object field schema node, possibly wrapped
        parent_meta: Metadata bag of the parent field
        editable_fields: Resolved editable field names
        primary_key_field: Entity primary key field name
        settings: Compiler settings

    Returns:
        NestedExpansion, or None when the object shape is empty
    """
    settings = settings or get_settings()
    depth = settings.max_unwrap_depth

    shape = get_object_shape(parent_node, depth)
    if not shape:
        return None

    label = nested_fieldset_label(parent_name, parent_meta)
    expansion = NestedExpansion(
        parent=parent_name,
        fieldset_id=fieldset_id_from_label(label),
        fieldset_label=label,
    )

    for member_name, member_node in shape.items():
        path = f"{parent_name}.{member_name}"

        if classify(member_node, depth) == FieldDataType.OBJECT:
            logger.debug(f"Skipping nested object {path}: expansion is single-level")
            continue

        editable = parent_name in editable_fields or path in editable_fields
        definition = build_field_definition(
            path,
            member_node,
            editable,
            primary_key_field=primary_key_field,
            settings=settings,
            label_name=member_name,
        )
        if definition.hidden:
            continue
        expansion.fields.append(definition.model_copy(update={"field_set": expansion.fieldset_id}))

    return expansion
