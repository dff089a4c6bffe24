"""
Aggregate assembly.

Runs every per-field step over a resolved read model and combines the
results into one EntityFormSchema with its entity-level metadata.
Everything here is synchronous; schema lookup happens in the compiler.
"""

import logging
from collections.abc import Iterable
from typing import Any

from entityforms.config import Settings, get_settings
from entityforms.models.contracts.entity_forms import (
    CompileOptions,
    EntityFormSchema,
    EntityMetadata,
    FieldDefinition,
)
from entityforms.models.contracts.schema_nodes import ObjectNode, SchemaNode
from entityforms.models.enums import FieldDataType
from entityforms.services.entity_form.descriptors import (
    classify,
    get_metadata,
    is_metadata_true,
    metadata_str,
    unqualified_name,
    unwrap,
)
from entityforms.services.entity_form.editability import resolve_editable_fields, scan_read_model
from entityforms.services.entity_form.field_builder import build_field_definition, is_hidden
from entityforms.services.entity_form.grouping import group_fields
from entityforms.services.entity_form.labels import (
    derive_entity_label,
    derive_write_model_id,
    lower_first,
    pluralize,
)
from entityforms.services.entity_form.navigation import link_navigation_relations
from entityforms.services.entity_form.nested import expand_nested_object

logger = logging.getLogger(__name__)

# Entity metadata attribute -> candidate field names, first match wins
AUDIT_FIELDS: dict[str, tuple[str, ...]] = {
    "created_on_field": ("createdOn", "createdAt"),
    "created_by_field": ("createdBy", "createdByName"),
    "updated_on_field": ("updatedOn", "modifiedOn"),
    "updated_by_field": ("updatedBy", "updatedByName"),
    "is_active_field": ("isActive",),
}

IS_ACTIVE_FIELD = "isActive"


def resolve_write_model_id(
    read_model_id: str,
    schema_meta: dict[str, Any],
    options: CompileOptions | None = None,
) -> str:
    """Explicit option > schema-level x-save-model > derived from the read model id."""
    if options and options.write_model_id:
        return options.write_model_id

    save_model = metadata_str(schema_meta.get("x-save-model"))
    if save_model:
        return unqualified_name(save_model.strip())

    return derive_write_model_id(read_model_id)


def detect_primary_key(label: str, field_names: Iterable[str]) -> str:
    """
    Find the primary key field.

    ``{label}Id`` (label camel-cased, spaces removed) > first field ending
    in "Id" > the literal "id".
    """
    names = list(field_names)
    candidate = f"{lower_first(label.replace(' ', ''))}Id"
    if candidate in names:
        return candidate

    for name in names:
        if name.endswith("Id"):
            return name

    return "id"


def _find_audit_fields(fields: dict[str, FieldDefinition]) -> dict[str, str]:
    found: dict[str, str] = {}
    for attribute, candidates in AUDIT_FIELDS.items():
        for candidate in candidates:
            if candidate in fields:
                found[attribute] = candidate
                break
    return found


def assemble_entity_form_schema(
    read_model_id: str,
    read_node: SchemaNode,
    write_model_id: str,
    write_field_names: Iterable[str] | None = None,
    options: CompileOptions | None = None,
    settings: Settings | None = None,
    schema_meta: dict[str, Any] | None = None,
) -> EntityFormSchema:
    """
    Build the compiled form schema for a resolved read model.

    Args:
        read_model_id: Read model identifier
        read_node: Read model schema node (an object, possibly wrapped)
        write_model_id: Resolved write model identifier
        write_field_names: Write model field names, or None when no write model is registered
        options: Caller overrides
        settings: Compiler settings
        schema_meta: Pre-read schema-level metadata of the read model

    Returns:
        EntityFormSchema
    """
    settings = settings or get_settings()
    options = options or CompileOptions()
    depth = settings.max_unwrap_depth

    if schema_meta is None:
        schema_meta = get_metadata(read_node, depth, path=read_model_id)
    base = unwrap(read_node, depth, path=read_model_id).node
    if isinstance(base, ObjectNode):
        shape = base.shape
    else:
        logger.warning(f"Read model {read_model_id} is not an object schema; compiling with no fields")
        shape = {}

    scan = scan_read_model(shape, depth)
    entity_read_only = is_metadata_true(schema_meta.get("x-read-only"))
    editable_set = resolve_editable_fields(
        shape.keys(),
        scan,
        write_field_names=write_field_names,
        entity_read_only=entity_read_only,
    )

    label = options.label or derive_entity_label(read_model_id)
    primary_key = options.primary_key_field or detect_primary_key(label, shape.keys())

    # =========================================================================
    # Field definitions
    # =========================================================================
    fields: dict[str, FieldDefinition] = {}
    fieldset_labels: dict[str, str] = {}
    editable_names: list[str] = []

    for field_name, node in shape.items():
        meta = scan.metadata[field_name]
        if is_hidden(meta):
            continue

        if classify(node, depth) == FieldDataType.OBJECT:
            expansion = expand_nested_object(
                field_name,
                node,
                meta,
                editable_set,
                primary_key_field=primary_key,
                settings=settings,
            )
            if expansion is not None:
                fieldset_labels.setdefault(expansion.fieldset_id, expansion.fieldset_label)
                for definition in expansion.fields:
                    fields[definition.name] = definition
                    if definition.editable:
                        editable_names.append(definition.name)
                continue

        definition = build_field_definition(
            field_name,
            node,
            field_name in editable_set,
            primary_key_field=primary_key,
            settings=settings,
            meta=meta,
        )
        fields[field_name] = definition
        if definition.editable:
            editable_names.append(field_name)

        if definition.data_type == FieldDataType.OBJECT:
            fieldset_labels.setdefault(
                definition.field_set,
                metadata_str(meta.get("x-field-set")) or definition.label,
            )
        else:
            explicit_group = metadata_str(meta.get("x-field-set"))
            if explicit_group:
                fieldset_labels.setdefault(definition.field_set, explicit_group)

    fields = link_navigation_relations(fields, scan, editable_set)
    grouped = group_fields(fields, fieldset_labels, settings)

    # =========================================================================
    # Aggregate lists
    # =========================================================================
    required_fields = [name for name, d in fields.items() if d.required]

    default_values: dict[str, Any] = {
        name: d.default_value for name, d in fields.items() if d.default_value is not None
    }
    if IS_ACTIVE_FIELD in fields and IS_ACTIVE_FIELD not in default_values:
        default_values[IS_ACTIVE_FIELD] = True

    # =========================================================================
    # Entity metadata
    # =========================================================================
    entity = EntityMetadata(
        read_model=read_model_id,
        write_model=write_model_id,
        label=label,
        plural_label=options.plural_label or pluralize(label),
        primary_key=primary_key,
        display_field=metadata_str(schema_meta.get("x-display-field")),
        api_path=metadata_str(schema_meta.get("x-api-path")),
        route_path=options.route_path,
        list_path=options.list_path,
        is_read_only=entity_read_only,
        is_creatable=not is_metadata_true(schema_meta.get("x-not-creatable")),
        is_deletable=not is_metadata_true(schema_meta.get("x-not-deletable")),
        is_selectable=not is_metadata_true(schema_meta.get("x-not-selectable")),
        **_find_audit_fields(fields),
    )

    logger.info(
        f"Compiled form schema for {read_model_id}: {len(fields)} fields in "
        f"{len(grouped.field_sets)} fieldsets, {len(editable_names)} editable"
    )

    return EntityFormSchema(
        entity=entity,
        field_sets=grouped.field_sets,
        fields=fields,
        field_order=grouped.field_order,
        editable_fields=editable_names,
        required_fields=required_fields,
        default_values=default_values,
    )
