"""
Form data helpers over a compiled EntityFormSchema.

Used by consumers that render, validate and submit entity forms. Form data
is keyed by field name; dot-path names of expanded nested fields are read
from either a flat key or the nested mapping, and payloads write them back
as nested mappings.
"""

import re
from typing import Any

from entityforms.models.contracts.entity_forms import (
    EntityFormSchema,
    FieldDefinition,
    FormValidationError,
)
from entityforms.models.enums import FormMode

_MISSING = object()


def _read_value(data: dict[str, Any], name: str) -> Any:
    """Value for a field name, from a flat key or by walking a dot-path."""
    if name in data:
        return data[name]
    if "." not in name:
        return _MISSING

    current: Any = data
    for part in name.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _write_value(payload: dict[str, Any], name: str, value: Any) -> None:
    """Set a value, creating nested mappings along a dot-path."""
    parts = name.split(".")
    target = payload
    for part in parts[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child
    target[parts[-1]] = value


def _is_empty(value: Any) -> bool:
    return value is _MISSING or value is None or value == ""


# =============================================================================
# Field selection
# =============================================================================


def get_fields_for_fieldset(schema: EntityFormSchema, fieldset_id: str) -> list[FieldDefinition]:
    """Member field definitions of one fieldset, in fieldset order ([] if unknown)."""
    for fieldset in schema.field_sets:
        if fieldset.id == fieldset_id:
            return [schema.fields[name] for name in fieldset.fields if name in schema.fields]
    return []


def get_visible_fields(schema: EntityFormSchema) -> list[FieldDefinition]:
    """Non-hidden field definitions in field order."""
    return [
        schema.fields[name]
        for name in schema.field_order
        if name in schema.fields and not schema.fields[name].hidden
    ]


def get_editable_field_defs(schema: EntityFormSchema) -> list[FieldDefinition]:
    """Field definitions of the editable fields."""
    return [schema.fields[name] for name in schema.editable_fields if name in schema.fields]


# =============================================================================
# Validation
# =============================================================================


def validate_form_data(
    schema: EntityFormSchema,
    data: dict[str, Any],
    mode: FormMode | str = FormMode.CREATE,
) -> list[FormValidationError]:
    """
    Apply the structural validation rules of every editable field.

    Only declared constraints are checked: required, string length,
    pattern and numeric bounds. The primary key is not required when
    creating.

    Args:
        schema: Compiled form schema
        data: Form data keyed by field name
        mode: Form mode

    Returns:
        Validation errors, empty when the data is valid
    """
    mode = FormMode(mode)
    errors: list[FormValidationError] = []

    for name in schema.editable_fields:
        definition = schema.fields.get(name)
        if definition is None:
            continue

        value = _read_value(data, name)
        rules = definition.validation

        if _is_empty(value):
            if rules.required and not (mode == FormMode.CREATE and definition.is_primary_key):
                errors.append(FormValidationError(field=name, message=f"{definition.label} is required"))
            continue

        if isinstance(value, str):
            if rules.min_length is not None and len(value) < rules.min_length:
                errors.append(FormValidationError(
                    field=name,
                    message=f"{definition.label} must be at least {rules.min_length} characters",
                ))
            if rules.max_length is not None and len(value) > rules.max_length:
                errors.append(FormValidationError(
                    field=name,
                    message=f"{definition.label} must be at most {rules.max_length} characters",
                ))
            if rules.pattern and re.search(rules.pattern, value) is None:
                errors.append(FormValidationError(
                    field=name,
                    message=rules.pattern_description or f"{definition.label} has invalid format",
                ))

        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            if rules.min is not None and value < rules.min:
                errors.append(FormValidationError(
                    field=name, message=f"{definition.label} must be at least {rules.min:g}"
                ))
            if rules.max is not None and value > rules.max:
                errors.append(FormValidationError(
                    field=name, message=f"{definition.label} must be at most {rules.max:g}"
                ))

    return errors


# =============================================================================
# Initial data and payloads
# =============================================================================


def build_initial_form_data(
    schema: EntityFormSchema,
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Schema defaults overlaid by the non-None values of an existing record.

    Nested values of expanded fields are flattened onto their dot-path names.
    """
    data: dict[str, Any] = dict(schema.default_values)
    if not existing:
        return data

    for key, value in existing.items():
        if value is not None:
            data[key] = value

    for name in schema.fields:
        if "." not in name:
            continue
        value = _read_value(existing, name)
        if value is not _MISSING and value is not None:
            data[name] = value

    return data


def build_save_payload(
    schema: EntityFormSchema,
    form_data: dict[str, Any],
    mode: FormMode | str = FormMode.CREATE,
) -> dict[str, Any]:
    """
    Restrict form data to what the write model accepts.

    Editable fields are copied (the primary key is dropped when creating);
    the primary key is added when editing. Dot-path fields are written as
    nested mappings.
    """
    mode = FormMode(mode)
    payload: dict[str, Any] = {}

    for name in schema.editable_fields:
        definition = schema.fields.get(name)
        if definition is None:
            continue
        if mode == FormMode.CREATE and definition.is_primary_key:
            continue

        value = _read_value(form_data, name)
        if value is not _MISSING:
            _write_value(payload, name, value)

    primary_key = schema.entity.primary_key
    if mode == FormMode.EDIT and primary_key:
        value = _read_value(form_data, primary_key)
        if value is not _MISSING:
            _write_value(payload, primary_key, value)

    return payload
