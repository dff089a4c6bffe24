"""
Fieldset grouping and ordering.

Fieldset assignment is metadata-driven:
1. Explicit x-field-set (highest priority)
2. Object fields get their own fieldset named by x-label or the formatted field name
3. The default fieldset for everything else
"""

from dataclasses import dataclass, field
from typing import Any

from entityforms.config import Settings, get_settings
from entityforms.models.contracts.entity_forms import FieldDefinition, FieldSetDefinition
from entityforms.models.enums import FieldDataType
from entityforms.services.entity_form.descriptors import metadata_str
from entityforms.services.entity_form.labels import fieldset_id_from_label, format_field_label


@dataclass
class GroupedFields:
    """Ordered fieldsets and the flattened field order."""

    field_sets: list[FieldSetDefinition] = field(default_factory=list)
    field_order: list[str] = field(default_factory=list)


def detect_fieldset(
    field_name: str,
    meta: dict[str, Any],
    data_type: FieldDataType | None = None,
    settings: Settings | None = None,
) -> tuple[str, str]:
    """
    Detect which fieldset a field belongs to.

    Returns:
        (fieldset id, fieldset label)
    """
    settings = settings or get_settings()

    label = metadata_str(meta.get("x-field-set"))
    if label:
        return fieldset_id_from_label(label), label

    if data_type == FieldDataType.OBJECT:
        label = metadata_str(meta.get("x-label")) or format_field_label(field_name)
        return fieldset_id_from_label(label), label

    return settings.default_fieldset_id, settings.default_fieldset_label


def group_fields(
    fields: dict[str, FieldDefinition],
    fieldset_labels: dict[str, str] | None = None,
    settings: Settings | None = None,
) -> GroupedFields:
    """
    Bucket fields into fieldsets and order both.

    Fields sort by sort_order within their fieldset, keeping declaration
    order on ties. The default fieldset sorts first (key 0); every other
    fieldset takes the sort order of its first member, keeping first
    appearance on ties.

    Args:
        fields: Field definitions in declaration order
        fieldset_labels: Fieldset id -> label (falls back to the formatted id)
        settings: Compiler settings

    Returns:
        GroupedFields with fieldsets in order and the flattened field order
    """
    settings = settings or get_settings()
    fieldset_labels = fieldset_labels or {}

    buckets: dict[str, list[FieldDefinition]] = {}
    for definition in fields.values():
        buckets.setdefault(definition.field_set, []).append(definition)

    field_sets: list[FieldSetDefinition] = []
    for fieldset_id, members in buckets.items():
        members.sort(key=lambda d: d.sort_order)
        is_default = fieldset_id == settings.default_fieldset_id
        if is_default:
            label = fieldset_labels.get(fieldset_id, settings.default_fieldset_label)
        else:
            label = fieldset_labels.get(fieldset_id) or format_field_label(fieldset_id)
        field_sets.append(FieldSetDefinition(
            id=fieldset_id,
            label=label,
            sort_order=0 if is_default else members[0].sort_order,
            collapsible=not is_default,
            collapsed=not is_default,
            fields=[d.name for d in members],
        ))

    field_sets.sort(key=lambda fs: fs.sort_order)

    field_order: list[str] = []
    for fieldset in field_sets:
        field_order.extend(fieldset.fields)

    return GroupedFields(field_sets=field_sets, field_order=field_order)
