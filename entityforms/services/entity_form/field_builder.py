"""
Field Definition Builder

Turns one field (name + schema node + editability) into a complete
FieldDefinition: label, editor type, validation, display hints, navigation
binding and default value. Every value comes from the field's metadata bag
or its structural shape; no field names are special-cased apart from the
price/cost currency hint.
"""

import logging
from typing import Any

from entityforms.config import Settings, get_settings
from entityforms.models.contracts.entity_forms import (
    BooleanDisplay,
    FieldDefinition,
    FieldDisplay,
    FieldOption,
    FieldValidation,
    NavigationConfig,
    NumberFormat,
)
from entityforms.models.contracts.schema_nodes import SchemaNode
from entityforms.models.enums import FieldDataType, FieldEditorType, Severity
from entityforms.services.entity_form.descriptors import (
    array_element_type,
    classify_base,
    get_metadata,
    is_metadata_true,
    metadata_int,
    metadata_number,
    metadata_str,
    unqualified_name,
    unwrap,
)
from entityforms.services.entity_form.grouping import detect_fieldset
from entityforms.services.entity_form.labels import format_field_label, lower_first

logger = logging.getLogger(__name__)

# x-custom-renderer names with a dedicated editor; anything else is CUSTOM
CUSTOM_RENDERER_EDITORS: dict[str, FieldEditorType] = {
    "images": FieldEditorType.IMAGES,
    "image": FieldEditorType.IMAGES,
    "textarea": FieldEditorType.TEXTAREA,
    "editor": FieldEditorType.EDITOR,
    "richtext": FieldEditorType.EDITOR,
    "markdown": FieldEditorType.MARKDOWN,
    "code": FieldEditorType.CODE,
    "color": FieldEditorType.COLOR,
    "rating": FieldEditorType.RATING,
    "slider": FieldEditorType.SLIDER,
    "switch": FieldEditorType.SWITCH,
    "chips": FieldEditorType.CHIPS,
}

FORMAT_EDITORS: dict[str, FieldEditorType] = {
    "date-time": FieldEditorType.DATETIME,
    "date": FieldEditorType.DATE,
    "time": FieldEditorType.TIME,
    "email": FieldEditorType.EMAIL,
    "phone": FieldEditorType.PHONE,
    "tel": FieldEditorType.PHONE,
    "uri": FieldEditorType.URL,
    "url": FieldEditorType.URL,
    "password": FieldEditorType.PASSWORD,
}

LONG_TEXT_EDITORS = frozenset({
    FieldEditorType.TEXTAREA,
    FieldEditorType.EDITOR,
    FieldEditorType.MARKDOWN,
    FieldEditorType.CODE,
})

NUMERIC_EDITORS = frozenset({
    FieldEditorType.NUMBER,
    FieldEditorType.INTEGER,
    FieldEditorType.DECIMAL,
    FieldEditorType.CURRENCY,
})

BOOLEAN_EDITORS = frozenset({FieldEditorType.BOOLEAN, FieldEditorType.SWITCH})

_CURRENCY_NAME_HINTS = ("price", "cost")


def is_hidden(meta: dict[str, Any]) -> bool:
    """Whether a field is flagged hidden from display."""
    return is_metadata_true(meta.get("x-hidden")) or is_metadata_true(meta.get("x-hidden-field"))


def normalize_navigation_relation(value: Any) -> str | None:
    """
    Normalize an x-navigation-relation value to the sibling field name.

    "Catalog.Models.ManufacturerId" -> "manufacturerId"
    """
    relation = metadata_str(value)
    if not relation:
        return None
    return lower_first(unqualified_name(relation.strip()))


def build_options(meta: dict[str, Any], field_name: str = "") -> list[FieldOption] | None:
    """Static options from x-options (option maps or bare values) or x-enum."""
    raw = meta.get("x-options")
    if not isinstance(raw, list) or not raw:
        raw = meta.get("x-enum")
    if not isinstance(raw, list) or not raw:
        return None

    options: list[FieldOption] = []
    for item in raw:
        if isinstance(item, dict) and "value" in item:
            value = item["value"]
            if not isinstance(value, (str, int, float, bool)):
                continue
            label = metadata_str(item.get("label")) or format_field_label(str(value))
            options.append(FieldOption(
                value=value,
                label=label,
                icon=metadata_str(item.get("icon")),
                disabled=is_metadata_true(item["disabled"]) if "disabled" in item else None,
            ))
        elif isinstance(item, (str, int, float, bool)):
            options.append(FieldOption(value=item, label=format_field_label(str(item))))
        else:
            logger.debug(f"Skipping unusable option on {field_name}: {item!r}")

    return options or None


def build_navigation(meta: dict[str, Any]) -> NavigationConfig | None:
    """Navigation binding for a field that declares its own x-navigation-target."""
    target = metadata_str(meta.get("x-navigation-target"))
    if not target:
        return None

    navigation_filter = meta.get("x-navigation-filter")
    return NavigationConfig(
        target=target,
        model_name=unqualified_name(target),
        display_field=normalize_navigation_relation(meta.get("x-navigation-relation")),
        value_field=metadata_str(meta.get("x-navigation-value-field")),
        parent_field=metadata_str(meta.get("x-parent-field")),
        filter=navigation_filter if isinstance(navigation_filter, dict) else None,
    )


def _has_currency_hint(meta: dict[str, Any]) -> bool:
    """x-currency may be a flag or a currency code."""
    value = meta.get("x-currency")
    if isinstance(value, str):
        return bool(value) and value.strip().lower() != "false"
    return is_metadata_true(value)


def resolve_editor_type(
    field_name: str,
    data_type: FieldDataType,
    element_type: FieldDataType | None,
    meta: dict[str, Any],
    editable: bool,
    has_options: bool,
    settings: Settings,
) -> FieldEditorType:
    """
    Pick the editor type, in strict precedence order.

    custom renderer > navigation target > static options > read-only >
    format hint > data type default.
    """
    renderer = metadata_str(meta.get("x-custom-renderer"))
    if renderer:
        return CUSTOM_RENDERER_EDITORS.get(renderer.lower(), FieldEditorType.CUSTOM)

    multiple = is_metadata_true(meta.get("x-multiple"))
    if metadata_str(meta.get("x-navigation-target")):
        return FieldEditorType.MULTICOMBOBOX if multiple else FieldEditorType.COMBOBOX

    if has_options:
        return FieldEditorType.MULTISELECT if multiple else FieldEditorType.SELECT

    if not editable or is_metadata_true(meta.get("readOnly")):
        return FieldEditorType.READONLY

    fmt = metadata_str(meta.get("format"))
    if fmt and fmt.lower() in FORMAT_EDITORS:
        return FORMAT_EDITORS[fmt.lower()]

    if data_type == FieldDataType.STRING:
        max_length = metadata_int(meta.get("maxLength"))
        if max_length is not None and max_length > settings.long_text_threshold:
            return FieldEditorType.TEXTAREA
        return FieldEditorType.TEXT

    if data_type == FieldDataType.NUMBER:
        lowered = field_name.lower()
        if _has_currency_hint(meta) or any(hint in lowered for hint in _CURRENCY_NAME_HINTS):
            return FieldEditorType.CURRENCY
        return FieldEditorType.NUMBER

    if data_type == FieldDataType.INTEGER:
        return FieldEditorType.INTEGER
    if data_type == FieldDataType.BOOLEAN:
        return FieldEditorType.BOOLEAN
    if data_type == FieldDataType.DATE:
        return FieldEditorType.DATE
    if data_type == FieldDataType.DATETIME:
        return FieldEditorType.DATETIME

    if data_type == FieldDataType.ARRAY:
        if element_type == FieldDataType.STRING:
            return FieldEditorType.CHIPS
        return FieldEditorType.CUSTOM
    if data_type == FieldDataType.OBJECT:
        return FieldEditorType.CUSTOM

    return FieldEditorType.TEXT


def build_validation(
    meta: dict[str, Any],
    is_optional: bool,
    is_nullable: bool,
    editable: bool,
    is_primary_key: bool,
    hidden: bool,
) -> FieldValidation:
    """Structural validation rules; bounds are copied from metadata when present."""
    return FieldValidation(
        required=not is_optional and not is_nullable and editable and not is_primary_key and not hidden,
        min=metadata_number(meta.get("minimum")),
        max=metadata_number(meta.get("maximum")),
        min_length=metadata_int(meta.get("minLength")),
        max_length=metadata_int(meta.get("maxLength")),
        pattern=metadata_str(meta.get("pattern")),
        pattern_description=metadata_str(meta.get("x-pattern-description")),
    )


def _severity(value: Any, fallback: Severity) -> Severity:
    try:
        return Severity(value)
    except ValueError:
        return fallback


def _currency_code(meta: dict[str, Any]) -> str | None:
    value = metadata_str(meta.get("x-currency"))
    if value and value.strip().lower() not in ("true", "false"):
        return value
    return None


def build_display(meta: dict[str, Any], editor_type: FieldEditorType, settings: Settings) -> FieldDisplay:
    """Display hints for a field."""
    display = FieldDisplay()

    col_span = metadata_int(meta.get("x-col-span"))
    if col_span is not None:
        display.col_span = col_span
    elif editor_type in LONG_TEXT_EDITORS:
        display.col_span = settings.full_width_col_span

    display.placeholder = metadata_str(meta.get("x-placeholder"))
    display.help_text = metadata_str(meta.get("x-help-text")) or metadata_str(meta.get("description"))
    display.tooltip = metadata_str(meta.get("x-tooltip"))

    icon = metadata_str(meta.get("x-icon"))
    if icon:
        display.icon = icon
        display.icon_position = "right" if meta.get("x-icon-position") == "right" else "left"

    display.class_name = metadata_str(meta.get("x-class"))
    display.input_class_name = metadata_str(meta.get("x-input-class"))
    display.date_format = metadata_str(meta.get("x-date-format"))

    if editor_type in BOOLEAN_EDITORS:
        display.boolean_display = BooleanDisplay(
            true_label=metadata_str(meta.get("x-tag-true-label")) or "Yes",
            false_label=metadata_str(meta.get("x-tag-false-label")) or "No",
            true_severity=_severity(meta.get("x-tag-true-severity"), Severity.SUCCESS),
            false_severity=_severity(meta.get("x-tag-false-severity"), Severity.DANGER),
        )

    number_format = meta.get("x-number-format")
    if editor_type in NUMERIC_EDITORS and (number_format or editor_type == FieldEditorType.CURRENCY):
        overrides = number_format if isinstance(number_format, dict) else {}
        style = "currency" if editor_type == FieldEditorType.CURRENCY else "decimal"
        if overrides.get("style") in ("decimal", "currency", "percent"):
            style = overrides["style"]
        display.number_format = NumberFormat(
            locale=metadata_str(overrides.get("locale")),
            style=style,
            currency=_currency_code(meta) or settings.default_currency,
            minimum_fraction_digits=metadata_int(meta.get("x-min-fraction-digits")),
            maximum_fraction_digits=metadata_int(meta.get("x-max-fraction-digits")),
        )

    return display


def resolve_default_value(meta: dict[str, Any], schema_default: Any = None) -> Any:
    """Explicit x-default annotation > default annotation > schema-level default."""
    if meta.get("x-default") is not None:
        return meta["x-default"]
    if meta.get("default") is not None:
        return meta["default"]
    return schema_default


def build_field_definition(
    field_name: str,
    node: SchemaNode,
    editable: bool,
    primary_key_field: str | None = None,
    settings: Settings | None = None,
    label_name: str | None = None,
    meta: dict[str, Any] | None = None,
) -> FieldDefinition:
    """
    Build the FieldDefinition for one field.

    Pure function of its inputs. The metadata bag is read from the node
    unless the caller already holds it.

    Args:
        field_name: Field name (dot-path for expanded nested fields)
        node: Field schema node, possibly wrapped
        editable: Whether the editability resolver allows submitting the field
        primary_key_field: Entity primary key field name
        settings: Compiler settings (defaults to get_settings())
        label_name: Name formatted into the label when x-label is absent
            (the member name for nested fields)
        meta: Pre-read metadata bag for the node

    Returns:
        FieldDefinition
    """
    settings = settings or get_settings()
    depth = settings.max_unwrap_depth

    if meta is None:
        meta = get_metadata(node, depth, path=field_name)
    unwrapped = unwrap(node, depth, path=field_name)
    data_type = classify_base(unwrapped.node)
    element_type = array_element_type(unwrapped.node, depth)

    is_primary_key = field_name == primary_key_field
    hidden = is_hidden(meta)
    options = build_options(meta, field_name)
    editor_type = resolve_editor_type(
        field_name, data_type, element_type, meta, editable, bool(options), settings
    )
    fieldset_id, _ = detect_fieldset(field_name, meta, data_type, settings)
    validation = build_validation(
        meta,
        unwrapped.is_optional,
        unwrapped.is_nullable,
        editable,
        is_primary_key,
        hidden,
    )
    custom_props = meta.get("x-custom-props")
    sort_order = metadata_int(meta.get("x-sort-order"))

    return FieldDefinition(
        name=field_name,
        label=metadata_str(meta.get("x-label")) or format_field_label(label_name or field_name),
        data_type=data_type,
        editor_type=editor_type,
        sort_order=sort_order if sort_order is not None else settings.default_sort_order,
        field_set=fieldset_id,
        required=validation.required,
        read_only=not editable or is_metadata_true(meta.get("readOnly")),
        nullable=unwrapped.is_nullable,
        hidden=hidden,
        editable=editable,
        is_primary_key=is_primary_key,
        navigation=build_navigation(meta),
        navigation_relation=normalize_navigation_relation(meta.get("x-navigation-relation")),
        options=options,
        validation=validation,
        display=build_display(meta, editor_type, settings),
        custom_renderer=metadata_str(meta.get("x-custom-renderer")),
        custom_props=custom_props if isinstance(custom_props, dict) else None,
        default_value=resolve_default_value(meta, unwrapped.default if unwrapped.has_default else None),
    )
