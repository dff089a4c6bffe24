"""
Entity form contract models.

The compiled configuration consumed by presentation layers. Models use
snake_case attributes and serialize with camelCase aliases
(``model_dump(by_alias=True)``), matching what renderers expect.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from entityforms.models.enums import FieldDataType, FieldEditorType, Severity


SCHEMA_VERSION = "1.0"


class ContractModel(BaseModel):
    """Base for contracts serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== OPTIONS ====================


class CompileOptions(ContractModel):
    """Caller-supplied overrides for a compilation"""
    write_model_id: str | None = Field(
        default=None, description="Explicit write (save) model identifier")
    label: str | None = Field(default=None, description="Entity display label")
    plural_label: str | None = Field(default=None, description="Entity plural label")
    primary_key_field: str | None = Field(default=None, description="Primary key field name")
    route_path: str | None = Field(default=None, description="Route path for entity pages")
    list_path: str | None = Field(default=None, description="List page path")


# ==================== FIELD MODELS ====================


class FieldOption(ContractModel):
    """Static option for select/multiselect fields"""
    value: str | int | float | bool
    label: str
    icon: str | None = None
    disabled: bool | None = None


class NavigationConfig(ContractModel):
    """Lookup binding for combobox/multicombobox fields"""
    target: str = Field(..., description="Full navigation target model path")
    model_name: str = Field(..., description="Model name (segment after the last dot)")
    display_field: str | None = Field(
        default=None, description="Display field shown in read-only mode")
    value_field: str | None = Field(default=None, description="Value field (usually the id)")
    filter: dict[str, Any] | None = Field(
        default=None, description="Additional filter applied to the lookup query")
    parent_field: str | None = Field(
        default=None, description="Parent field for cascading lookups")


class FieldValidation(ContractModel):
    """Structural validation rules for a field"""
    required: bool = False
    min: float | None = None
    max: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    pattern_description: str | None = None


class NumberFormat(ContractModel):
    """Number formatting parameters"""
    locale: str | None = None
    style: Literal["decimal", "currency", "percent"] = "decimal"
    currency: str | None = None
    minimum_fraction_digits: int | None = None
    maximum_fraction_digits: int | None = None


class BooleanDisplay(ContractModel):
    """Labels and severities used to display boolean values"""
    true_label: str = "Yes"
    false_label: str = "No"
    true_icon: str | None = None
    false_icon: str | None = None
    true_severity: Severity = Severity.SUCCESS
    false_severity: Severity = Severity.DANGER


class FieldDisplay(ContractModel):
    """Presentation hints for a field"""
    col_span: int | None = Field(default=None, description="Column span in a 12-column grid")
    row_span: int | None = None
    placeholder: str | None = None
    help_text: str | None = None
    tooltip: str | None = None
    icon: str | None = None
    icon_position: Literal["left", "right"] | None = None
    class_name: str | None = None
    input_class_name: str | None = None
    show_char_count: bool | None = None
    number_format: NumberFormat | None = None
    date_format: str | None = None
    boolean_display: BooleanDisplay | None = None


class FieldDefinition(ContractModel):
    """Complete definition of one compiled field"""
    name: str = Field(..., description="Field name; dot-paths identify expanded nested fields")
    label: str
    data_type: FieldDataType
    editor_type: FieldEditorType
    sort_order: int
    field_set: str = Field(..., description="Owning fieldset id")

    required: bool = False
    read_only: bool = False
    nullable: bool = False
    hidden: bool = False
    editable: bool = False
    is_primary_key: bool = False

    navigation: NavigationConfig | None = None
    navigation_relation: str | None = Field(
        default=None,
        description="Sibling foreign-key field this display field represents (e.g. manufacturerId)")
    options: list[FieldOption] | None = None

    validation: FieldValidation = Field(default_factory=FieldValidation)
    display: FieldDisplay = Field(default_factory=FieldDisplay)

    custom_renderer: str | None = None
    custom_props: dict[str, Any] | None = None
    default_value: Any | None = None


class FieldSetDefinition(ContractModel):
    """Named, ordered group of fields rendered together"""
    id: str
    label: str
    sort_order: int
    collapsible: bool = False
    collapsed: bool = False
    description: str | None = None
    icon: str | None = None
    class_name: str | None = None
    fields: list[str] = Field(default_factory=list, description="Member field names, in order")


# ==================== ENTITY MODELS ====================


class EntityMetadata(ContractModel):
    """Entity-level facts"""
    read_model: str = Field(..., description="Read (query) model identifier")
    write_model: str | None = Field(default=None, description="Write (save) model identifier")
    label: str
    plural_label: str
    primary_key: str
    display_field: str | None = None

    api_path: str | None = None
    route_path: str | None = None
    list_path: str | None = None

    is_read_only: bool = False
    is_creatable: bool = True
    is_deletable: bool = True
    is_selectable: bool = True

    created_on_field: str | None = None
    created_by_field: str | None = None
    updated_on_field: str | None = None
    updated_by_field: str | None = None

    is_active_field: str | None = Field(default=None, description="Soft-delete flag field")


class EntityFormSchema(ContractModel):
    """Compiled, render-ready configuration for one entity"""
    version: Literal["1.0"] = SCHEMA_VERSION
    entity: EntityMetadata
    field_sets: list[FieldSetDefinition] = Field(default_factory=list)
    fields: dict[str, FieldDefinition] = Field(default_factory=dict)
    field_order: list[str] = Field(default_factory=list)
    editable_fields: list[str] = Field(default_factory=list)
    required_fields: list[str] = Field(default_factory=list)
    default_values: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset optional values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ==================== FORM DATA MODELS ====================


class FormValidationError(ContractModel):
    """Structural validation failure for one submitted field"""
    field: str
    message: str
