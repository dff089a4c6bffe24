"""
Entity form models

Pydantic contracts:
    from entityforms.models import EntityFormSchema, FieldDefinition
    from entityforms.models.contracts.schema_nodes import ObjectNode

Enums:
    from entityforms.models import FieldEditorType
    from entityforms.models.enums import FieldEditorType
"""

from entityforms.models.contracts import (
    SCHEMA_VERSION,
    ArrayNode,
    BooleanDisplay,
    CompileOptions,
    EntityFormSchema,
    EntityMetadata,
    FieldDefinition,
    FieldDisplay,
    FieldOption,
    FieldSetDefinition,
    FieldValidation,
    FormValidationError,
    NavigationConfig,
    NumberFormat,
    ObjectNode,
    ScalarNode,
    SchemaNode,
    WrappedNode,
    parse_schema_node,
)
from entityforms.models.enums import (
    FieldDataType,
    FieldEditorType,
    FormMode,
    Severity,
    WrapperKind,
)

__all__ = [
    "SCHEMA_VERSION",
    "ArrayNode",
    "BooleanDisplay",
    "CompileOptions",
    "EntityFormSchema",
    "EntityMetadata",
    "FieldDataType",
    "FieldDefinition",
    "FieldDisplay",
    "FieldEditorType",
    "FieldOption",
    "FieldSetDefinition",
    "FieldValidation",
    "FormMode",
    "FormValidationError",
    "NavigationConfig",
    "NumberFormat",
    "ObjectNode",
    "ScalarNode",
    "SchemaNode",
    "Severity",
    "WrappedNode",
    "WrapperKind",
    "parse_schema_node",
]
