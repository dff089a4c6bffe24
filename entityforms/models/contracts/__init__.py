"""
Pydantic contracts.

    from entityforms.models.contracts import EntityFormSchema, FieldDefinition
    from entityforms.models.contracts.schema_nodes import ObjectNode
"""

from entityforms.models.contracts.entity_forms import (
    SCHEMA_VERSION,
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
)
from entityforms.models.contracts.schema_nodes import (
    ArrayNode,
    ObjectNode,
    ScalarNode,
    SchemaNode,
    WrappedNode,
    parse_schema_node,
)

__all__ = [
    "SCHEMA_VERSION",
    "ArrayNode",
    "BooleanDisplay",
    "CompileOptions",
    "EntityFormSchema",
    "EntityMetadata",
    "FieldDefinition",
    "FieldDisplay",
    "FieldOption",
    "FieldSetDefinition",
    "FieldValidation",
    "FormValidationError",
    "NavigationConfig",
    "NumberFormat",
    "ObjectNode",
    "ScalarNode",
    "SchemaNode",
    "WrappedNode",
    "parse_schema_node",
]
