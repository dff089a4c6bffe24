"""
Pytest fixtures for entity form compiler tests.

Provides:
1. Settings isolated from the environment and .env files
2. Descriptor fixtures (product/manufacturer, recipe with nested nutrition)
3. A populated in-memory schema registry and a compiler with a private cache
"""

import pytest

from entityforms.config import Settings
from entityforms.models.contracts.schema_nodes import (
    ArrayNode,
    ObjectNode,
    ScalarNode,
    nullable,
    optional,
    with_default,
)
from entityforms.services.entity_form.compiler import EntityFormCompiler, clear_schema_cache
from entityforms.services.form_schema_registry import FormSchemaRegistry
from entityforms.services.schema_registry import InMemorySchemaRegistry


# ==================== CONFIGURATION ====================


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring environment overrides."""
    return Settings(_env_file=None)


@pytest.fixture(autouse=True)
def reset_schema_cache():
    """Empty the process-wide form schema cache around each test."""
    clear_schema_cache()
    yield
    clear_schema_cache()


# ==================== DESCRIPTORS ====================


@pytest.fixture
def product_read_model() -> ObjectNode:
    """Product read model with a manufacturer foreign key and its display field."""
    return ObjectNode(
        meta={"x-api-path": "/api/products", "x-display-field": "productName"},
        shape={
            "productId": ScalarNode(kind="integer", meta={"x-navigation-key": True}),
            "productName": ScalarNode(
                kind="string",
                meta={"x-label": "Name", "maxLength": 100, "x-sort-order": 1},
            ),
            "manufacturerId": ScalarNode(
                kind="integer",
                meta={"x-navigation-target": "Catalog.Models.Manufacturer"},
            ),
            "manufacturerName": optional(ScalarNode(
                kind="string",
                meta={"x-navigation-relation": "Catalog.Models.ManufacturerId"},
            )),
        },
    )


@pytest.fixture
def product_write_model() -> ObjectNode:
    """Product write model: only the submittable fields."""
    return ObjectNode(shape={
        "productName": ScalarNode(kind="string"),
        "manufacturerId": ScalarNode(kind="integer"),
    })


@pytest.fixture
def recipe_read_model() -> ObjectNode:
    """Recipe read model with a nested nutrition object and audit fields."""
    return ObjectNode(shape={
        "recipeId": ScalarNode(kind="integer", meta={"x-navigation-key": True}),
        "recipeName": ScalarNode(kind="string", meta={"x-sort-order": 5}),
        "instructions": optional(ScalarNode(kind="string", meta={"maxLength": 4000})),
        "nutrition": ObjectNode(
            meta={"x-label": "Nutrition Facts"},
            shape={
                "calories": ScalarNode(kind="number", meta={"minimum": 0}),
                "servingSize": nullable(ScalarNode(kind="string")),
            },
        ),
        "tags": optional(ArrayNode(element=ScalarNode(kind="string"))),
        "isActive": ScalarNode(kind="boolean"),
        "createdOn": ScalarNode(kind="datetime", meta={"readOnly": True}),
        "createdBy": ScalarNode(kind="string", meta={"readOnly": "true"}),
        "rowVersion": with_default(ScalarNode(kind="integer"), 1, meta={"x-hidden": True}),
    })


# ==================== SERVICES ====================


@pytest.fixture
def registry(product_read_model, product_write_model, recipe_read_model) -> InMemorySchemaRegistry:
    """Registry holding the product pair and the recipe read model (no write model)."""
    return InMemorySchemaRegistry({
        "QueryProductModel": product_read_model,
        "SaveProductModel": product_write_model,
        "QueryRecipeModel": recipe_read_model,
    })


@pytest.fixture
def form_schemas() -> FormSchemaRegistry:
    return FormSchemaRegistry()


@pytest.fixture
def compiler(registry, settings, form_schemas) -> EntityFormCompiler:
    """Compiler with a private cache."""
    return EntityFormCompiler(registry, settings=settings, cache={}, form_schemas=form_schemas)
