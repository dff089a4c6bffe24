"""
Entity Form Compiler

Resolves read and write models through a schema registry, assembles the
compiled form schema and memoizes it per read model id.

The cache is keyed by read model id only: a cached schema is returned even
when a later call passes different options. There is no in-flight marker,
so two concurrent first requests for the same id may both build; rebuilding
is idempotent and the last writer wins.
"""

import logging

from entityforms.config import Settings, get_settings
from entityforms.core.exceptions import SchemaNotFoundError
from entityforms.models.contracts.entity_forms import CompileOptions, EntityFormSchema
from entityforms.services.entity_form.assembler import (
    assemble_entity_form_schema,
    resolve_write_model_id,
)
from entityforms.services.entity_form.descriptors import get_metadata, get_object_shape
from entityforms.services.form_schema_registry import FormSchemaRegistry, form_schema_registry
from entityforms.services.schema_registry import SchemaRegistry

logger = logging.getLogger(__name__)

# Process-wide memoization map: read model id -> compiled schema
_schema_cache: dict[str, EntityFormSchema] = {}


class EntityFormCompiler:
    """
    Compile read/write model pairs into entity form schemas.

    Usage:
        compiler = EntityFormCompiler(registry)
        schema = await compiler.compile("QueryProductModel")
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        settings: Settings | None = None,
        cache: dict[str, EntityFormSchema] | None = None,
        form_schemas: FormSchemaRegistry | None = None,
    ):
        """
        Args:
            registry: Schema registry used for model lookups
            settings: Compiler settings (defaults to get_settings())
            cache: Memoization map (defaults to the process-wide cache)
            form_schemas: Pre-computed schema registry used by get_or_compile
        """
        self.registry = registry
        self.settings = settings or get_settings()
        self.cache = _schema_cache if cache is None else cache
        self.form_schemas = form_schema_registry if form_schemas is None else form_schemas

    async def compile(self, read_model_id: str, options: CompileOptions | None = None) -> EntityFormSchema:
        """
        Return the compiled form schema for a read model, building it on first request.

        Args:
            read_model_id: Read model identifier
            options: Caller overrides; ignored when the schema is already cached

        Returns:
            EntityFormSchema

        Raises:
            SchemaNotFoundError: If the read model is not registered
        """
        cached = self.cache.get(read_model_id)
        if cached is not None:
            logger.debug(f"Form schema cache hit for {read_model_id}")
            return cached

        logger.debug(f"Form schema cache miss for {read_model_id}")
        schema = await self.build(read_model_id, options)
        self.cache[read_model_id] = schema
        return schema

    async def build(self, read_model_id: str, options: CompileOptions | None = None) -> EntityFormSchema:
        """
        Build a form schema without reading or writing the cache.

        Raises:
            SchemaNotFoundError: If the read model is not registered
        """
        options = options or CompileOptions()
        depth = self.settings.max_unwrap_depth

        read_node = await self.registry.lookup(read_model_id)
        if read_node is None:
            raise SchemaNotFoundError(read_model_id)

        schema_meta = get_metadata(read_node, depth, path=read_model_id)
        write_model_id = resolve_write_model_id(read_model_id, schema_meta, options)

        write_field_names: list[str] | None = None
        if self.registry.exists(write_model_id):
            write_node = await self.registry.lookup(write_model_id)
            if write_node is not None:
                write_field_names = list(get_object_shape(write_node, depth))
        else:
            logger.debug(
                f"No write model {write_model_id} for {read_model_id}; "
                f"deriving editability from read-model metadata"
            )

        return assemble_entity_form_schema(
            read_model_id,
            read_node,
            write_model_id,
            write_field_names=write_field_names,
            options=options,
            settings=self.settings,
            schema_meta=schema_meta,
        )

    async def get_or_compile(
        self,
        read_model_id: str,
        options: CompileOptions | None = None,
    ) -> EntityFormSchema | None:
        """
        Prefer a pre-computed schema, else compile.

        Returns:
            EntityFormSchema, or None when the read model is not registered
        """
        if self.form_schemas.has(read_model_id):
            return await self.form_schemas.get(read_model_id)

        try:
            return await self.compile(read_model_id, options)
        except SchemaNotFoundError as e:
            logger.error(f"Failed to compile form schema: {e.message}")
            return None

    def clear_cache(self) -> None:
        """Empty the memoization map."""
        count = len(self.cache)
        self.cache.clear()
        logger.info(f"Cleared {count} cached form schemas")


async def compile_entity_form(
    registry: SchemaRegistry,
    read_model_id: str,
    options: CompileOptions | None = None,
    settings: Settings | None = None,
) -> EntityFormSchema:
    """Compile through the process-wide cache."""
    return await EntityFormCompiler(registry, settings=settings).compile(read_model_id, options)


def clear_schema_cache() -> None:
    """Empty the process-wide cache."""
    count = len(_schema_cache)
    _schema_cache.clear()
    logger.info(f"Cleared {count} cached form schemas")
