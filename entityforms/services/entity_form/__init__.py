"""
Entity form schema compiler.

    from entityforms.services.entity_form import EntityFormCompiler

    compiler = EntityFormCompiler(registry)
    schema = await compiler.compile("QueryProductModel")
"""

from entityforms.services.entity_form.compiler import (
    EntityFormCompiler,
    clear_schema_cache,
    compile_entity_form,
)

__all__ = [
    "EntityFormCompiler",
    "clear_schema_cache",
    "compile_entity_form",
]
