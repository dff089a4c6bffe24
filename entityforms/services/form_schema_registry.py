"""
Pre-computed Form Schema Registry

Holds compiled form schemas that were produced ahead of time (for example
by a build step) so they can be served without runtime compilation.
Entries are lazy async loaders; a loader runs each time its schema is
requested, and memoization is left to the loader.
"""

import logging
from collections.abc import Awaitable, Callable

from entityforms.models.contracts.entity_forms import EntityFormSchema

logger = logging.getLogger(__name__)

FormSchemaLoader = Callable[[], Awaitable[EntityFormSchema]]


class FormSchemaRegistry:
    """Read model id -> lazy loader of a pre-computed EntityFormSchema."""

    def __init__(self) -> None:
        self._loaders: dict[str, FormSchemaLoader] = {}

    def register(self, read_model_id: str, loader: FormSchemaLoader) -> None:
        """Register a loader; re-registering an id replaces the previous loader."""
        if read_model_id in self._loaders:
            logger.debug(f"Replacing pre-computed form schema loader for {read_model_id}")
        self._loaders[read_model_id] = loader

    async def get(self, read_model_id: str) -> EntityFormSchema | None:
        """Load the registered schema, or None when nothing is registered."""
        loader = self._loaders.get(read_model_id)
        if loader is None:
            logger.warning(f"No pre-computed form schema registered for {read_model_id}")
            return None
        return await loader()

    def has(self, read_model_id: str) -> bool:
        return read_model_id in self._loaders

    def clear(self) -> None:
        self._loaders.clear()


# Process-wide default registry
form_schema_registry = FormSchemaRegistry()
