"""
Core Exceptions

Custom exceptions for entity form compilation.
"""


class EntityFormError(Exception):
    """Base class for entity form errors."""

    def __init__(self, message: str = "Entity form error"):
        self.message = message
        super().__init__(self.message)


class SchemaNotFoundError(EntityFormError):
    """
    Raised when a read model cannot be located in the schema registry.

    This is the only condition that aborts a compile call. It is never
    cached, so a model registered later compiles normally.

    Usage:
        try:
            schema = await compiler.compile("QueryProductModel")
        except SchemaNotFoundError as e:
            logger.warning(f"No schema for {e.model_id}")
    """

    def __init__(self, model_id: str, message: str | None = None):
        self.model_id = model_id
        super().__init__(message or f"Schema not found for {model_id}")


class DescriptorError(EntityFormError):
    """
    Raised when a descriptor document cannot be loaded.

    Only document loading raises this; compilation over already-loaded
    nodes degrades instead of failing.
    """

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)
