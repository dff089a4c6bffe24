"""
Editability resolution.

Works out which read-model fields a caller may submit, from the write
model when one is registered and from read-model metadata otherwise.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from entityforms.models.contracts.schema_nodes import SchemaNode
from entityforms.services.entity_form.descriptors import (
    MAX_UNWRAP_DEPTH,
    get_metadata,
    is_metadata_true,
    metadata_str,
)

logger = logging.getLogger(__name__)


@dataclass
class ReadModelScan:
    """Facts collected from every read-model field, hidden ones included."""

    metadata: dict[str, dict[str, Any]] = field(default_factory=dict)
    navigation_keys: set[str] = field(default_factory=set)
    read_only_fields: set[str] = field(default_factory=set)
    # Lower-cased foreign-key field name -> navigation target
    navigation_targets: dict[str, str] = field(default_factory=dict)
    # Lower-cased field name -> declared field name
    declared_names: dict[str, str] = field(default_factory=dict)

    def find_field(self, name: str) -> str | None:
        """Case-insensitive lookup of a declared field name."""
        return self.declared_names.get(name.lower())


def scan_read_model(shape: dict[str, SchemaNode], max_depth: int = MAX_UNWRAP_DEPTH) -> ReadModelScan:
    """
    Scan all read-model fields for navigation and read-only metadata.

    Hidden fields are scanned too: a hidden foreign key still supplies the
    navigation target for the display field that renders on its behalf.

    Args:
        shape: Read-model field mapping
        max_depth: Wrapper iteration ceiling

    Returns:
        ReadModelScan for the shape
    """
    scan = ReadModelScan()
    for field_name, node in shape.items():
        meta = get_metadata(node, max_depth, path=field_name)
        scan.metadata[field_name] = meta
        scan.declared_names.setdefault(field_name.lower(), field_name)

        if is_metadata_true(meta.get("x-navigation-key")):
            scan.navigation_keys.add(field_name)
        if is_metadata_true(meta.get("readOnly")):
            scan.read_only_fields.add(field_name)

        target = metadata_str(meta.get("x-navigation-target"))
        if target:
            scan.navigation_targets[field_name.lower()] = target

    logger.debug(
        f"Scanned {len(shape)} read-model fields: "
        f"{len(scan.navigation_keys)} navigation keys, "
        f"{len(scan.navigation_targets)} navigation targets"
    )
    return scan


def resolve_editable_fields(
    read_field_names: Iterable[str],
    scan: ReadModelScan,
    write_field_names: Iterable[str] | None = None,
    entity_read_only: bool = False,
) -> set[str]:
    """
    Compute the set of field names a caller may submit.

    - Entity flagged read-only: nothing is editable.
    - Write model registered: its fields, minus navigation keys.
    - Otherwise: read-model fields not flagged readOnly, minus navigation keys.

    Args:
        read_field_names: Read-model field names
        scan: Scan of the read model
        write_field_names: Write-model field names, or None when no write model is registered
        entity_read_only: Whether the read model is flagged x-read-only

    Returns:
        Set of editable field names
    """
    if entity_read_only:
        return set()

    if write_field_names is not None:
        return {
            name for name in write_field_names
            if name not in scan.navigation_keys
        }

    return {
        name for name in read_field_names
        if name not in scan.read_only_fields and name not in scan.navigation_keys
    }
