"""
Navigation relation linking.

A display field (e.g. manufacturerName) declares x-navigation-relation
naming the foreign-key field it represents (manufacturerId). The display
field inherits the foreign key's navigation target and, when the foreign
key is editable, becomes an editable combobox bound through it.
"""

import logging

from entityforms.models.contracts.entity_forms import FieldDefinition, NavigationConfig
from entityforms.models.enums import FieldEditorType
from entityforms.services.entity_form.descriptors import unqualified_name
from entityforms.services.entity_form.editability import ReadModelScan

logger = logging.getLogger(__name__)


def link_navigation_relations(
    fields: dict[str, FieldDefinition],
    scan: ReadModelScan,
    editable_fields: set[str],
) -> dict[str, FieldDefinition]:
    """
    Bind display fields to their sibling foreign-key fields.

    Lookups are case-insensitive and use the scan of the full read model,
    so hidden foreign keys still resolve. An unresolved relation leaves the
    display field untouched.

    Args:
        fields: Built field definitions
        scan: Scan of every read-model field
        editable_fields: Resolved editable field names

    Returns:
        New mapping with linked display fields replaced
    """
    linked: dict[str, FieldDefinition] = {}

    for name, definition in fields.items():
        relation = definition.navigation_relation
        if not relation:
            linked[name] = definition
            continue

        target = scan.navigation_targets.get(relation.lower())
        if not target:
            logger.debug(f"No navigation target for {name} -> {relation}; keeping it read-only")
            linked[name] = definition
            continue

        foreign_key = scan.find_field(relation)
        update: dict = {
            "navigation": NavigationConfig(
                target=target,
                model_name=unqualified_name(target),
                value_field=foreign_key or relation,
            ),
        }
        if foreign_key and foreign_key in editable_fields:
            update.update(
                editable=True,
                read_only=False,
                editor_type=FieldEditorType.COMBOBOX,
            )
        linked[name] = definition.model_copy(update=update)

    return linked
