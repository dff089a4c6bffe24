"""
Unit tests for navigation relation linking.
"""

from entityforms.models.contracts.schema_nodes import ScalarNode
from entityforms.models.enums import FieldEditorType
from entityforms.services.entity_form.editability import scan_read_model
from entityforms.services.entity_form.field_builder import build_field_definition
from entityforms.services.entity_form.navigation import link_navigation_relations


def _shape(fk_meta=None):
    return {
        "manufacturerId": ScalarNode(
            kind="integer",
            meta={"x-navigation-target": "Catalog.Models.Manufacturer", **(fk_meta or {})},
        ),
        "manufacturerName": ScalarNode(
            kind="string",
            meta={"x-navigation-relation": "Catalog.Models.ManufacturerId"},
        ),
    }


def _fields(shape, editable, settings):
    return {
        name: build_field_definition(name, node, name in editable, settings=settings)
        for name, node in shape.items()
    }


class TestLinkNavigationRelations:
    """Tests for binding display fields to foreign keys."""

    def test_display_field_promoted_when_foreign_key_editable(self, settings):
        """The display field becomes an editable combobox bound through the foreign key."""
        shape = _shape()
        editable = {"manufacturerId"}
        linked = link_navigation_relations(_fields(shape, editable, settings), scan_read_model(shape), editable)

        display = linked["manufacturerName"]
        assert display.editable is True
        assert display.read_only is False
        assert display.editor_type == FieldEditorType.COMBOBOX
        assert display.navigation.target == "Catalog.Models.Manufacturer"
        assert display.navigation.model_name == "Manufacturer"
        assert display.navigation.value_field == "manufacturerId"

    def test_display_field_stays_read_only_when_foreign_key_not_editable(self, settings):
        """The target is still copied, but the field is not promoted."""
        shape = _shape()
        linked = link_navigation_relations(_fields(shape, set(), settings), scan_read_model(shape), set())

        display = linked["manufacturerName"]
        assert display.navigation.target == "Catalog.Models.Manufacturer"
        assert display.editable is False
        assert display.editor_type == FieldEditorType.READONLY

    def test_hidden_foreign_key_still_resolves(self, settings):
        """A hidden foreign key that is not emitted still supplies the target."""
        shape = _shape({"x-hidden": True})
        editable = {"manufacturerId"}
        fields = _fields(shape, editable, settings)
        del fields["manufacturerId"]

        linked = link_navigation_relations(fields, scan_read_model(shape), editable)
        assert linked["manufacturerName"].editor_type == FieldEditorType.COMBOBOX

    def test_unresolved_relation_is_left_alone(self, settings):
        """A relation with no matching navigation target is not an error."""
        shape = {
            "brandName": ScalarNode(kind="string", meta={"x-navigation-relation": "brandId"}),
        }
        fields = _fields(shape, set(), settings)
        linked = link_navigation_relations(fields, scan_read_model(shape), set())
        assert linked["brandName"] == fields["brandName"]
        assert linked["brandName"].navigation is None

    def test_inputs_are_not_mutated(self, settings):
        shape = _shape()
        editable = {"manufacturerId"}
        fields = _fields(shape, editable, settings)
        link_navigation_relations(fields, scan_read_model(shape), editable)
        assert fields["manufacturerName"].editable is False
