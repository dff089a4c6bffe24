"""
Label and identifier formatting helpers.
"""

import re

# Words rendered upper-case in formatted labels
ABBREVIATIONS: dict[str, str] = {
    "id": "ID",
    "url": "URL",
    "gln": "GLN",
    "api": "API",
    "ioc": "IOC",
    "upc": "UPC",
    "gtin": "GTIN",
    "sku": "SKU",
    "html": "HTML",
    "css": "CSS",
    "json": "JSON",
    "xml": "XML",
    "pdf": "PDF",
}

_QUERY_PREFIX = re.compile(r"^I?Query")
_MODEL_SUFFIX = re.compile(r"Model$")


def format_field_label(field_name: str) -> str:
    """
    Format a field name into a display label.

    Examples:
        manufacturerId -> Manufacturer ID
        productURLPath -> Product URL Path
        created_at     -> Created At
    """
    label = re.sub(r"[_\-]+", " ", field_name)
    # Space before a capital that follows a lower-case letter or digit
    label = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", label)
    # Split an acronym run from a following capitalised word (URLPath -> URL Path)
    label = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", label)
    label = re.sub(r"\s+", " ", label).strip()
    if not label:
        return field_name
    label = " ".join(word[:1].upper() + word[1:] for word in label.split(" "))
    return re.sub(
        r"\b(\w+)\b",
        lambda match: ABBREVIATIONS.get(match.group(1).lower(), match.group(1)),
        label,
    )


def fieldset_id_from_label(label: str) -> str:
    """Generate a fieldset id from its label ("Nutrition Facts" -> "nutrition-facts")."""
    return re.sub(r"\s+", "-", label.strip().lower())


def derive_entity_label(read_model_id: str) -> str:
    """IQueryCategoryModel -> Category"""
    label = _MODEL_SUFFIX.sub("", _QUERY_PREFIX.sub("", read_model_id))
    return label or read_model_id


def derive_write_model_id(read_model_id: str) -> str:
    """IQueryCategoryModel -> SaveCategoryModel; ids without a Query token get a Save prefix."""
    if _QUERY_PREFIX.match(read_model_id):
        return _QUERY_PREFIX.sub("Save", read_model_id, count=1)
    return f"Save{read_model_id}"


def pluralize(label: str) -> str:
    """Simple English pluralization for entity labels."""
    if not label:
        return label
    lower = label.lower()
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return f"{label[:-1]}ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return f"{label}es"
    return f"{label}s"


def lower_first(value: str) -> str:
    """Lower-case the first character (ProductCategory -> productCategory)."""
    return value[:1].lower() + value[1:]
