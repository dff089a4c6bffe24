"""
Enumeration types used across the compiler and its contracts.
"""

from enum import Enum


class FieldDataType(str, Enum):
    """Data kind of an unwrapped schema node"""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    ANY = "any"


class FieldEditorType(str, Enum):
    """Editor control a presentation layer should render for a field"""
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    INTEGER = "integer"
    DECIMAL = "decimal"
    CURRENCY = "currency"
    BOOLEAN = "boolean"
    SWITCH = "switch"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    PASSWORD = "password"
    COLOR = "color"
    RATING = "rating"
    SLIDER = "slider"
    SELECT = "select"  # Static options
    MULTISELECT = "multiselect"
    COMBOBOX = "combobox"  # Searchable lookup against a navigation target
    MULTICOMBOBOX = "multicombobox"
    AUTOCOMPLETE = "autocomplete"
    CHIPS = "chips"
    EDITOR = "editor"  # Rich text
    MARKDOWN = "markdown"
    CODE = "code"
    IMAGE = "image"
    IMAGES = "images"
    FILE = "file"
    FILES = "files"
    HIDDEN = "hidden"
    READONLY = "readonly"
    CUSTOM = "custom"  # Rendered by the component named in custom_renderer


class WrapperKind(str, Enum):
    """Wrapper layers stripped by the descriptor unwrapper"""
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    HAS_DEFAULT = "has-default"


class FormMode(str, Enum):
    """Form mode used by the form data helpers"""
    CREATE = "create"
    EDIT = "edit"
    VIEW = "view"


class Severity(str, Enum):
    """Tag severities for boolean display"""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
