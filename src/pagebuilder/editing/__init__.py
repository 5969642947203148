"""
Property Editing
Editable fields, dotted-path property access and value validation
"""

from .properties import current_value, editable_fields_for, group_fields, set_value, split_path
from .validators import FieldValidation, check_value, validate
from .session import PropertyEditSession

__all__ = [
    "current_value",
    "editable_fields_for",
    "group_fields",
    "set_value",
    "split_path",
    "FieldValidation",
    "check_value",
    "validate",
    "PropertyEditSession",
]
