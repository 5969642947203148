"""Editor-kind specific value validation."""

import math
import re
from dataclasses import dataclass
from typing import Any

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as ModelValidationError
from returns.result import Failure, Result, Success

from ..components.types import EditorKind
from ..core.validate import ValidationResult

HEX_COLOR = re.compile(r"#([0-9a-f]{3}){1,2}", re.IGNORECASE)

NUMBER_MESSAGE = "Value must be a valid number"
COLOR_MESSAGE = "Value must be a valid hex color (e.g. #ff0000)"
IMAGE_MESSAGE = "Value must be a valid image URL"

_url_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class FieldValidation:
    """Outcome of validating one field value"""

    valid: bool
    message: str = ""


def is_finite_number(value: Any) -> bool:
    """Whether the value is, or parses to, a finite number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def is_absolute_url(value: str) -> bool:
    """Whether the string parses as a well-formed absolute URL."""
    try:
        _url_adapter.validate_python(value.strip())
        return True
    except ModelValidationError:
        return False


def validate(value: Any, editor: EditorKind | str) -> FieldValidation:
    """
    Validate a value against its editor kind.

    text, select and toggle values are always valid; unknown kinds as well.
    """
    try:
        kind = EditorKind(editor)
    except ValueError:
        return FieldValidation(True)

    if kind == EditorKind.NUMBER:
        if not is_finite_number(value):
            return FieldValidation(False, NUMBER_MESSAGE)

    elif kind == EditorKind.COLOR:
        if not isinstance(value, str) or not HEX_COLOR.fullmatch(value):
            return FieldValidation(False, COLOR_MESSAGE)

    elif kind == EditorKind.IMAGE:
        if value is None:
            return FieldValidation(True)
        if not isinstance(value, str):
            return FieldValidation(False, IMAGE_MESSAGE)
        if value.strip() and not is_absolute_url(value):
            return FieldValidation(False, IMAGE_MESSAGE)

    return FieldValidation(True)


def check_value(path: str, value: Any, editor: EditorKind | str) -> Result[Any, ValidationResult]:
    """
    Validate a value (Result pattern version).

    Returns:
        Success carrying the value, or Failure describing the field error
    """
    outcome = validate(value, editor)
    if outcome.valid:
        return Success(value)
    return Failure(ValidationResult(outcome.message, field=path, value=value))
