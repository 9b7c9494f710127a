import math
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from dealtracker.models import CustomField


class CustomFieldValidationError(Exception):
    """Raised when deal custom field values do not match the configured fields"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def validate_custom_field_values(
    values: Dict[str, Any] | None, db: Session
) -> Dict[str, Any]:
    """
    Check a deal's custom field values against the CustomField table.

    Unknown keys are rejected, required fields must be present and non-empty,
    number values are coerced from numeric strings and enum values must be one
    of the field's options. Returns the normalized mapping.

    Raises:
        CustomFieldValidationError: listing every violation found
    """
    values = values or {}
    fields = {field.name: field for field in db.query(CustomField).all()}
    errors: List[str] = []
    normalized: Dict[str, Any] = {}

    for key in values:
        if key not in fields:
            errors.append(f"Unknown custom field '{key}'")

    for name, field in fields.items():
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            if field.required:
                errors.append(f"Custom field '{name}' is required")
            continue

        if field.type == "number":
            coerced = _coerce_number(value)
            if coerced is None:
                errors.append(f"Custom field '{name}' must be a number")
                continue
            normalized[name] = coerced
        elif field.type == "enum":
            if value not in (field.options or []):
                errors.append(
                    f"Custom field '{name}' must be one of: {', '.join(field.options or [])}"
                )
                continue
            normalized[name] = value
        else:
            normalized[name] = str(value)

    if errors:
        raise CustomFieldValidationError(errors)
    return normalized


def _coerce_number(value: Any) -> int | float | None:
    """Return a finite int/float, or None when the value is not a usable number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None
