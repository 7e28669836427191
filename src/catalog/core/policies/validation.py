"""Validation of submitted product data.

``validate_product`` never raises for bad input. It returns either the
normalized payload or every field error at once, so callers can branch on the
result without a try block and without touching the store.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

FIELDS = ("name", "price")

_MESSAGES = {
    "missing": "The {field} field is required.",
    "string_type": "The {field} field must be a string.",
    "string_too_short": "The {field} field must be at least {min_length} characters.",
    "string_too_long": "The {field} field must not be greater than {max_length} characters.",
    "decimal_parsing": "The {field} field must be a number.",
    "decimal_type": "The {field} field must be a number.",
    "finite_number": "The {field} field must be a number.",
    "greater_than_equal": "The {field} field must be at least {ge}.",
    "decimal_max_digits": "The {field} field must not have more than {max_digits} digits.",
    "decimal_max_places": "The {field} field must not have more than {decimal_places} decimal places.",
}


class ProductPayload(BaseModel):
    """Normalized product data ready to be stored."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(min_length=3, max_length=255)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


@dataclass(frozen=True)
class ValidProduct:
    payload: ProductPayload


@dataclass(frozen=True)
class InvalidProduct:
    errors: dict[str, list[str]]
    old_input: dict[str, str] = field(default_factory=dict)


ValidationResult = ValidProduct | InvalidProduct


CENT = Decimal("0.01")


def _from_float(value: float) -> Decimal | str:
    """Round a JSON number to cents; binary floats rarely have an exact decimal form."""
    try:
        return Decimal(str(value)).quantize(CENT)
    except InvalidOperation:
        return str(value)


def _prepare(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Drop blank values so they are reported as missing, normalize numbers."""
    prepared = {}
    for name in FIELDS:
        value = raw.get(name)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, float) and name == "price":
            value = _from_float(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        prepared[name] = value
    return prepared


def _message(error: dict[str, Any]) -> str:
    field_name = str(error["loc"][0]) if error["loc"] else "input"
    template = _MESSAGES.get(error["type"])
    if template is None:
        return error["msg"]
    return template.format(field=field_name, **error.get("ctx", {}))


def validate_product(raw: Mapping[str, Any]) -> ValidationResult:
    """Validate ``name`` and ``price`` independently of each other.

    Args:
        raw: Submitted values, typically form fields or a JSON body

    Returns:
        ``ValidProduct`` with the normalized payload, or ``InvalidProduct``
        mapping each failing field to its messages.
    """
    old_input = {name: "" if raw.get(name) is None else str(raw.get(name)) for name in FIELDS}
    try:
        payload = ProductPayload.model_validate(_prepare(raw))
    except PydanticValidationError as e:
        errors: dict[str, list[str]] = {}
        for error in e.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "input"
            errors.setdefault(field_name, []).append(_message(error))
        return InvalidProduct(errors=errors, old_input=old_input)
    return ValidProduct(payload=payload)
