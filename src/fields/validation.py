"""
Schema validation for booking fields, legacy custom inputs and event-type
metadata.

All shapes live as $defs in booking_fields.schema.json; each validator here
points a $ref at one definition. The first (best) error is translated into
an InputValidationError or OutputValidationError carrying a readable path.
"""

from functools import lru_cache
from typing import Any, Dict, Iterable, List, Type, Union

import jsonschema
from jsonschema.exceptions import best_match

from src.config.settings import get_settings
from src.fields.exceptions import (
    BookingFieldsValidationError,
    InputValidationError,
)
from src.utils.logger import get_logger

logger = get_logger(__name__)

BOOKING_FIELDS = "bookingFields"
CUSTOM_INPUTS = "customInputs"
METADATA = "metadata"


@lru_cache(maxsize=None)
def get_validator(definition: str) -> jsonschema.Draft202012Validator:
    """
    Build (once) a validator for one $defs entry of the booking fields schema.

    Raises:
        KeyError: If the schema has no such definition
    """
    defs = get_settings().schema["$defs"]
    if definition not in defs:
        raise KeyError(f"Unknown schema definition: {definition}")
    return jsonschema.Draft202012Validator({"$defs": defs, "$ref": f"#/$defs/{definition}"})


def format_path(source: str, path: Iterable[Union[str, int]]) -> str:
    """
    Render a jsonschema error path.

    >>> format_path("bookingFields", [2, "sources", 0, "id"])
    'bookingFields[2].sources[0].id'
    """
    rendered = source
    for part in path:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}"
    return rendered


def _validate(
    instance: Any,
    definition: str,
    source: str,
    error_cls: Type[BookingFieldsValidationError],
) -> None:
    error = best_match(get_validator(definition).iter_errors(instance))
    if error is None:
        return

    path = format_path(source, error.absolute_path)
    logger.error(
        f"{source} failed schema validation",
        operation="validate_booking_fields",
        context={"source": source, "path": path, "validator": error.validator},
        error=error.message,
    )
    raise error_cls(error.message, source=source, path=path) from error


def ensure_unique_names(
    fields: List[Dict[str, Any]],
    error_cls: Type[BookingFieldsValidationError] = InputValidationError,
) -> None:
    """
    Check that no two booking fields share a name.

    Raises:
        error_cls: Pointing at the second occurrence of a duplicate name
    """
    seen: Dict[str, int] = {}
    for index, field in enumerate(fields):
        name = field["name"]
        if name in seen:
            path = format_path(BOOKING_FIELDS, [index, "name"])
            message = f"Duplicate field name '{name}' (first used at index {seen[name]})"
            logger.error(
                "Booking fields contain a duplicate name",
                operation="validate_booking_fields",
                context={"source": BOOKING_FIELDS, "path": path, "name": name},
                error=message,
            )
            raise error_cls(message, source=BOOKING_FIELDS, path=path)
        seen[name] = index


def validate_booking_fields(
    fields: Any,
    error_cls: Type[BookingFieldsValidationError] = InputValidationError,
) -> List[Dict[str, Any]]:
    """
    Validate a stored booking field list.

    Args:
        fields: List of camelCase field dictionaries
        error_cls: Exception raised on failure (input or output flavour)

    Returns:
        The same list, for chaining

    Raises:
        error_cls: On schema violation or duplicate name
    """
    _validate(fields, BOOKING_FIELDS, BOOKING_FIELDS, error_cls)
    ensure_unique_names(fields, error_cls)
    return fields


def validate_custom_inputs(custom_inputs: Any) -> List[Dict[str, Any]]:
    """Validate legacy custom inputs. Raises InputValidationError."""
    _validate(custom_inputs, CUSTOM_INPUTS, CUSTOM_INPUTS, InputValidationError)
    return custom_inputs


def validate_metadata(metadata: Any) -> Dict[str, Any]:
    """Validate event-type metadata. Raises InputValidationError."""
    _validate(metadata, METADATA, METADATA, InputValidationError)
    return metadata
