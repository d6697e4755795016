"""
Shared helpers for validating Wise API responses.

Responses arrive as loosely-typed JSON. The model classes use these
helpers to pull out required and optional fields and to turn amounts
into Decimals.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

# Wise uses numeric ids for profiles, accounts and transfers and UUIDs for quotes
EntityId = Union[int, str]


class SchemaError(ValueError):
    """Error raised when an API response is missing required data."""
    pass


def ensure_object(data: Any, entity: str) -> Dict[str, Any]:
    """Raise SchemaError unless data is a JSON object."""
    if not isinstance(data, dict):
        raise SchemaError(
            f"Invalid {entity} response: expected an object, got {type(data).__name__}"
        )
    return data


def require_id(data: Dict[str, Any], entity: str) -> EntityId:
    """
    Return the entity identifier or raise.

    Args:
        data: Decoded response object
        entity: Entity name used in the error message

    Raises:
        SchemaError: If the id is missing, null or empty
    """
    value = data.get('id')
    if value is None or value == '' or isinstance(value, bool):
        raise SchemaError(f"Missing required field 'id' in {entity} response")
    return value


def optional_str(data: Dict[str, Any], field: str) -> Optional[str]:
    value = data.get(field)
    if value is None or value == '':
        return None
    return str(value)


def optional_decimal(data: Dict[str, Any], field: str) -> Optional[Decimal]:
    """
    Read a numeric field as a Decimal.

    Floats are converted through str() so 5123.46 stays 5123.46
    instead of picking up binary noise.

    Raises:
        SchemaError: If the field is present but not numeric
    """
    value = data.get(field)
    if value is None:
        return None
    if isinstance(value, bool):
        raise SchemaError(f"Invalid numeric value for '{field}': {value!r}")
    if isinstance(value, Decimal):
        return value

    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise SchemaError(f"Invalid numeric value for '{field}': {value!r}")
