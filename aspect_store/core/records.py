"""
Conversion between stored JSON text and pydantic record models.
"""

import json
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

R = TypeVar("R", bound=BaseModel)


class DecodeError(ValueError):
    """Stored text cannot be decoded as the requested record type."""
    pass


def to_record(record_class: Type[R], text: str) -> R:
    """Decode JSON text into an instance of record_class."""
    try:
        return record_class.model_validate_json(text)
    except ValidationError as e:
        raise DecodeError(f"Failed to decode {text!r} as {record_class.__name__}: {e}") from e


def to_json_string(record: BaseModel) -> str:
    """Deterministic JSON text for a record: unset fields dropped, keys sorted, no whitespace."""
    data = record.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


def logical_value(record: BaseModel) -> Dict[str, Any]:
    """Field values that differ from their defaults, including unknown keys."""
    return record.model_dump(mode="json", by_alias=True, exclude_defaults=True)
