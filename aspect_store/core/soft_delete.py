"""
Soft-delete tombstone: the payload stored in place of a deleted aspect.
"""

from typing import Optional, Type, Union

from pydantic import BaseModel

from .aspects import AspectModel, SoftDeletedAspect
from .records import logical_value, to_json_string, to_record
from .schema import MetadataAspect

# Value stored in the metadata column for a soft deleted aspect
DELETED_METADATA = SoftDeletedAspect(gma_deleted=True)
DELETED_VALUE = to_json_string(DELETED_METADATA)

_DELETED_LOGICAL_VALUE = logical_value(DELETED_METADATA)


def is_tombstone(candidate: BaseModel) -> bool:
    """True when candidate carries exactly the tombstone's logical value."""
    return logical_value(candidate) == _DELETED_LOGICAL_VALUE


def is_soft_deleted_aspect(aspect: Union[str, MetadataAspect], aspect_class: Type[AspectModel]) -> bool:
    """
    Check whether a stored aspect has been soft deleted.

    Args:
        aspect: Raw metadata text, or a stored aspect whose metadata is read
        aspect_class: Aspect type to decode the metadata as

    Raises:
        DecodeError: metadata cannot be decoded as aspect_class
    """
    raw = aspect.metadata if isinstance(aspect, MetadataAspect) else aspect
    if raw is None:
        return False
    return is_tombstone(to_record(aspect_class, raw))


def is_deleted_value(raw: Optional[str]) -> bool:
    """
    Check stored metadata against the tombstone without knowing the aspect type.

    The tombstone is written for every aspect type, so it is decoded as
    SoftDeletedAspect rather than as a type whose required fields it lacks.
    """
    if raw is None:
        return False
    return is_tombstone(to_record(SoftDeletedAspect, raw))
