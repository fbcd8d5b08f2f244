"""
Pydantic record models for stored aspects and their audit envelope.
"""

from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

SQL_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
SQL_TIMESTAMP_FORMAT_NO_FRACTION = "%Y-%m-%d %H:%M:%S"


class AspectModel(BaseModel):
    """Base for aspect types. Unknown keys are kept so no stored data is dropped on decode."""

    model_config = ConfigDict(extra="allow")

    CANONICAL_NAME: ClassVar[Optional[str]] = None

    @classmethod
    def canonical_name(cls) -> str:
        return cls.CANONICAL_NAME or f"{cls.__module__}.{cls.__qualname__}"


class SoftDeletedAspect(AspectModel):
    """Payload written in place of an aspect that has been soft deleted."""

    CANONICAL_NAME: ClassVar[Optional[str]] = "aspect_store.SoftDeletedAspect"

    gma_deleted: Optional[bool] = None


class AuditedAspect(BaseModel):
    """Envelope stored in each aspect column of the new schema table."""

    model_config = ConfigDict(populate_by_name=True)

    aspect: Optional[Any] = None
    canonical_name: str = Field(alias="canonicalName")
    last_modified_on: datetime = Field(alias="lastmodifiedon")
    last_modified_by: str = Field(alias="lastmodifiedby")
    created_for: Optional[str] = Field(default=None, alias="createdfor")

    @field_validator('last_modified_on', mode="before")
    @classmethod
    def parse_sql_timestamp(cls, v):
        # SQL timestamp text, e.g. 2024-01-31 12:00:00.0; anything else is left to pydantic
        if isinstance(v, str):
            for fmt in (SQL_TIMESTAMP_FORMAT, SQL_TIMESTAMP_FORMAT_NO_FRACTION):
                try:
                    return datetime.strptime(v, fmt)
                except ValueError:
                    continue
        return v

    @field_serializer('last_modified_on')
    def serialize_timestamp(self, value: datetime) -> str:
        # SQL timestamp text form, e.g. 2024-01-31 12:00:00.123456
        return value.isoformat(sep=" ")
