"""
Storage-layer data types shared by the row decoder, comparator and DAO.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Iterable, List, Mapping, Optional, Protocol, TypeVar

# The wide-row decoder only ever sees the latest version of an aspect
LATEST_VERSION = 0

# next_start value when there is no further page
INVALID_START = -1

T = TypeVar("T")


@dataclass(frozen=True)
class AspectKey:
    urn: str
    aspect: str
    version: int


@dataclass(frozen=True)
class MetadataAspect:
    """One stored aspect as the old schema table holds it."""
    key: AspectKey
    metadata: Optional[str]
    created_on: datetime
    created_by: str
    created_for: Optional[str] = None


class GenericRow(Protocol):
    """A fetched row whose set of populated columns is not known up front."""

    @property
    def urn(self) -> str:
        ...

    def keys(self) -> Iterable[str]:
        ...

    def get(self, column: str) -> Any:
        ...

    def get_string(self, column: str) -> Optional[str]:
        ...


class SqlRow:
    """Column name to value mapping for one result row."""

    def __init__(self, values: Mapping[str, Any]):
        self._values = dict(values)

    @classmethod
    def from_mapping(cls, row) -> "SqlRow":
        """Build from a dict or a sqlite3.Row."""
        return cls({key: row[key] for key in row.keys()})

    @property
    def urn(self) -> str:
        urn = self._values.get("urn")
        if urn is None:
            raise KeyError("row has no urn column")
        return str(urn)

    def keys(self) -> List[str]:
        return list(self._values.keys())

    def get(self, column: str) -> Any:
        return self._values.get(column)

    def get_string(self, column: str) -> Optional[str]:
        value = self._values.get(column)
        return None if value is None else str(value)

    def __repr__(self):
        return f"SqlRow({self._values!r})"


@dataclass(frozen=True)
class ListResultMetadata:
    """Per-value metadata returned alongside a page of results."""
    extra_infos: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class ListResult(Generic[T]):
    """One page of a paginated list query."""
    values: List[T]
    metadata: Optional[ListResultMetadata]
    next_start: int
    has_next: bool
    total_count: int
    total_page_count: int
    page_size: int
