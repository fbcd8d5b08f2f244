"""
Decode wide new-schema rows into per-aspect records.

A row carries an urn plus one column per aspect type, and only some of those
columns are populated. Every populated aspect column becomes one MetadataAspect
keyed at LATEST_VERSION.
"""

from typing import List, Optional, Sequence

from .config import get_aspect_column_prefix
from .envelope import extract_aspect_json_string, parse_audited_aspect
from .schema import LATEST_VERSION, AspectKey, GenericRow, MetadataAspect


def is_aspect_column(column: str, prefix: Optional[str] = None) -> bool:
    return column.startswith(prefix if prefix is not None else get_aspect_column_prefix())


def read_sql_row(row: GenericRow, prefix: Optional[str] = None) -> List[MetadataAspect]:
    """
    Read one row into a list of MetadataAspect, one per populated aspect column.

    Raises:
        MalformedEnvelopeError: a populated column does not hold a valid envelope
    """
    prefix = prefix if prefix is not None else get_aspect_column_prefix()
    columns = [column for column in row.keys()
               if is_aspect_column(column, prefix) and row.get(column) is not None]

    aspects = []
    for column in columns:
        text = row.get_string(column)
        audited_aspect = parse_audited_aspect(text)
        aspects.append(MetadataAspect(
            key=AspectKey(row.urn, audited_aspect.canonical_name, LATEST_VERSION),
            metadata=extract_aspect_json_string(text),
            created_on=audited_aspect.last_modified_on,
            created_by=audited_aspect.last_modified_by,
            created_for=audited_aspect.created_for,
        ))
    return aspects


def read_sql_rows(rows: Sequence[GenericRow], prefix: Optional[str] = None) -> List[MetadataAspect]:
    """Read rows into a flat list of MetadataAspect. One malformed cell fails the whole call."""
    aspects = []
    for row in rows:
        aspects.extend(read_sql_row(row, prefix))
    return aspects
