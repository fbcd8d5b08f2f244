"""
Aspect DAO over the old and new schema tables.

The schema mode decides where writes land and which table is read. In
DUAL_SCHEMA mode both tables are read, the results are compared, and the old
schema result is returned whether or not they agree.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional, Type

from ..util.logging import logger
from .aspects import AspectModel
from .compare import compare_results
from .config import DUAL_SCHEMA, get_aspect_column_prefix, get_schema_mode, uses_new_schema, uses_old_schema
from .db import NEW_SCHEMA_TABLE, OLD_SCHEMA_TABLE, ensure_aspect_column, entity_columns, fetch_rows, get_db
from .envelope import build_envelope
from .paging import build_list_result
from .records import to_json_string, to_record
from .row_decoder import read_sql_rows
from .schema import LATEST_VERSION, AspectKey, ListResult, MetadataAspect
from .soft_delete import DELETED_VALUE, is_deleted_value


def aspect_column(aspect_class: Type[AspectModel]) -> str:
    """New schema column for an aspect type, e.g. AspectFoo -> a_aspect_foo."""
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", aspect_class.__name__).lower()
    return f"{get_aspect_column_prefix()}{snake}"


def add_aspect(urn: str, aspect: AspectModel, actor: str, created_for: Optional[str] = None) -> None:
    """Write the latest value of an aspect to every schema the current mode writes."""
    _write(urn, type(aspect), to_json_string(aspect), actor, created_for)


def soft_delete_aspect(urn: str, aspect_class: Type[AspectModel], actor: str,
                       created_for: Optional[str] = None) -> None:
    """Replace an aspect's latest value with the soft-delete tombstone."""
    _write(urn, aspect_class, DELETED_VALUE, actor, created_for)


def _write(urn: str, aspect_class: Type[AspectModel], metadata: str, actor: str,
           created_for: Optional[str]) -> None:
    canonical_name = aspect_class.canonical_name()
    now = datetime.now()

    with get_db() as conn:
        if uses_old_schema():
            conn.execute(
                f"INSERT OR REPLACE INTO {OLD_SCHEMA_TABLE} "
                "(urn, aspect, version, metadata, createdon, createdby, createdfor) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (urn, canonical_name, LATEST_VERSION, metadata, now.isoformat(sep=" "), actor, created_for)
            )

        if uses_new_schema():
            column = aspect_column(aspect_class)
            ensure_aspect_column(conn, column)
            conn.execute(
                f"INSERT INTO {NEW_SCHEMA_TABLE} (urn, {column}) VALUES (?, ?) "
                f"ON CONFLICT(urn) DO UPDATE SET {column} = excluded.{column}",
                (urn, build_envelope(metadata, canonical_name, actor, now, created_for))
            )

        conn.commit()

    logger.log_aspect_operation("write", urn, canonical_name)


def read_old_schema(urn: str, aspect_classes: Optional[Iterable[Type[AspectModel]]] = None) -> List[MetadataAspect]:
    """Latest aspects for an urn from the old schema table, ordered by aspect name."""
    sql = (f"SELECT urn, aspect, version, metadata, createdon, createdby, createdfor "
           f"FROM {OLD_SCHEMA_TABLE} WHERE urn = ? AND version = ?")
    params = [urn, LATEST_VERSION]
    if aspect_classes is not None:
        names = [aspect_class.canonical_name() for aspect_class in aspect_classes]
        if not names:
            return []
        sql += f" AND aspect IN ({', '.join('?' for _ in names)})"
        params.extend(names)
    sql += " ORDER BY aspect"

    return [
        MetadataAspect(
            key=AspectKey(row.get("urn"), row.get("aspect"), row.get("version")),
            metadata=row.get("metadata"),
            created_on=datetime.fromisoformat(row.get_string("createdon")),
            created_by=row.get("createdby"),
            created_for=row.get("createdfor"),
        )
        for row in fetch_rows(sql, params)
    ]


def read_new_schema(urn: str, aspect_classes: Optional[Iterable[Type[AspectModel]]] = None) -> List[MetadataAspect]:
    """Latest aspects for an urn decoded from its new schema wide row, ordered by aspect name."""
    with get_db() as conn:
        present = [column for column in entity_columns(conn) if column.startswith(get_aspect_column_prefix())]

    if aspect_classes is not None:
        wanted = {aspect_column(aspect_class) for aspect_class in aspect_classes}
        present = [column for column in present if column in wanted]
    if not present:
        return []

    rows = fetch_rows(f"SELECT urn, {', '.join(present)} FROM {NEW_SCHEMA_TABLE} WHERE urn = ?", (urn,))
    return sorted(read_sql_rows(rows), key=lambda aspect: aspect.key.aspect)


def list_latest_aspects(urn: str, aspect_classes: Optional[Iterable[Type[AspectModel]]] = None) -> List[MetadataAspect]:
    """Latest stored aspects for an urn, soft deleted ones included."""
    if aspect_classes is not None:
        aspect_classes = list(aspect_classes)

    mode = get_schema_mode()
    if mode == DUAL_SCHEMA:
        result_old = read_old_schema(urn, aspect_classes)
        result_new = read_new_schema(urn, aspect_classes)
        compare_results(result_old, result_new, "list_latest_aspects")
        return result_old
    if uses_new_schema():
        return read_new_schema(urn, aspect_classes)
    return read_old_schema(urn, aspect_classes)


def get_latest_aspect(urn: str, aspect_class: Type[AspectModel]) -> Optional[AspectModel]:
    """Latest value of one aspect, or None when absent or soft deleted."""
    aspects = list_latest_aspects(urn, [aspect_class])
    if not aspects or aspects[0].metadata is None:
        return None
    if is_deleted_value(aspects[0].metadata):
        return None
    return to_record(aspect_class, aspects[0].metadata)


def _live_urns(aspects: List[MetadataAspect]) -> List[str]:
    return sorted(aspect.key.urn for aspect in aspects
                  if aspect.metadata is not None and not is_deleted_value(aspect.metadata))


def _list_urns_old(aspect_class: Type[AspectModel]) -> List[str]:
    rows = fetch_rows(
        f"SELECT urn, metadata FROM {OLD_SCHEMA_TABLE} WHERE aspect = ? AND version = ?",
        (aspect_class.canonical_name(), LATEST_VERSION)
    )
    return sorted(row.get("urn") for row in rows
                  if row.get("metadata") is not None
                  and not is_deleted_value(row.get_string("metadata")))


def _list_urns_new(aspect_class: Type[AspectModel]) -> List[str]:
    column = aspect_column(aspect_class)
    with get_db() as conn:
        if column not in entity_columns(conn):
            return []
    rows = fetch_rows(f"SELECT urn, {column} FROM {NEW_SCHEMA_TABLE} WHERE {column} IS NOT NULL")
    return _live_urns(read_sql_rows(rows))


def list_urns(aspect_class: Type[AspectModel], start: int = 0, count: int = 10) -> ListResult:
    """Page of urns holding a live (not soft deleted) value of the aspect, ordered by urn."""

    def page(urns: List[str]) -> ListResult:
        return build_list_result(urns[start:start + count], len(urns), start, count)

    mode = get_schema_mode()
    if mode == DUAL_SCHEMA:
        result_old = page(_list_urns_old(aspect_class))
        result_new = page(_list_urns_new(aspect_class))
        compare_results(result_old, result_new, "list_urns")
        return result_old
    if uses_new_schema():
        return page(_list_urns_new(aspect_class))
    return page(_list_urns_old(aspect_class))
