"""
SQLite storage for both physical schemas.

Old schema: metadata_aspect, one row per (urn, aspect, version).
New schema: metadata_entity, one wide row per urn with one envelope column per aspect.
"""

import re
import sqlite3
from contextlib import contextmanager
from typing import Generator, List, Sequence

from .config import ensure_db_directory, get_db_path
from .schema import SqlRow

OLD_SCHEMA_TABLE = "metadata_aspect"
NEW_SCHEMA_TABLE = "metadata_entity"

_COLUMN_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get a SQLite database connection."""
    ensure_db_directory()
    conn = sqlite3.connect(get_db_path())
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def init_db():
    """Initialize the database with both schema tables."""
    with get_db() as conn:
        cursor = conn.cursor()

        cursor.execute(f'''
            CREATE TABLE IF NOT EXISTS {OLD_SCHEMA_TABLE} (
                urn TEXT NOT NULL,
                aspect TEXT NOT NULL,
                version INTEGER NOT NULL,
                metadata TEXT,
                createdon TIMESTAMP NOT NULL,
                createdby TEXT NOT NULL,
                createdfor TEXT,
                PRIMARY KEY (urn, aspect, version)
            )
        ''')

        # Aspect columns are added as aspects are first written
        cursor.execute(f'''
            CREATE TABLE IF NOT EXISTS {NEW_SCHEMA_TABLE} (
                urn TEXT PRIMARY KEY
            )
        ''')

        conn.commit()


def entity_columns(conn: sqlite3.Connection) -> List[str]:
    """Column names currently present on the new schema table."""
    return [col[1] for col in conn.execute(f"PRAGMA table_info({NEW_SCHEMA_TABLE})").fetchall()]


def ensure_aspect_column(conn: sqlite3.Connection, column: str) -> None:
    if not _COLUMN_NAME.match(column):
        raise ValueError(f"Invalid aspect column name: {column}")
    if column not in entity_columns(conn):
        conn.execute(f"ALTER TABLE {NEW_SCHEMA_TABLE} ADD COLUMN {column} TEXT")


def fetch_rows(sql: str, params: Sequence = ()) -> List[SqlRow]:
    """Run a query and return its rows as SqlRow."""
    with get_db() as conn:
        return [SqlRow.from_mapping(row) for row in conn.execute(sql, tuple(params)).fetchall()]


def health_check():
    """Check database health."""
    try:
        with get_db() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table';")
            table_names = [table[0] for table in cursor.fetchall()]
            return all(table in table_names for table in (OLD_SCHEMA_TABLE, NEW_SCHEMA_TABLE))
    except sqlite3.Error:
        return False
