"""
Shared fixtures: sample aspect types, rows and a temporary database.
"""

from typing import ClassVar, List, Optional

import pytest

from aspect_store.core.aspects import AspectModel


class AspectFoo(AspectModel):
    CANONICAL_NAME: ClassVar[Optional[str]] = "com.example.AspectFoo"

    value: Optional[str] = None


class AspectBar(AspectModel):
    CANONICAL_NAME: ClassVar[Optional[str]] = "com.example.AspectBar"

    value: Optional[str] = None
    tags: Optional[List[str]] = None



class AspectStatus(AspectModel):
    CANONICAL_NAME: ClassVar[Optional[str]] = "com.example.AspectStatus"

    removed: bool

@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the store at a fresh database with both schema tables."""
    from aspect_store.core.db import init_db

    db_path = tmp_path / "metadata.db"
    monkeypatch.setenv("DB_PATH", str(db_path))
    init_db()
    return db_path


def envelope(canonical_name, aspect=None, actor="urn:li:corpuser:tester",
             modified_on="2024-01-31 12:00:00.0", created_for=None, include_aspect=True):
    """Envelope JSON text as stored in a new schema aspect column."""
    import json

    data = {
        "canonicalName": canonical_name,
        "lastmodifiedon": modified_on,
        "lastmodifiedby": actor,
    }
    if include_aspect:
        data["aspect"] = aspect
    if created_for is not None:
        data["createdfor"] = created_for
    return json.dumps(data)
