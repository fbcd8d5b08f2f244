"""
Configuration for the aspect store, read from the environment.
A local .env file is loaded first when present.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Database path configuration
DB_PATH = os.getenv("DB_PATH", "./data/metadata.db")

# Which physical schema(s) the DAO reads and writes
OLD_SCHEMA_ONLY = "OLD_SCHEMA_ONLY"
NEW_SCHEMA_ONLY = "NEW_SCHEMA_ONLY"
DUAL_SCHEMA = "DUAL_SCHEMA"
SCHEMA_MODES = (OLD_SCHEMA_ONLY, NEW_SCHEMA_ONLY, DUAL_SCHEMA)

SCHEMA_MODE = os.getenv("SCHEMA_MODE", OLD_SCHEMA_ONLY)  # OLD_SCHEMA_ONLY|NEW_SCHEMA_ONLY|DUAL_SCHEMA

# Wide-row columns holding an aspect envelope start with this prefix
ASPECT_COLUMN_PREFIX = os.getenv("ASPECT_COLUMN_PREFIX", "a_")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_db_path() -> str:
    """Database path, read at call time so tests can point it elsewhere."""
    return os.getenv("DB_PATH", DB_PATH)


def _raw_schema_mode() -> str:
    return os.getenv("SCHEMA_MODE", SCHEMA_MODE).upper()


def get_schema_mode() -> str:
    """Get schema mode (OLD_SCHEMA_ONLY|NEW_SCHEMA_ONLY|DUAL_SCHEMA); anything else raises ValueError."""
    mode = _raw_schema_mode()
    if mode not in SCHEMA_MODES:
        raise ValueError(f"Invalid SCHEMA_MODE: {mode}. Supported modes: {', '.join(SCHEMA_MODES)}")
    return mode


def get_aspect_column_prefix() -> str:
    return os.getenv("ASPECT_COLUMN_PREFIX", ASPECT_COLUMN_PREFIX)


def uses_old_schema() -> bool:
    return get_schema_mode() in (OLD_SCHEMA_ONLY, DUAL_SCHEMA)


def uses_new_schema() -> bool:
    return get_schema_mode() in (NEW_SCHEMA_ONLY, DUAL_SCHEMA)


def ensure_db_directory():
    """Ensure the database directory exists."""
    Path(get_db_path()).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if _raw_schema_mode() not in SCHEMA_MODES:
        issues.append(f"Invalid SCHEMA_MODE: {_raw_schema_mode()}")

    prefix = get_aspect_column_prefix()
    if not prefix:
        issues.append("ASPECT_COLUMN_PREFIX must not be empty")
    elif not prefix.replace("_", "").isalnum():
        issues.append(f"ASPECT_COLUMN_PREFIX must be alphanumeric or underscore: {prefix}")

    if os.getenv("LOG_LEVEL", LOG_LEVEL).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        issues.append(f"Invalid LOG_LEVEL: {os.getenv('LOG_LEVEL')}")

    return issues
