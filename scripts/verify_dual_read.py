#!/usr/bin/env python3
"""
Dual-read verification for the old-to-new schema migration.

Reads the latest aspects of each urn from both schema tables and reports the
urns whose results disagree. Mismatch details go to the aspect_store log.
"""

import argparse
import os
import sys

from aspect_store.core.compare import compare_results
from aspect_store.core.dao import read_new_schema, read_old_schema
from aspect_store.core.db import OLD_SCHEMA_TABLE, fetch_rows, init_db
from aspect_store.core.envelope import MalformedEnvelopeError


def all_urns():
    rows = fetch_rows(f"SELECT DISTINCT urn FROM {OLD_SCHEMA_TABLE} ORDER BY urn")
    return [row.urn for row in rows]


def verify_urn(urn: str) -> bool:
    """True when the old and new schema tables agree on an urn's latest aspects."""
    try:
        result_new = read_new_schema(urn)
    except MalformedEnvelopeError as e:
        print(f"❌ {urn}: new schema row could not be decoded ({e})")
        return False
    return compare_results(read_old_schema(urn), result_new, f"verify_dual_read[{urn}]")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Compare old and new schema reads for migrated urns")
    parser.add_argument(
        "--urn",
        action="append",
        dest="urns",
        help="Urn to verify (repeatable, default: every urn in the old schema table)"
    )
    parser.add_argument(
        "--db-path",
        help="SQLite database path (default: DB_PATH environment variable)"
    )
    args = parser.parse_args(argv)

    if args.db_path:
        os.environ["DB_PATH"] = args.db_path

    init_db()

    urns = args.urns or all_urns()
    if not urns:
        print("📋 No urns to verify")
        return 0

    mismatched = [urn for urn in urns if not verify_urn(urn)]

    print(f"Verified {len(urns)} urn(s): {len(urns) - len(mismatched)} match, {len(mismatched)} differ")
    for urn in mismatched:
        print(f"  ⚠️  {urn}")

    if mismatched:
        print("❌ Schemas disagree; old schema values remain authoritative")
        return 1
    print("✅ Old and new schema reads agree")
    return 0


if __name__ == "__main__":
    sys.exit(main())
