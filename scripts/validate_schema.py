#!/usr/bin/env python3
"""Print schema version status, integrity issues and collection counts.

Usage:
    python scripts/validate_schema.py

Exits 0 when no integrity issues were found, 1 otherwise.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dailyreport.db.session import SessionLocal
from dailyreport.services.integrity_checker import validate
from dailyreport.services.table_stats import get_table_stats
from dailyreport.services.version_ledger import get_version_status
from dailyreport.store.sql import SqlDocumentStore


def main() -> int:
    db = SessionLocal()
    try:
        store = SqlDocumentStore(db)
        status = get_version_status(store)
        print(
            f"current_version={status.current_version} "
            f"target_version={status.target_version} "
            f"needs_update={status.needs_update}"
        )
        stats = get_table_stats(store)
        print(
            f"orgs={stats.orgs} users={stats.users} reports={stats.reports} "
            f"schema_versions={stats.schema_versions} audit_logs={stats.audit_logs}"
        )
        report = validate(store)
        for issue in report.issues:
            print(f"issue: {issue}", file=sys.stderr)
        print(f"is_valid={report.is_valid}")
        return 0 if report.is_valid else 1
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
