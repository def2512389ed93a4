#!/usr/bin/env python3
"""Backfill new report fields across all reports.

Usage:
    python scripts/run_report_migration.py
    python scripts/run_report_migration.py --record-version --stop-on-error
    python scripts/run_report_migration.py --name v2_enhanced_reports

Safe to re-run: already-migrated reports are left untouched.
Exits 0 on success, 1 on failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dailyreport.config import get_settings
from dailyreport.db.session import SessionLocal
from dailyreport.services.migration_runner import DEFAULT_MIGRATION_NAME, run_report_migration
from dailyreport.store.sql import SqlDocumentStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Migrate reports to the current schema")
    parser.add_argument("--name", default=DEFAULT_MIGRATION_NAME, help="Migration name for the audit log")
    parser.add_argument(
        "--record-version",
        action="store_true",
        help="Record the target schema version when every report succeeded",
    )
    parser.add_argument("--stop-on-error", action="store_true", help="Abort on the first failed report")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    db = SessionLocal()
    try:
        result = run_report_migration(
            SqlDocumentStore(db),
            args.name,
            record_target_version=args.record_version,
            stop_on_error=args.stop_on_error or None,
        )
        print(
            f"status={result['status']} "
            f"total={result['reports_total']} "
            f"migrated={result['reports_migrated']} "
            f"unchanged={result['reports_unchanged']} "
            f"missing={result['reports_missing']} "
            f"failed={result['reports_failed']}"
        )
        if result.get("version_id"):
            print(f"version_id={result['version_id']}")
        if result.get("error"):
            print(f"error={result['error']}", file=sys.stderr)
        return 0 if result["status"] == "completed" else 1
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
