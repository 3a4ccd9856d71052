# jobs/check_tables.py
"""
Verify every society table answers and print its row count.
Exits 1 if any table is unreachable.

    python -m jobs.check_tables
"""

import argparse
import sys

from core.admin_helpers import SOCIETY_TABLES, check_tables
from core.config_validator import validate_required_config
from core.logging_config import logger
from core.supabase_client import get_supabase_client


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Check that the society tables are reachable.")
    ap.add_argument("--table", action="append", dest="tables", help="Table to check (repeatable, default: all)")
    return ap


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)

    missing = validate_required_config()
    if missing:
        logger.error(f"Missing required environment variables: {', '.join(missing)}")
        return 1

    client = get_supabase_client()
    if not client:
        logger.error("Supabase not configured")
        return 1

    results = check_tables(client, args.tables or SOCIETY_TABLES)

    failed = 0
    for table, result in results.items():
        if result["status"] == "ok":
            print(f"✅ {table}: {result['count']} rows")
        else:
            failed += 1
            print(f"❌ {table}: {result['detail']}")

    if failed:
        logger.error(f"{failed} of {len(results)} tables failed")
        return 1

    logger.info(f"All {len(results)} tables reachable")
    return 0


if __name__ == "__main__":
    sys.exit(run())
