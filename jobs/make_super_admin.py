# jobs/make_super_admin.py
"""
Grant super admin privileges to a user, creating the account if needed.

    python -m jobs.make_super_admin --email admin@example.com
"""

import argparse
import sys

from core.admin_helpers import grant_super_admin
from core.config_validator import validate_required_config
from core.logging_config import logger
from core.supabase_client import get_supabase_client


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Make a user a super admin.")
    ap.add_argument("-e", "--email", required=True, help="Email of the user to make super admin")
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

    logger.info(f"Setting up super admin for: {args.email}")
    try:
        operation, user_id = grant_super_admin(client, args.email)
    except Exception as e:
        logger.error(f"❌ Error setting up super admin: {e}")
        return 1

    logger.info(f"✅ Super admin {operation}: {args.email} ({user_id})")
    return 0


if __name__ == "__main__":
    sys.exit(run())
