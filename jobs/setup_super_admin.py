# jobs/setup_super_admin.py
"""
Like make_super_admin, then also makes sure the profile row is an
active super admin (fixes accounts left inactive by earlier runs).

    python -m jobs.setup_super_admin --email admin@example.com
"""

import argparse
import sys

from core.admin_helpers import grant_super_admin, ensure_active_super_admin_profile
from core.config_validator import validate_required_config
from core.logging_config import logger
from core.supabase_client import get_supabase_client


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Create or repair a super admin account.")
    ap.add_argument("-e", "--email", required=True, help="Email of the super admin")
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

    try:
        operation, user_id = grant_super_admin(client, args.email)
        logger.info(f"Super admin {operation}: {user_id}")

        profile = ensure_active_super_admin_profile(client, args.email)
        logger.info(f"Profile {profile.get('id')} is an active super admin")
    except Exception as e:
        logger.error(f"❌ Error setting up super admin: {e}")
        return 1

    logger.info(f"✅ Super admin setup completed for {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(run())
