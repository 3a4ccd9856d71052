# jobs/seed_roles.py
"""
Seed role_permissions with the built-in role → permission map.

    python -m jobs.seed_roles            # every role
    python -m jobs.seed_roles --role resident
"""

import argparse
import sys

from core.admin_helpers import seed_role_permissions
from core.config_validator import validate_required_config
from core.logging_config import logger
from core.permissions import ROLE_PERMISSIONS
from core.supabase_client import get_supabase_client


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Seed default role permissions.")
    ap.add_argument("--role", choices=sorted(ROLE_PERMISSIONS), help="Only seed this role")
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
        count = seed_role_permissions(client, args.role)
    except Exception as e:
        logger.error(f"❌ Seeding role permissions failed: {e}")
        return 1

    logger.info(f"✅ Seeded {count} role permissions ({args.role or 'all roles'})")
    return 0


if __name__ == "__main__":
    sys.exit(run())
