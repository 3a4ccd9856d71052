# core/utils.py

import re
from datetime import datetime, timezone
from typing import Optional


# fractional seconds and an optional hour-only offset ("+05" → "+05:00")
_FRACTION = re.compile(r"\.(\d+)")
_SHORT_OFFSET = re.compile(r"([+-]\d{2})$")


def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data before it is written to Supabase:
    - Empty strings → None
    - Strip string whitespace
    - Everything else kept as-is
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped else None
            continue

        clean[k] = v

    return clean


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse Supabase timestamps ("2025-01-01T00:00:00Z", "+00:00" offsets,
    bare dates). Naive values are treated as UTC.

    Postgres drops trailing zeros from fractional seconds; the fraction is
    padded or cut to microseconds because fromisoformat before 3.11 only
    accepts 3 or 6 digits.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        if "T" in text or " " in text:
            text = _SHORT_OFFSET.sub(r"\1:00", text)
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_currency(amount: float) -> str:
    """₹ amount with thousands separators, e.g. ₹12,345 or ₹1,234.5."""
    if float(amount).is_integer():
        return f"₹{int(amount):,}"
    return f"₹{amount:,.2f}".rstrip("0")


def format_relative_time(value, now: Optional[datetime] = None) -> str:
    """Human-friendly age of a timestamp for the activity feed."""
    moment = parse_timestamp(value)
    if moment is None:
        return ""

    now = now or utc_now()
    seconds = int((now - moment).total_seconds())

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60} minutes ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    if seconds < 604800:
        return f"{seconds // 86400} days ago"

    return moment.date().isoformat()
