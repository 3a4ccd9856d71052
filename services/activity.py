# services/activity.py

from typing import List, Optional

from core.config import settings
from core.utils import format_currency, format_relative_time, parse_timestamp
from models.snapshot import ResourceSnapshot, TenantContext


def _recent(client, table: str, select: str, column: str, value: str, limit: int) -> List[dict]:
    return (
        client.table(table)
        .select(select)
        .eq(column, value)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    ).data or []


def _user(row: dict, unit: Optional[str] = None) -> Optional[dict]:
    profile = row.get("profiles")
    if not profile:
        return None
    return {
        "name": profile.get("full_name"),
        "unit": unit or profile.get("unit_number") or "N/A",
    }


def _payment_status(payment: dict) -> str:
    return "completed" if payment.get("status") == "paid" else "pending"


def _complaint_item(row: dict) -> dict:
    return {
        "id": row["id"],
        "type": "complaint",
        "title": row.get("title"),
        "description": row.get("description"),
        "created_at": row.get("created_at"),
        "status": row.get("status"),
        "user": _user(row),
    }


def _payment_item(row: dict, title: str) -> dict:
    return {
        "id": row["id"],
        "type": "payment",
        "title": title,
        "description": f"Maintenance fee of {format_currency(float(row.get('amount') or 0))}",
        "created_at": row.get("payment_date") or row.get("created_at"),
        "status": _payment_status(row),
        "user": _user(row),
    }


def _visitor_item(row: dict) -> dict:
    return {
        "id": row["id"],
        "type": "visitor",
        "title": "Visitor Request",
        "description": f"{row.get('visitor_name')} - {row.get('purpose')}",
        "created_at": row.get("created_at"),
        "status": row.get("status"),
        "user": _user(row),
    }


def _announcement_item(row: dict) -> dict:
    content = row.get("content") or ""
    return {
        "id": row["id"],
        "type": "announcement",
        "title": row.get("title"),
        "description": content[:100] + "..." if len(content) > 100 else content,
        "created_at": row.get("created_at"),
        "status": None,
        "user": _user(row, unit="Admin"),
    }


def admin_activity(client, society_id: str) -> List[dict]:
    complaints = _recent(
        client, "complaints",
        "id, title, description, status, created_at, profiles!profile_id(full_name, unit_number)",
        "society_id", society_id, 3,
    )
    payments = _recent(
        client, "maintenance_fees",
        "id, amount, status, payment_date, created_at, profiles!profile_id(full_name, unit_number)",
        "society_id", society_id, 3,
    )
    visitors = _recent(
        client, "visitors",
        "id, visitor_name, purpose, status, created_at, profiles!host_profile_id(full_name, unit_number)",
        "society_id", society_id, 2,
    )
    announcements = _recent(
        client, "announcements",
        "id, title, content, created_at, profiles!created_by(full_name, unit_number)",
        "society_id", society_id, 2,
    )

    return (
        [_complaint_item(c) for c in complaints]
        + [_payment_item(p, "Payment Received") for p in payments]
        + [_visitor_item(v) for v in visitors]
        + [_announcement_item(a) for a in announcements]
    )


def resident_activity(client, profile_id: str) -> List[dict]:
    complaints = _recent(
        client, "complaints",
        "id, title, description, status, created_at",
        "profile_id", profile_id, 3,
    )
    payments = _recent(
        client, "maintenance_fees",
        "id, amount, status, due_date, created_at",
        "profile_id", profile_id, 3,
    )

    items = [_complaint_item(c) for c in complaints]
    for p in payments:
        title = "Payment Completed" if p.get("status") == "paid" else "Payment Due"
        items.append({**_payment_item(p, title), "created_at": p.get("created_at")})
    return items


def fetch_activity(client, context: TenantContext) -> ResourceSnapshot:
    """Most recent activity, newest first, with a relative timestamp."""
    society_id = context.require_society()

    if context.is_admin:
        items = admin_activity(client, society_id)
    else:
        items = resident_activity(client, context.profile_id)

    items.sort(key=lambda i: parse_timestamp(i["created_at"]) or parse_timestamp("1970-01-01"), reverse=True)
    items = items[: settings.ACTIVITY_FEED_LIMIT]
    for item in items:
        item["timestamp"] = format_relative_time(item["created_at"])

    return ResourceSnapshot(resource="activity", items=items, stats={"total": len(items)})
