# tests/test_services.py

"""
Tests for the resource services: tenant-scoped queries and derived stats.
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest
from fastapi import HTTPException

from conftest import make_client, make_query, SOCIETY_ID
from core.errors import NoSocietyError
from models.amenity import BookingCreate
from models.enums import VisitorAction
from models.snapshot import TenantContext
from services import activity, amenities, announcements, dashboard, events, houses, maintenance, members, roles, visitors


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


# -----------------------------------------------------
# Tenant guard
# -----------------------------------------------------
@pytest.mark.parametrize(
    "fetcher",
    [
        members.fetch_members,
        amenities.fetch_amenities,
        visitors.fetch_visitors,
        events.fetch_events,
        maintenance.fetch_maintenance,
        announcements.fetch_announcements,
        dashboard.fetch_dashboard,
        activity.fetch_activity,
        houses.fetch_houses,
        roles.fetch_roles,
    ],
)
def test_fetchers_refuse_without_society(fetcher):
    client = make_client()
    with pytest.raises(NoSocietyError):
        fetcher(client, TenantContext(society_id=None, profile_id="p"))
    client.table.assert_not_called()


# -----------------------------------------------------
# Members
# -----------------------------------------------------
def test_member_stats(admin_context):
    rows = [
        {"id": "1", "is_owner": True, "family_members": ["A", "B", "C"]},
        {"id": "2", "is_owner": False, "family_members": []},
        {"id": "3", "is_owner": True, "family_members": None},
        {"id": "4"},
    ]
    profiles = make_query(rows)
    snapshot = members.fetch_members(make_client({"profiles": profiles}), admin_context)

    assert len(snapshot.items) == 4
    assert snapshot.stats == {
        "total_members": 4,
        "owners": 2,
        "tenants": 1,
        "total_residents": 6,
    }
    profiles.eq.assert_any_call("society_id", SOCIETY_ID)
    profiles.eq.assert_any_call("is_active", True)


def test_upsert_member_creates_auth_user_and_profile():
    from models.member import MemberCreate

    client = make_client({"profiles": make_query([])})
    client.auth.admin.create_user.return_value.user.id = "new-user"

    result = members.upsert_member(
        client,
        MemberCreate(email="Priya@Example.com", full_name=" Priya ", member_data={"unit_number": "B-2"}),
        SOCIETY_ID,
    )

    assert result.operation == "created"
    assert result.user_id == "new-user"
    assert len(result.temporary_password) == 12
    sent = client.auth.admin.create_user.call_args[0][0]
    assert sent["email"] == "priya@example.com"
    assert sent["user_metadata"]["society_id"] == SOCIETY_ID
    inserted = client.table("profiles").insert.call_args[0][0]
    assert inserted["id"] == "new-user"
    assert inserted["full_name"] == "Priya"
    assert inserted["unit_number"] == "B-2"


def test_upsert_member_updates_existing_profile():
    from models.member import MemberCreate

    profiles = make_query([{"id": "profile-9", "user_id": "user-9", "society_id": SOCIETY_ID}])
    client = make_client({"profiles": profiles})

    result = members.upsert_member(client, MemberCreate(email="a@example.com", full_name="A"), SOCIETY_ID)

    assert result.operation == "updated"
    assert result.user_id == "user-9"
    assert result.temporary_password is None
    client.auth.admin.create_user.assert_not_called()
    profiles.update.assert_called_once()
    client.auth.admin.update_user_by_id.assert_called_once()


def test_upsert_member_rejects_member_of_other_society():
    from models.member import MemberCreate

    client = make_client({"profiles": make_query([{"id": "p", "user_id": "u", "society_id": "other"}])})
    with pytest.raises(HTTPException) as exc:
        members.upsert_member(client, MemberCreate(email="a@example.com", full_name="A"), SOCIETY_ID)
    assert exc.value.status_code == 409


# -----------------------------------------------------
# Amenities
# -----------------------------------------------------
def test_amenity_stats_and_related_bookings(admin_context):
    client = make_client({
        "amenities": make_query([
            {"id": "a1", "name": "Clubhouse", "is_active": True},
            {"id": "a2", "name": "Pool", "is_active": False},
        ]),
        "amenity_bookings": make_query([
            {"id": "b1", "status": "pending"},
            {"id": "b2", "status": "confirmed"},
            {"id": "b3", "status": "pending"},
        ]),
    })

    snapshot = amenities.fetch_amenities(client, admin_context)

    assert len(snapshot.items) == 2
    assert len(snapshot.related["bookings"]) == 3
    assert snapshot.stats == {
        "total_amenities": 2,
        "active_amenities": 1,
        "total_bookings": 3,
        "pending_bookings": 2,
    }
    client.table("amenity_bookings").eq.assert_any_call("amenities.society_id", SOCIETY_ID)
    client.table("amenity_bookings").limit.assert_called_with(20)


def _booking(**overrides):
    values = {
        "amenity_id": "a1",
        "booking_date": date(2025, 6, 10),
        "start_time": time(10, 0),
        "end_time": time(12, 0),
    }
    values.update(overrides)
    return BookingCreate(**values)


def test_validate_booking_rules():
    today = date(2025, 6, 1)
    amenity = {"name": "Clubhouse", "is_active": True, "advance_booking_days": 30, "max_hours": 3}

    amenities.validate_booking(amenity, _booking(), today=today)

    with pytest.raises(HTTPException):
        amenities.validate_booking({**amenity, "is_active": False}, _booking(), today=today)
    with pytest.raises(HTTPException):
        amenities.validate_booking(amenity, _booking(booking_date=date(2025, 5, 31)), today=today)
    with pytest.raises(HTTPException):
        amenities.validate_booking(amenity, _booking(booking_date=date(2025, 8, 1)), today=today)
    with pytest.raises(HTTPException):
        amenities.validate_booking(amenity, _booking(end_time=time(14, 0)), today=today)


def test_booking_end_must_follow_start():
    with pytest.raises(ValueError):
        _booking(start_time=time(12, 0), end_time=time(11, 0))


# -----------------------------------------------------
# Visitors
# -----------------------------------------------------
@pytest.mark.parametrize(
    "row,expected",
    [
        ({"status": "approved", "entry_time": "2025-06-01T10:00:00Z", "exit_time": None}, "checked_in"),
        ({"status": "checked_in", "entry_time": "2025-06-01T10:00:00Z", "exit_time": "2025-06-01T11:00:00Z"}, "checked_out"),
        ({"status": "approved"}, "approved"),
        ({"status": "rejected"}, "rejected"),
        ({"status": "checked_in"}, "pending"),
        ({"status": None}, "pending"),
    ],
)
def test_derive_visitor_status(row, expected):
    assert visitors.derive_visitor_status(row) == expected


def test_visitor_stats(admin_context):
    rows = [
        {"id": "1", "status": "pending"},
        {"id": "2", "status": "approved", "entry_time": "2025-06-01T10:00:00Z"},
        {"id": "3", "status": "approved", "entry_time": "2025-06-01T10:00:00Z", "exit_time": "2025-06-01T10:30:00Z"},
        {"id": "4", "status": "rejected"},
        {"id": "5", "status": "approved"},
    ]
    query = make_query(rows)
    snapshot = visitors.fetch_visitors(make_client({"visitors": query}), admin_context)

    assert snapshot.stats == {"total": 5, "pending": 1, "in_progress": 1, "completed": 2}
    assert snapshot.items[1]["status"] == "checked_in"
    query.limit.assert_called_with(50)


def test_check_in_stamps_entry_time(admin_context):
    query = make_query([{"id": "v1", "status": "checked_in", "entry_time": "2025-06-01T10:00:00+00:00"}])
    visitors.apply_visitor_action(make_client({"visitors": query}), "v1", VisitorAction.check_in, admin_context)

    updates = query.update.call_args[0][0]
    assert updates["status"] == "checked_in"
    assert "entry_time" in updates
    assert "exit_time" not in updates
    query.eq.assert_any_call("society_id", SOCIETY_ID)


def test_check_out_stamps_exit_time(admin_context):
    query = make_query([{"id": "v1", "exit_time": "2025-06-01T11:00:00+00:00"}])
    visitors.apply_visitor_action(make_client({"visitors": query}), "v1", VisitorAction.check_out, admin_context)

    updates = query.update.call_args[0][0]
    assert updates["status"] == "checked_out"
    assert "exit_time" in updates


def test_visitor_action_unknown_visitor(admin_context):
    with pytest.raises(HTTPException) as exc:
        visitors.apply_visitor_action(make_client(), "missing", VisitorAction.approve, admin_context)
    assert exc.value.status_code == 404


# -----------------------------------------------------
# Events
# -----------------------------------------------------
def test_event_stats():
    rows = [
        {"event_date": iso(NOW - timedelta(days=2))},
        {"event_date": iso(NOW + timedelta(hours=1))},
        {"event_date": iso(NOW + timedelta(days=9))},
    ]
    assert events.compute_event_stats(rows, now=NOW) == {"total": 3, "upcoming": 2, "completed": 1}


def test_events_ordered_by_date(admin_context):
    query = make_query([])
    events.fetch_events(make_client({"events": query}), admin_context)
    query.order.assert_called_with("event_date", desc=False)


# -----------------------------------------------------
# Maintenance
# -----------------------------------------------------
def test_maintenance_status_mapping_and_stats(admin_context):
    rows = [
        {"id": "1", "status": "open"},
        {"id": "2", "status": "in_progress"},
        {"id": "3", "status": "resolved"},
        {"id": "4", "status": "closed"},
        {"id": "5", "status": "open"},
    ]
    snapshot = maintenance.fetch_maintenance(make_client({"complaints": make_query(rows)}), admin_context)

    assert [i["status"] for i in snapshot.items] == ["pending", "in_progress", "completed", "completed", "pending"]
    assert snapshot.items[3]["complaint_status"] == "closed"
    assert snapshot.stats == {"total": 5, "pending": 2, "in_progress": 1, "completed": 2}


def test_resolving_request_stamps_resolved_at(admin_context):
    from models.complaint import ComplaintUpdate

    query = make_query([{"id": "c1", "status": "resolved"}])
    result = maintenance.update_complaint(
        make_client({"complaints": query}), "c1", ComplaintUpdate(status="resolved"), admin_context
    )

    changes = query.update.call_args[0][0]
    assert "resolved_at" in changes
    assert result["status"] == "completed"


# -----------------------------------------------------
# Announcements
# -----------------------------------------------------
def test_announcement_stats():
    rows = [
        {"is_urgent": True, "expires_at": None},
        {"is_urgent": False, "expires_at": iso(NOW + timedelta(hours=5))},
        {"is_urgent": True, "expires_at": iso(NOW + timedelta(hours=24))},
        {"is_urgent": False, "expires_at": iso(NOW + timedelta(hours=30))},
    ]
    assert announcements.compute_announcement_stats(rows, now=NOW) == {
        "total": 4,
        "urgent": 2,
        "expiring_soon": 2,
    }


def test_announcements_exclude_expired(admin_context):
    query = make_query([])
    announcements.fetch_announcements(make_client({"announcements": query}), admin_context)
    filter_arg = query.or_.call_args[0][0]
    assert filter_arg.startswith("expires_at.is.null,expires_at.gt.")


# -----------------------------------------------------
# Dashboard
# -----------------------------------------------------
def test_collection_rate():
    assert dashboard.collection_rate(0, 0) == 0
    assert dashboard.collection_rate(2500, 7500) == 75
    assert dashboard.collection_rate(1, 2) == 67


def test_admin_dashboard(admin_context):
    fees = make_query([{"amount": 1500}, {"amount": "2500.00"}])
    client = make_client({
        "profiles": make_query(count=42),
        "complaints": make_query(count=3),
        "events": make_query(count=2),
        "maintenance_fees": fees,
    })

    snapshot = dashboard.fetch_dashboard(client, admin_context)

    # pending and paid sums come from the same mocked query
    assert snapshot.stats == {
        "total_members": 42,
        "pending_dues": "₹4,000",
        "open_complaints": 3,
        "collection_rate": "50%",
        "upcoming_events": 2,
    }


def test_resident_dashboard(resident_context):
    client = make_client({
        "maintenance_fees": make_query([{"amount": 12345}]),
        "complaints": make_query(count=1),
        "events": make_query(count=4),
    })

    snapshot = dashboard.fetch_dashboard(client, resident_context)

    assert snapshot.stats == {"my_dues": "₹12,345", "my_complaints": 1, "upcoming_events": 4}
    client.table("complaints").eq.assert_any_call("profile_id", "resident-profile")


# -----------------------------------------------------
# Activity
# -----------------------------------------------------
def test_resident_activity_sorted_and_limited(resident_context):
    now = datetime.now(timezone.utc)
    complaints = [
        {"id": f"c{i}", "title": f"Complaint {i}", "description": "", "status": "open",
         "created_at": iso(now - timedelta(minutes=10 * i))}
        for i in range(3)
    ]
    payments = [
        {"id": f"p{i}", "amount": 2000, "status": "paid" if i == 0 else "pending",
         "created_at": iso(now - timedelta(minutes=5 + 10 * i))}
        for i in range(3)
    ]
    client = make_client({
        "complaints": make_query(complaints),
        "maintenance_fees": make_query(payments),
    })

    snapshot = activity.fetch_activity(client, resident_context)

    assert [i["id"] for i in snapshot.items] == ["c0", "p0", "c1", "p1", "c2", "p2"]
    assert snapshot.items[0]["timestamp"] == "Just now"
    assert snapshot.items[1]["title"] == "Payment Completed"
    assert snapshot.items[3]["title"] == "Payment Due"
    assert snapshot.items[1]["description"] == "Maintenance fee of ₹2,000"


def test_admin_activity_caps_at_eight(admin_context):
    now = datetime.now(timezone.utc)

    def rows(prefix, count, **extra):
        return [
            {"id": f"{prefix}{i}", "created_at": iso(now - timedelta(hours=i)),
             "profiles": {"full_name": "Ravi", "unit_number": None}, **extra}
            for i in range(count)
        ]

    client = make_client({
        "complaints": make_query(rows("c", 3, title="Leak", description="Kitchen", status="open")),
        "maintenance_fees": make_query(rows("p", 3, amount=500, status="paid")),
        "visitors": make_query(rows("v", 2, visitor_name="Courier", purpose="Delivery", status="pending")),
        "announcements": make_query(rows("a", 2, title="AGM", content="x" * 150)),
    })

    snapshot = activity.fetch_activity(client, admin_context)

    assert len(snapshot.items) == 8
    announcement = next(i for i in snapshot.items if i["type"] == "announcement")
    assert announcement["user"] == {"name": "Ravi", "unit": "Admin"}
    assert announcement["description"].endswith("...")
    visitor = next(i for i in snapshot.items if i["type"] == "visitor")
    assert visitor["user"]["unit"] == "N/A"


# -----------------------------------------------------
# Houses / roles
# -----------------------------------------------------
def test_houses_ordered_by_block_then_unit(admin_context):
    query = make_query([{"id": "h1", "is_occupied": True}, {"id": "h2", "is_occupied": False}])
    snapshot = houses.fetch_houses(make_client({"houses": query}), admin_context)

    assert snapshot.stats == {"total": 2, "occupied": 1}
    assert [c.args[0] for c in query.order.call_args_list] == ["block", "unit"]


def test_role_permissions_checklist(admin_context):
    client = make_client({
        "society_roles": make_query([{"id": "r1", "society_id": SOCIETY_ID}]),
        "society_role_permissions": make_query([{"permission": "events:read"}]),
    })

    checklist = roles.get_role_permissions(client, "r1", admin_context)

    assert checklist["events:read"] is True
    assert checklist["events:write"] is False
    assert "*" not in checklist


def test_set_role_permissions_adds_and_removes(admin_context):
    links = make_query([{"permission": "events:read"}, {"permission": "houses:read"}])
    client = make_client({
        "society_roles": make_query([{"id": "r1", "society_id": SOCIETY_ID}]),
        "society_role_permissions": links,
    })

    roles.set_role_permissions(client, "r1", ["events:read", "events:write"], admin_context)

    links.insert.assert_called_once_with([{"role_id": "r1", "permission": "events:write"}])
    links.in_.assert_called_with("permission", ["houses:read"])


def test_set_role_permissions_rejects_unknown(admin_context):
    client = make_client({"society_roles": make_query([{"id": "r1"}])})
    with pytest.raises(HTTPException) as exc:
        roles.set_role_permissions(client, "r1", ["*"], admin_context)
    assert exc.value.status_code == 400
