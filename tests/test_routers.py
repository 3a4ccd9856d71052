# tests/test_routers.py

"""
Tests for the society resource endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from conftest import make_client, make_query, SOCIETY_ID


def supabase(tables: dict = None):
    return patch("core.supabase_helpers.get_supabase_client", return_value=make_client(tables))


def test_requires_authentication(client: TestClient):
    response = client.get("/members")
    assert response.status_code in (401, 403)


def test_list_members_paginated(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)
    rows = [{"id": str(i), "is_owner": i % 2 == 0, "family_members": []} for i in range(23)]

    with supabase({"profiles": make_query(rows)}):
        response = client.get("/members?page=2&page_size=10")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [m["id"] for m in body["data"]] == [str(i) for i in range(10, 20)]
    assert body["stats"]["total_members"] == 23
    assert body["pagination"] == {
        "page": 2,
        "page_size": 10,
        "total_items": 23,
        "total_pages": 3,
        "has_next_page": True,
        "has_previous_page": True,
        "page_numbers": [1, 2, 3],
    }


def test_page_size_is_capped(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)

    with supabase({"profiles": make_query([])}):
        response = client.get("/members?page=0&page_size=500")

    assert response.status_code == 200
    assert response.json()["pagination"]["page"] == 1
    assert response.json()["pagination"]["page_size"] == 100


def test_no_society_is_rejected_before_any_query(client: TestClient, login_as, mock_homeless_user):
    login_as(mock_homeless_user)

    with patch("core.supabase_helpers.get_supabase_client") as mock_supabase:
        response = client.get("/events")

    assert response.status_code == 400
    assert response.json()["detail"] == "No society associated"
    mock_supabase.assert_not_called()


def test_resident_cannot_add_members(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)
    response = client.post("/members", json={"email": "x@example.com", "full_name": "X"})
    assert response.status_code == 403


def test_add_member_returns_operation(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)
    profiles = make_query([{"id": "p1", "user_id": "u1", "society_id": SOCIETY_ID}])

    with supabase({"profiles": profiles}):
        response = client.post(
            "/members",
            json={"email": "member@example.com", "full_name": "Member", "member_data": {"unit_number": "C-3"}},
        )

    assert response.status_code == 200
    assert response.json()["operation"] == "updated"
    assert response.json()["user_id"] == "u1"


def test_amenities_listing(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)

    with supabase({
        "amenities": make_query([{"id": "a1", "name": "Gym", "is_active": True}]),
        "amenity_bookings": make_query([{"id": "b1", "status": "pending"}]),
    }):
        response = client.get("/amenities")

    assert response.status_code == 200
    body = response.json()
    assert body["related"]["bookings"][0]["id"] == "b1"
    assert body["stats"]["pending_bookings"] == 1


def test_booking_unknown_amenity(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)

    with supabase({"amenities": make_query([])}):
        response = client.post(
            "/amenities/bookings",
            json={"amenity_id": "nope", "booking_date": "2099-01-01", "start_time": "10:00", "end_time": "11:00"},
        )

    assert response.status_code == 404


def test_visitor_check_in(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)
    visitors = make_query([{"id": "v1", "entry_time": "2025-06-01T10:00:00+00:00"}])

    with supabase({"visitors": visitors}):
        response = client.post("/visitors/v1/check-in")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "checked_in"


def test_visitor_unknown_action(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)
    response = client.post("/visitors/v1/teleport")
    assert response.status_code == 422


def test_resident_cannot_approve_visitors(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)
    response = client.post("/visitors/v1/approve")
    assert response.status_code == 403


def test_resident_registers_visitor_as_host(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)
    visitors = make_query([{"id": "v1", "status": "pending"}])

    with supabase({"visitors": visitors}):
        response = client.post(
            "/visitors",
            json={"visitor_name": "Courier", "purpose": "Delivery", "visit_date": "2025-06-01"},
        )

    assert response.status_code == 200
    inserted = visitors.insert.call_args[0][0]
    assert inserted["host_profile_id"] == "resident-profile"
    assert inserted["society_id"] == SOCIETY_ID


def test_database_duplicate_maps_to_400(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)

    with supabase({"houses": make_query(error=Exception("duplicate key value violates unique constraint"))}):
        response = client.post("/houses", json={"block": "A", "unit": "101"})

    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]


def test_unexpected_database_error_maps_to_500(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)

    with supabase({"events": make_query(error=Exception("connection reset"))}):
        response = client.get("/events")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch events"


def test_maintenance_listing_uses_board_status(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)

    with supabase({"complaints": make_query([{"id": "c1", "status": "closed"}])}):
        response = client.get("/maintenance")

    assert response.status_code == 200
    item = response.json()["data"][0]
    assert item["status"] == "completed"
    assert item["complaint_status"] == "closed"


def test_announcement_publish_requires_write(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)
    response = client.post("/announcements", json={"title": "Hi", "content": "There"})
    assert response.status_code == 403


def test_dashboard_stats_for_resident(client: TestClient, login_as, mock_resident_user):
    login_as(mock_resident_user)

    with supabase({
        "maintenance_fees": make_query([{"amount": 500}]),
        "complaints": make_query(count=2),
        "events": make_query(count=1),
    }):
        response = client.get("/dashboard/stats")

    assert response.status_code == 200
    assert response.json()["data"] == {"my_dues": "₹500", "my_complaints": 2, "upcoming_events": 1}


def test_delete_missing_house(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)

    with supabase({"houses": make_query([])}):
        response = client.delete("/houses/unknown")

    assert response.status_code == 404


def test_committee_member_cannot_manage_roles(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user.model_copy(update={"role": "committee_member"}))
    response = client.post("/roles", json={"name": "Treasurer"})
    assert response.status_code == 403


def test_create_role_defaults_description(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)
    society_roles = make_query([{"id": "r1", "name": "Treasurer"}])

    with supabase({"society_roles": society_roles}):
        response = client.post("/roles", json={"name": " Treasurer "})

    assert response.status_code == 200
    inserted = society_roles.insert.call_args[0][0]
    assert inserted["name"] == "Treasurer"
    assert inserted["description"] == "Custom role: Treasurer"
    assert inserted["society_id"] == SOCIETY_ID


# -----------------------------------------------------
# Societies (super admin)
# -----------------------------------------------------
def test_super_admin_lists_societies_without_a_society(client: TestClient, login_as, mock_super_admin_user):
    login_as(mock_super_admin_user)
    rows = [
        {"id": "s1", "name": "Green Park", "profiles": [{"count": 12}]},
        {"id": "s2", "name": "Lake View", "profiles": []},
    ]
    societies = make_query(rows)

    with supabase({"societies": societies}):
        response = client.get("/societies")

    assert response.status_code == 200
    body = response.json()
    assert [s["member_count"] for s in body["data"]] == [12, 0]
    assert "profiles" not in body["data"][0]
    assert body["stats"] == {"total": 2, "total_members": 12}
    societies.order.assert_called_with("created_at", desc=True)
    societies.eq.assert_not_called()


@pytest.mark.parametrize("role", ["society_admin", "resident"])
def test_society_admin_cannot_list_societies(client: TestClient, login_as, mock_admin_user, role):
    login_as(mock_admin_user.model_copy(update={"role": role}))

    with patch("core.supabase_helpers.get_supabase_client") as mock_supabase:
        response = client.get("/societies")

    assert response.status_code == 403
    mock_supabase.assert_not_called()


def test_create_society(client: TestClient, login_as, mock_super_admin_user):
    login_as(mock_super_admin_user)
    societies = make_query([{"id": "s3", "name": "Palm Court"}])

    with supabase({"societies": societies}):
        response = client.post(
            "/societies",
            json={"name": " Palm Court ", "address": "12 MG Road", "email": "office@palmcourt.in", "phone": ""},
        )

    assert response.status_code == 200
    assert response.json()["data"]["id"] == "s3"
    inserted = societies.insert.call_args[0][0]
    assert inserted["name"] == "Palm Court"
    assert inserted["phone"] is None
    assert inserted["registration_number"] is None


def test_create_society_requires_name(client: TestClient, login_as, mock_super_admin_user):
    login_as(mock_super_admin_user)
    response = client.post("/societies", json={"address": "12 MG Road"})
    assert response.status_code == 422


def test_delete_society(client: TestClient, login_as, mock_super_admin_user):
    login_as(mock_super_admin_user)
    societies = make_query([{"id": "s1"}])

    with supabase({"societies": societies}):
        response = client.delete("/societies/s1")

    assert response.status_code == 200
    societies.eq.assert_called_with("id", "s1")


def test_delete_missing_society(client: TestClient, login_as, mock_super_admin_user):
    login_as(mock_super_admin_user)

    with supabase({"societies": make_query([])}):
        response = client.delete("/societies/missing")

    assert response.status_code == 404


def test_delete_society_with_members_is_rejected(client: TestClient, login_as, mock_super_admin_user):
    login_as(mock_super_admin_user)
    error = Exception('update or delete on table "societies" violates foreign key constraint')

    with supabase({"societies": make_query(error=error)}):
        response = client.delete("/societies/s1")

    assert response.status_code == 400
