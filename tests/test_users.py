from datetime import date, timedelta

from salonbase.models.appointment_model import Appointment
from salonbase.models.user_model import User


def test_users_endpoints_are_admin_only(client, user_headers):
    response = client.get("/api/users", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["success"] is False
    assert "not authorized" in response.json()["message"]


def test_list_users_is_paginated(client, admin_headers, make_user):
    for i in range(3):
        make_user(f"user{i}@example.com")

    response = client.get("/api/users", params={"page": 2, "limit": 2}, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["items"]) == 2
    assert data["pagination"] == {"page": 2, "limit": 2, "total": 4, "pages": 2}


def test_list_users_filters(client, admin_headers, make_user):
    make_user("alice@example.com", name="Alice Cooper")
    make_user("bob@example.com", name="Bob Marley", is_active=False)

    by_search = client.get("/api/users", params={"search": "alice"}, headers=admin_headers).json()["data"]
    assert [u["email"] for u in by_search["items"]] == ["alice@example.com"]

    by_role = client.get("/api/users", params={"role": "admin"}, headers=admin_headers).json()["data"]
    assert [u["role"] for u in by_role["items"]] == ["admin"]

    inactive = client.get("/api/users", params={"is_active": False}, headers=admin_headers).json()["data"]
    assert [u["email"] for u in inactive["items"]] == ["bob@example.com"]


def test_user_stats(client, admin_headers, make_user):
    make_user("alice@example.com")
    make_user("bob@example.com", is_active=False)

    response = client.get("/api/users/stats", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "total_users": 3,
        "active_users": 2,
        "admin_users": 1,
        "regular_users": 2,
        "new_users": 3,
    }


def test_get_user_not_found(client, admin_headers):
    response = client.get("/api/users/00000000-0000-0000-0000-000000000000", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_admin_updates_user(client, admin_headers, customer):
    response = client.put(
        f"/api/users/{customer.id}",
        json={"name": "John Updated", "role": "admin", "is_active": False, "phone": "+441234567"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    user = response.json()["data"]
    assert user["name"] == "John Updated"
    assert user["role"] == "admin"
    assert user["is_active"] is False
    assert user["phone"] == "+441234567"


def test_admin_update_rejects_taken_email(client, admin_headers, customer, other_customer):
    response = client.put(
        f"/api/users/{customer.id}", json={"email": "jane@example.com"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Email already exists"


def test_admin_update_validates_phone(client, admin_headers, customer):
    response = client.put(
        f"/api/users/{customer.id}", json={"phone": "0555 123 4567"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Validation Error"


def test_admin_cannot_delete_own_account(client, admin, admin_headers):
    response = client.delete(f"/api/users/{admin.id}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot delete your own account"


def test_regular_user_cannot_delete_accounts(client, user_headers, other_customer):
    response = client.delete(f"/api/users/{other_customer.id}", headers=user_headers)

    assert response.status_code == 403


def test_admin_deletes_user_and_their_appointments(client, admin_headers, customer, db_session):
    customer_id = customer.id
    db_session.add(Appointment(
        user_id=customer_id,
        user_name=customer.name,
        user_phone=customer.phone,
        service="Manicure",
        date=date.today() + timedelta(days=3),
        time="10:00",
        duration=45,
        price=25,
    ))
    db_session.commit()
    db_session.expunge_all()

    response = client.delete(f"/api/users/{customer_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "User deleted successfully"
    assert db_session.query(User).filter(User.id == customer_id).first() is None
    assert db_session.query(Appointment).filter(Appointment.user_id == customer_id).count() == 0
