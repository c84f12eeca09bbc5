from datetime import date, timedelta

from salonbase.models.appointment_model import Appointment

SERVICE_PAYLOAD = {
    "name": "Swedish Massage",
    "description": "Relaxing full body massage for stress relief",
    "duration": 90,
    "price": 75.0,
    "category": "massage",
}


def test_listing_services_requires_login(client):
    response = client.get("/api/services")

    assert response.status_code == 401


def test_list_services_with_filters(client, user_headers, make_service):
    make_service("Haircut & Styling", category="hair")
    make_service("Manicure", duration=45, price=25.0, category="nails")
    make_service("Old Pedicure", category="nails", is_active=False)

    everything = client.get("/api/services", headers=user_headers).json()["data"]
    assert everything["pagination"]["total"] == 3

    nails = client.get("/api/services", params={"category": "nails"}, headers=user_headers).json()["data"]
    assert {s["name"] for s in nails["items"]} == {"Manicure", "Old Pedicure"}

    active_nails = client.get(
        "/api/services", params={"category": "nails", "is_active": True}, headers=user_headers
    ).json()["data"]
    assert [s["name"] for s in active_nails["items"]] == ["Manicure"]

    searched = client.get("/api/services", params={"search": "haircut"}, headers=user_headers).json()["data"]
    assert [s["name"] for s in searched["items"]] == ["Haircut & Styling"]


def test_get_service_includes_formatted_duration(client, user_headers, make_service):
    service = make_service("Hair Colouring", duration=120, price=85.0)

    response = client.get(f"/api/services/{service.id}", headers=user_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["duration_formatted"] == "2h"
    assert data["price"] == 85.0


def test_get_unknown_service(client, user_headers):
    response = client.get("/api/services/00000000-0000-0000-0000-000000000000", headers=user_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Service not found"


def test_admin_creates_service(client, admin_headers):
    response = client.post("/api/services", json=SERVICE_PAYLOAD, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Service created successfully"
    assert body["data"]["name"] == "Swedish Massage"
    assert body["data"]["is_active"] is True
    assert body["data"]["duration_formatted"] == "1h 30m"


def test_category_defaults_to_other(client, admin_headers):
    payload = {k: v for k, v in SERVICE_PAYLOAD.items() if k != "category"}
    response = client.post("/api/services", json=payload, headers=admin_headers)

    assert response.json()["data"]["category"] == "other"


def test_regular_user_cannot_create_service(client, user_headers):
    response = client.post("/api/services", json=SERVICE_PAYLOAD, headers=user_headers)

    assert response.status_code == 403


def test_service_validation(client, admin_headers):
    too_long = client.post("/api/services", json={**SERVICE_PAYLOAD, "duration": 500}, headers=admin_headers)
    negative = client.post("/api/services", json={**SERVICE_PAYLOAD, "price": -1}, headers=admin_headers)
    bad_category = client.post("/api/services", json={**SERVICE_PAYLOAD, "category": "tattoo"}, headers=admin_headers)

    for response in (too_long, negative, bad_category):
        assert response.status_code == 400
        assert response.json()["message"] == "Validation Error"


def test_admin_updates_service_partially(client, admin_headers, haircut):
    response = client.put(
        f"/api/services/{haircut.id}", json={"price": 50.0, "is_active": False}, headers=admin_headers
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["price"] == 50.0
    assert data["is_active"] is False
    assert data["name"] == "Haircut & Styling"
    assert data["duration"] == 60


def test_service_stats(client, admin_headers, make_service):
    make_service("Haircut & Styling", duration=60, price=40.0, category="hair")
    make_service("Hair Colouring", duration=120, price=80.0, category="hair")
    make_service("Manicure", duration=30, price=20.0, category="nails", is_active=False)

    response = client.get("/api/services/stats", headers=admin_headers)

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["total_services"] == 3
    assert stats["active_services"] == 2
    assert stats["inactive_services"] == 1
    assert stats["category_stats"][0] == {
        "category": "hair", "count": 2, "avg_price": 60.0, "avg_duration": 90.0,
    }
    assert stats["avg_price"] == 60.0
    assert stats["avg_duration"] == 90.0


def test_service_stats_admin_only(client, user_headers):
    assert client.get("/api/services/stats", headers=user_headers).status_code == 403


def test_deleting_service_keeps_appointments(client, admin_headers, haircut, customer, db_session):
    service_id = haircut.id
    db_session.add(Appointment(
        user_id=customer.id,
        user_name=customer.name,
        user_phone=customer.phone,
        service=haircut.name,
        service_id=service_id,
        date=date.today() + timedelta(days=3),
        time="10:00",
        duration=60,
        price=45,
    ))
    db_session.commit()
    db_session.expunge_all()

    response = client.delete(f"/api/services/{service_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Service deleted successfully"
    appointment = db_session.query(Appointment).one()
    assert appointment.service_id is None
    assert appointment.service == "Haircut & Styling"
    assert client.get(f"/api/services/{service_id}", headers=admin_headers).status_code == 404
