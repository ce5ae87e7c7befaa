"""
Tests for favorites, profile, password and dashboard endpoints.
"""
from app.core.security import verify_password
from app.db.models.user import User


def test_favorites_roundtrip(client, user, employee, auth_headers):
    headers = auth_headers(user)

    response = client.post("/users/favorites", json={"ai_employee_id": employee.id}, headers=headers)
    assert response.status_code == 201
    assert response.json()["ai_employee"]["name"] == employee.name

    response = client.post("/users/favorites", json={"ai_employee_id": employee.id}, headers=headers)
    assert response.status_code == 409

    favorites = client.get("/users/favorites", headers=headers).json()["favorites"]
    assert [f["ai_employee_id"] for f in favorites] == [employee.id]

    response = client.delete(f"/users/favorites/{employee.id}", headers=headers)
    assert response.status_code == 200
    assert client.get("/users/favorites", headers=headers).json()["favorites"] == []

    response = client.delete(f"/users/favorites/{employee.id}", headers=headers)
    assert response.status_code == 404


def test_favorite_unknown_employee(client, user, auth_headers):
    response = client.post("/users/favorites", json={"ai_employee_id": 4040}, headers=auth_headers(user))
    assert response.status_code == 404


def test_update_profile(client, user, auth_headers):
    response = client.put(
        "/users/profile",
        json={"username": "alice2", "phone": "+86 138 0000 0000"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    assert response.json()["username"] == "alice2"
    assert response.json()["phone"] == "+86 138 0000 0000"


def test_update_profile_requires_a_field(client, user, auth_headers):
    response = client.put("/users/profile", json={}, headers=auth_headers(user))
    assert response.status_code == 400


def test_update_profile_taken_username(client, user, other_user, auth_headers):
    response = client.put("/users/profile", json={"username": other_user.username}, headers=auth_headers(user))
    assert response.status_code == 409


def test_change_password(client, db, user, auth_headers):
    headers = auth_headers(user)

    response = client.put(
        "/users/password",
        json={"current_password": "nope-nope", "new_password": "brandnew1"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_password"

    response = client.put(
        "/users/password",
        json={"current_password": "testpass123", "new_password": "brandnew1"},
        headers=headers,
    )
    assert response.status_code == 200
    db.expire_all()
    assert verify_password("brandnew1", db.get(User, user.id).password_hash)


def test_dashboard_lists_pending_reviews(client, user, make_employee, auth_headers):
    headers = auth_headers(user)
    reviewed = make_employee(name="Reviewed")
    pending = make_employee(name="Pending")
    ongoing = make_employee(name="Ongoing")

    ids = {}
    for emp in (reviewed, pending, ongoing):
        record = client.post(
            "/hiring",
            json={
                "ai_employee_id": emp.id,
                "hire_type": "hourly",
                "rate": 40,
                "start_date": "2026-02-01T09:00:00Z",
            },
            headers=headers,
        ).json()
        ids[emp.name] = record["id"]
    for name in ("Reviewed", "Pending"):
        client.patch(f"/hiring/{ids[name]}/status", json={"status": "completed"}, headers=headers)
    client.post(
        "/reviews",
        json={"ai_employee_id": reviewed.id, "hiring_record_id": ids["Reviewed"], "rating": 5},
        headers=headers,
    )
    client.post("/users/favorites", json={"ai_employee_id": ongoing.id}, headers=headers)

    body = client.get("/users/dashboard", headers=headers).json()

    assert len(body["recent_hires"]) == 3
    assert [h["id"] for h in body["pending_reviews"]] == [ids["Pending"]]
    assert [e["name"] for e in body["favorite_employees"]] == ["Ongoing"]
