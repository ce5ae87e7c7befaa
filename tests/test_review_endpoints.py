"""
Tests for the review endpoints.
"""
import pytest

from app.db.models.ai_employee import AIEmployee


@pytest.fixture
def completed_record(client, user, employee, auth_headers):
    headers = auth_headers(user)
    record = client.post(
        "/hiring",
        json={
            "ai_employee_id": employee.id,
            "hire_type": "monthly",
            "rate": 5400,
            "start_date": "2026-02-01T09:00:00Z",
        },
        headers=headers,
    ).json()
    client.patch(f"/hiring/{record['id']}/status", json={"status": "completed"}, headers=headers)
    return record


def post_review(client, headers, employee_id, record_id, rating=4, comment=None):
    return client.post(
        "/reviews",
        json={
            "ai_employee_id": employee_id,
            "hiring_record_id": record_id,
            "rating": rating,
            "comment": comment,
        },
        headers=headers,
    )


def test_create_review(client, user, employee, completed_record, auth_headers):
    response = post_review(client, auth_headers(user), employee.id, completed_record["id"], 4, "Reliable")

    assert response.status_code == 201
    body = response.json()
    assert body["rating"] == 4
    assert body["comment"] == "Reliable"
    assert body["user"]["username"] == "alice"
    assert body["ai_employee"]["id"] == employee.id


@pytest.mark.parametrize("rating", [0, 6])
def test_rating_out_of_range(client, user, employee, completed_record, auth_headers, rating):
    response = post_review(client, auth_headers(user), employee.id, completed_record["id"], rating)

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "rating"


def test_review_of_active_hiring_rejected(client, db, user, employee, auth_headers):
    headers = auth_headers(user)
    record = client.post(
        "/hiring",
        json={
            "ai_employee_id": employee.id,
            "hire_type": "hourly",
            "rate": 45,
            "start_date": "2026-02-01T09:00:00Z",
        },
        headers=headers,
    ).json()

    response = post_review(client, headers, employee.id, record["id"], 5)

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_reference"
    db.expire_all()
    assert db.get(AIEmployee, employee.id).total_reviews == 0


def test_review_of_someone_elses_hiring_rejected(client, other_user, employee, completed_record, auth_headers):
    response = post_review(client, auth_headers(other_user), employee.id, completed_record["id"], 1)

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_reference"


def test_update_and_delete_review(client, db, user, employee, completed_record, auth_headers):
    headers = auth_headers(user)
    review = post_review(client, headers, employee.id, completed_record["id"], 5).json()

    response = client.put(f"/reviews/{review['id']}", json={"rating": 3, "comment": "Slower lately"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["rating"] == 3
    db.expire_all()
    assert db.get(AIEmployee, employee.id).rating == 3.0

    response = client.delete(f"/reviews/{review['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Review deleted"}
    db.expire_all()
    row = db.get(AIEmployee, employee.id)
    assert (row.rating, row.total_reviews) == (0.0, 0)


def test_cannot_edit_someone_elses_review(client, user, other_user, employee, completed_record, auth_headers):
    review = post_review(client, auth_headers(user), employee.id, completed_record["id"], 5).json()

    response = client.put(f"/reviews/{review['id']}", json={"rating": 1}, headers=auth_headers(other_user))
    assert response.status_code == 404

    response = client.delete(f"/reviews/{review['id']}", headers=auth_headers(other_user))
    assert response.status_code == 404


def test_employee_reviews_are_public(client, user, employee, completed_record, auth_headers):
    post_review(client, auth_headers(user), employee.id, completed_record["id"], 5)

    response = client.get(f"/reviews/employee/{employee.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["total"] == 1
    assert body["statistics"]["average_rating"] == 5.0
    assert body["statistics"]["rating_distribution"]["5"] == 1


def test_employee_reviews_unknown_employee(client):
    response = client.get("/reviews/employee/999")
    assert response.status_code == 404


def test_my_reviews(client, user, other_user, employee, completed_record, auth_headers):
    post_review(client, auth_headers(user), employee.id, completed_record["id"], 4)

    mine = client.get("/reviews/my-reviews", headers=auth_headers(user)).json()
    theirs = client.get("/reviews/my-reviews", headers=auth_headers(other_user)).json()

    assert mine["pagination"]["total"] == 1
    assert mine["reviews"][0]["rating"] == 4
    assert theirs["reviews"] == []


def test_rating_only_put_keeps_comment(client, user, employee, completed_record, auth_headers):
    headers = auth_headers(user)
    review = post_review(client, headers, employee.id, completed_record["id"], 5, "great work").json()

    response = client.put(f"/reviews/{review['id']}", json={"rating": 2}, headers=headers)

    assert response.status_code == 200
    assert response.json()["rating"] == 2
    assert response.json()["comment"] == "great work"
