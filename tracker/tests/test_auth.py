from fastapi import status

from tracker.core.security import hash_password
from tracker.models import User, UserRole


def test_login_teacher(client, seed_data):
    response = client.post(
        "/auth/login",
        json={"email": seed_data["teacher"].email, "password": "teacher123"},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == seed_data["teacher"].id
    assert data["user"]["role"] == "teacher"


def test_login_wrong_password(client, seed_data):
    response = client.post(
        "/auth/login",
        json={"email": seed_data["teacher"].email, "password": "nope"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Invalid credentials"}


def test_login_token_resolves_identity(client, seed_data):
    login = client.post(
        "/auth/login",
        json={"email": seed_data["other"].email, "password": "teacher123"},
    )
    token = login.json()["access_token"]

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == seed_data["other"].email


def test_missing_token_is_unauthorized(client, seed_data):
    response = client.delete(f"/subjects/{seed_data['subject'].id}")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthorized"}


def test_garbage_token_is_unauthorized(client, seed_data):
    response = client.delete(
        f"/subjects/{seed_data['subject'].id}",
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_ignores_email_case(client, db_session, seed_data):
    user = User(
        full_name="Lea Tan",
        email="Lea.Tan@Example.com",
        password_hash=hash_password("teacher123"),
        role=UserRole.teacher,
    )
    db_session.add(user)
    db_session.commit()

    response = client.post("/auth/login", json={"email": "lea.tan@example.com", "password": "teacher123"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == user.id
