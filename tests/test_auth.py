from uuid import uuid4
from fastapi.testclient import TestClient


def unique_email(prefix="cook"):
    return f"{prefix}_{uuid4().hex[:8]}@example.com"


def test_register_and_login(client: TestClient):
    email = unique_email()
    response = client.post(
        "/auth/users/",
        json={"email": email, "password": "secret123", "first_name": "Ada"},
    )
    assert response.status_code == 201, response.text
    user = response.json()
    assert user["email"] == email
    assert user["first_name"] == "Ada"
    assert user["is_active"] is True
    assert "hashed_password" not in user

    response = client.post("/auth/token", data={"username": email, "password": "secret123"})
    assert response.status_code == 200
    token = response.json()
    assert token["token_type"] == "bearer"
    assert token["access_token"]


def test_register_duplicate_email(client: TestClient):
    email = unique_email()
    client.post("/auth/users/", json={"email": email, "password": "secret123"})

    response = client.post("/auth/users/", json={"email": email.upper(), "password": "other123"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_rejects_short_password(client: TestClient):
    response = client.post("/auth/users/", json={"email": unique_email(), "password": "123"})
    assert response.status_code == 422


def test_login_wrong_password(client: TestClient):
    email = unique_email()
    client.post("/auth/users/", json={"email": email, "password": "secret123"})

    response = client.post("/auth/token", data={"username": email, "password": "wrong-one"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


def test_login_unknown_user(client: TestClient):
    response = client.post("/auth/token", data={"username": unique_email(), "password": "secret123"})
    assert response.status_code == 401


def test_login_is_case_insensitive(client: TestClient):
    email = unique_email("MixedCase")
    client.post("/auth/users/", json={"email": email, "password": "secret123"})

    response = client.post("/auth/token", data={"username": email.upper(), "password": "secret123"})
    assert response.status_code == 200


def test_read_me(client: TestClient):
    email = unique_email()
    client.post("/auth/users/", json={"email": email, "password": "secret123"})
    token = client.post(
        "/auth/token", data={"username": email, "password": "secret123"}
    ).json()["access_token"]

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == email.lower()


def test_protected_routes_need_a_token(client: TestClient):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/recipes/").status_code == 401

    response = client.get("/recipes/", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
