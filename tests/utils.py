from uuid import uuid4
from fastapi.testclient import TestClient


def get_auth_headers(client: TestClient, email=None, password="password"):
    """Register (if needed) and log in through the API, returning bearer headers."""
    email = email or f"user_{uuid4().hex[:8]}@example.com"
    client.post("/auth/users/", json={"email": email, "password": password})
    response = client.post(
        "/auth/token",
        data={"username": email, "password": password},
    )
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def make_recipe_data(name="Pancakes", **overrides):
    data = {
        "name": name,
        "ingredients": [
            {"name": "Flour", "amount": "2", "unit": "cups"},
            {"name": "Milk", "amount": "1 1/2", "unit": "cups"},
            {"name": "Eggs", "amount": "2", "unit": "pieces"},
        ],
        "instructions": "Mix the batter.\nCook on a hot pan.",
        "prep_time_minutes": 15,
        "category": "Main Course",
        "servings": 4,
    }
    data.update(overrides)
    return data


def create_recipe(client: TestClient, headers, name="Pancakes", **overrides):
    response = client.post("/recipes/", json=make_recipe_data(name, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
