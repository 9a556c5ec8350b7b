import pytest
from fastapi.testclient import TestClient

from recipe_collection.filters import parse_filters
from tests.utils import create_recipe, get_auth_headers


def test_parse_filters():
    params = {
        "name[like]": "soup",
        "rating[gte]": "4",
        "category[eq]": "",
        "skip": "10",
        "sort": "-name",
    }
    filters = parse_filters(params)
    assert [(f.field, f.operator, f.value) for f in filters] == [
        ("name", "like", "soup"),
        ("rating", "gte", "4"),
    ]


@pytest.fixture(scope="module")
def cookbook(client: TestClient):
    """A user with a small, varied collection."""
    headers = get_auth_headers(client)
    recipes = {}
    recipes["soup"] = create_recipe(
        client, headers, "Tomato Soup",
        category="Appetizer", prep_time_minutes=30,
        ingredients=[{"name": "Tomatoes", "amount": "6", "unit": "pieces"},
                     {"name": "Basil", "amount": "1", "unit": "handful"}],
    )
    recipes["cake"] = create_recipe(
        client, headers, "Chocolate Cake",
        category="Dessert", prep_time_minutes=60,
        ingredients=[{"name": "Dark chocolate", "amount": "200", "unit": "g"},
                     {"name": "Butter", "amount": "1/2", "unit": "cups"}],
    )
    recipes["curry"] = create_recipe(
        client, headers, "Chicken Curry",
        category="Main Course", prep_time_minutes=45,
        ingredients=[{"name": "Chicken thighs", "amount": "1", "unit": "lb"},
                     {"name": "Coconut milk", "amount": "1", "unit": "can"}],
    )
    recipes["cookies"] = create_recipe(
        client, headers, "Chocolate Chip Cookies",
        category="Dessert", prep_time_minutes=20,
        ingredients=[{"name": "Chocolate chips", "amount": "2", "unit": "cups"},
                     {"name": "Butter", "amount": "1", "unit": "cups"}],
    )
    client.post(f"/recipes/{recipes['cake']['id']}/favorite", headers=headers)
    client.put(f"/recipes/{recipes['cake']['id']}/rating", json={"rating": 5}, headers=headers)
    client.put(f"/recipes/{recipes['curry']['id']}/rating", json={"rating": 3}, headers=headers)
    client.put(f"/recipes/{recipes['cookies']['id']}/rating", json={"rating": 4}, headers=headers)
    return headers


def names(response):
    assert response.status_code == 200, response.text
    return [r["name"] for r in response.json()]


def test_filter_by_name(client: TestClient, cookbook):
    response = client.get("/recipes/?name[like]=CHOCOLATE", headers=cookbook)
    assert names(response) == ["Chocolate Chip Cookies", "Chocolate Cake"]
    assert response.headers["X-Total-Count"] == "2"
    assert response.headers["X-Collection-Count"] == "4"


def test_filter_by_category(client: TestClient, cookbook):
    response = client.get("/recipes/?category[eq]=Dessert", headers=cookbook)
    assert sorted(names(response)) == ["Chocolate Cake", "Chocolate Chip Cookies"]

    response = client.get("/recipes/?category[in]=Appetizer,Main Course", headers=cookbook)
    assert sorted(names(response)) == ["Chicken Curry", "Tomato Soup"]


def test_filter_by_ingredient(client: TestClient, cookbook):
    response = client.get("/recipes/?ingredients[like]=butter", headers=cookbook)
    assert sorted(names(response)) == ["Chocolate Cake", "Chocolate Chip Cookies"]

    response = client.get("/recipes/?ingredients[all]=butter,chips", headers=cookbook)
    assert names(response) == ["Chocolate Chip Cookies"]


def test_filter_by_favorite_and_rating(client: TestClient, cookbook):
    response = client.get("/recipes/?is_favorite[eq]=true", headers=cookbook)
    assert names(response) == ["Chocolate Cake"]

    response = client.get("/recipes/?rating[gte]=4", headers=cookbook)
    assert sorted(names(response)) == ["Chocolate Cake", "Chocolate Chip Cookies"]


def test_combined_filters(client: TestClient, cookbook):
    response = client.get(
        "/recipes/?category[eq]=Dessert&prep_time_minutes[lte]=30", headers=cookbook
    )
    assert names(response) == ["Chocolate Chip Cookies"]
    assert response.headers["X-Total-Count"] == "1"


def test_empty_filter_is_ignored(client: TestClient, cookbook):
    response = client.get("/recipes/?name[like]=&category[eq]=", headers=cookbook)
    assert len(names(response)) == 4


def test_unknown_filter_field_is_ignored(client: TestClient, cookbook):
    response = client.get("/recipes/?owner_id[eq]=whatever", headers=cookbook)
    assert len(names(response)) == 4


@pytest.mark.parametrize("query", [
    "rating[gte]=lots",
    "category[eq]=Brunch",
    "is_favorite[eq]=maybe",
])
def test_bad_filter_value(client: TestClient, cookbook, query):
    response = client.get(f"/recipes/?{query}", headers=cookbook)
    assert response.status_code == 400


def test_sort_by_name(client: TestClient, cookbook):
    response = client.get("/recipes/?sort=name", headers=cookbook)
    assert names(response) == [
        "Chicken Curry", "Chocolate Cake", "Chocolate Chip Cookies", "Tomato Soup",
    ]


def test_sort_by_rating_puts_unrated_last(client: TestClient, cookbook):
    response = client.get("/recipes/?sort=-rating", headers=cookbook)
    assert names(response) == [
        "Chocolate Cake", "Chocolate Chip Cookies", "Chicken Curry", "Tomato Soup",
    ]

    response = client.get("/recipes/?sort=rating", headers=cookbook)
    assert names(response)[-1] == "Tomato Soup"


def test_default_sort_is_newest_first(client: TestClient, cookbook):
    response = client.get("/recipes/", headers=cookbook)
    assert names(response) == [
        "Chocolate Chip Cookies", "Chicken Curry", "Chocolate Cake", "Tomato Soup",
    ]


@pytest.mark.parametrize("query", ["name[like]=%25", "name[like]=_", "ingredients[like]=%25"])
def test_like_matches_wildcards_literally(client: TestClient, cookbook, query):
    response = client.get(f"/recipes/?{query}", headers=cookbook)
    assert names(response) == []
    assert response.headers["X-Total-Count"] == "0"
