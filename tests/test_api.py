"""Tests for the ingredient and shopping list API routes."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from familyplate.ingest.recipe_details import RecipeDetailsError
from familyplate.main import app
from familyplate.routers.shopping_lists import get_ingredient_source, get_store
from familyplate.storage import CheckedStateError, CheckedStateStore, MemoryCheckedStateStore

PANCAKE_MEALS = [
    {"name": "Pancakes", "meal_type": "breakfast", "ingredients": ["2 cups flour", "1 cup flour"]},
    {"name": "Omelette", "meal_type": "breakfast", "ingredients": ["3 eggs"]},
]


@pytest.fixture
def store():
    return MemoryCheckedStateStore()


@pytest.fixture
def source():
    """Recipe source that knows one recipe and fails for 'bad'."""

    async def get_ingredients(recipe_id: str) -> list[str]:
        if recipe_id == "bad":
            raise RecipeDetailsError("server error", status_code=500, recipe_id=recipe_id)
        return ["2 cups flour", "2 eggs"]

    mock = AsyncMock()
    mock.get_ingredients.side_effect = get_ingredients
    return mock


@pytest.fixture
def client(store, source):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_ingredient_source] = lambda: source
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(source):
    """Client whose checked-state store always fails."""
    broken = MagicMock(spec=CheckedStateStore)
    broken.get.side_effect = CheckedStateError("unavailable")
    broken.set.side_effect = CheckedStateError("unavailable")
    broken.clear.side_effect = CheckedStateError("unavailable")
    app.dependency_overrides[get_store] = lambda: broken
    app.dependency_overrides[get_ingredient_source] = lambda: source
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestParseEndpoint:
    """Tests for POST /api/v1/ingredients/parse."""

    def test_parse_lines(self, client):
        response = client.post(
            "/api/v1/ingredients/parse",
            json={"lines": ["2 cups flour", "", "Salt to taste", "a pinch of salt"]},
        )

        assert response.status_code == 200
        items = response.json()["items"]
        assert len(items) == 3
        assert items[0]["quantity"] == 2.0
        assert items[0]["unit"] == "cup"
        assert items[0]["normalized_name"] == "flour"
        assert items[1]["unit"] == "to taste"
        assert items[2]["unit"] == "pinch"
        assert items[2]["name"] == "salt"

    def test_lines_required(self, client):
        response = client.post("/api/v1/ingredients/parse", json={})

        assert response.status_code == 422

    def test_overlong_line_rejected(self, client):
        response = client.post(
            "/api/v1/ingredients/parse", json={"lines": ["salt" + "," * 5000 + "x"]}
        )

        assert response.status_code == 422


class TestShoppingListEndpoint:
    """Tests for POST /api/v1/shopping-lists."""

    def test_build_list(self, client):
        response = client.post("/api/v1/shopping-lists", json={"meals": PANCAKE_MEALS})

        assert response.status_code == 200
        data = response.json()
        assert data["item_count"] == 2
        assert data["checked_count"] == 0
        assert data["failed_meals"] == []
        assert [g["category"] for g in data["groups"]] == ["Dairy & Eggs", "Pantry & Spices"]
        flour = data["groups"][1]["items"][0]
        assert flour["normalized_name"] == "flour"
        assert flour["total_quantity"] == 3.0
        assert flour["quantity"] == "3 cups"
        assert flour["used_in_meals"] == ["Pancakes"]

    def test_checked_state_from_store(self, client, store):
        store.set("family-1", {"flour": True})

        response = client.post(
            "/api/v1/shopping-lists",
            json={"meals": PANCAKE_MEALS, "storage_key": "family-1"},
        )

        data = response.json()
        assert data["checked_count"] == 1
        assert data["groups"][1]["items"][0]["checked"] is True

    def test_meal_type_filter(self, client):
        meals = [*PANCAKE_MEALS, {"name": "Stew", "meal_type": "dinner", "ingredients": ["1 lb beef"]}]

        response = client.post(
            "/api/v1/shopping-lists",
            json={"meals": meals, "meal_types": ["dinner"]},
        )

        data = response.json()
        assert data["item_count"] == 1
        assert data["groups"][0]["category"] == "Meat & Seafood"

    def test_missing_ingredients_loaded(self, client, source):
        """Test that meals planned without ingredients are fetched."""
        meals = [
            *PANCAKE_MEALS,
            {"name": "Crepes", "recipe_id": "r1"},
            {"name": "Quiche", "recipe_id": "bad"},
        ]

        response = client.post("/api/v1/shopping-lists", json={"meals": meals})

        assert response.status_code == 200
        data = response.json()
        assert data["failed_meals"] == [
            {"name": "Quiche", "recipe_id": "bad", "error": "Failed to load"}
        ]
        items = {i["normalized_name"]: i for g in data["groups"] for i in g["items"]}
        assert items["flour"]["total_quantity"] == 5.0
        assert items["egg"]["total_quantity"] == 5.0
        assert items["egg"]["used_in_meals"] == ["Omelette", "Crepes"]
        assert source.get_ingredients.await_count == 2

    def test_no_fetch_when_all_meals_have_ingredients(self, client, source):
        client.post("/api/v1/shopping-lists", json={"meals": PANCAKE_MEALS})

        source.get_ingredients.assert_not_awaited()

    def test_empty_meals(self, client):
        response = client.post("/api/v1/shopping-lists", json={"meals": []})

        assert response.status_code == 200
        assert response.json()["groups"] == []

    def test_invalid_meal_type(self, client):
        meals = [{"name": "Brunch", "meal_type": "brunch", "ingredients": ["1 egg"]}]

        response = client.post("/api/v1/shopping-lists", json={"meals": meals})

        assert response.status_code == 422

    def test_overlong_ingredient_line_rejected(self, client):
        meals = [{"name": "Soup", "ingredients": ["x" * 1001]}]

        response = client.post("/api/v1/shopping-lists", json={"meals": meals})

        assert response.status_code == 422

    def test_store_unavailable(self, broken_client):
        response = broken_client.post(
            "/api/v1/shopping-lists",
            json={"meals": PANCAKE_MEALS, "storage_key": "family-1"},
        )

        assert response.status_code == 503


class TestTextExport:
    """Tests for POST /api/v1/shopping-lists/text."""

    def test_plain_text(self, client):
        response = client.post("/api/v1/shopping-lists/text", json={"meals": PANCAKE_MEALS})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "🧀 Dairy & Eggs\n- eggs (3)\n\n🧂 Pantry & Spices\n- flour (3 cups)"


class TestCheckedStateEndpoints:
    """Tests for the checked-state routes."""

    def test_get_empty(self, client):
        response = client.get("/api/v1/shopping-lists/checked/family-1")

        assert response.status_code == 200
        assert response.json() == {"storage_key": "family-1", "checked": {}}

    def test_toggle(self, client, store):
        url = "/api/v1/shopping-lists/checked/family-1/toggle"

        first = client.post(url, json={"name": "flour"})
        assert first.json()["checked"] == {"flour": True}
        assert store.get("family-1") == {"flour": True}

        second = client.post(url, json={"name": "flour"})
        assert second.json()["checked"] == {}
        assert store.get("family-1") == {}

    def test_set_explicitly(self, client, store):
        url = "/api/v1/shopping-lists/checked/family-1/toggle"

        client.post(url, json={"name": "egg", "checked": True})
        response = client.post(url, json={"name": "egg", "checked": True})

        assert response.json()["checked"] == {"egg": True}

    def test_toggle_requires_name(self, client):
        response = client.post("/api/v1/shopping-lists/checked/family-1/toggle", json={"name": ""})

        assert response.status_code == 422

    def test_reset(self, client, store):
        store.set("family-1", {"flour": True})

        response = client.delete("/api/v1/shopping-lists/checked/family-1")

        assert response.status_code == 204
        assert store.get("family-1") == {}

    def test_store_unavailable(self, broken_client):
        assert broken_client.get("/api/v1/shopping-lists/checked/k").status_code == 503
        assert (
            broken_client.post("/api/v1/shopping-lists/checked/k/toggle", json={"name": "a"}).status_code
            == 503
        )
        assert broken_client.delete("/api/v1/shopping-lists/checked/k").status_code == 503
