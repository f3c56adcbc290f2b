"""
End-to-end tests for the Recipe Studio API.

This test module verifies that:
1. The form endpoints render create/edit markup and the next ingredient row
2. /recipes/validate returns the normalized recipe or a 422 with the error kind
3. /pagination returns the controls that apply, including the out-of-range policy
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from api.main import app
from recipebook import form
from recipebook.form import MAX_INGREDIENT_ROWS


@pytest.fixture
def client(tmp_path):
    """Create a test client with the event log redirected to a temp file."""
    with patch("recipebook.events.EVENT_LOG_FILE", tmp_path / "events.log"):
        yield TestClient(app)


RECIPE_JSON = {
    "id": "recipe-7",
    "title": "Guacamole",
    "sourceUrl": "https://example.com/guac",
    "image": "https://example.com/guac.jpg",
    "publisher": "Home Kitchen",
    "cookingTime": 10,
    "servings": 4,
    "ingredients": [
        {"quantity": 3, "unit": "", "description": "avocados"},
        {"quantity": 1, "unit": "", "description": "lime"},
        {"quantity": None, "unit": "", "description": "salt"},
        {"quantity": 0.25, "unit": "cup", "description": "red onion"},
        {"quantity": 1, "unit": "", "description": "tomato"},
    ],
}

VALID_FIELDS = {
    "title": "Pancakes",
    "sourceUrl": "https://example.com/pancakes",
    "image": "https://example.com/pancakes.jpg",
    "publisher": "Home Kitchen",
    "cookingTime": "20",
    "servings": "4",
    "ingredient-quantity-1": "2",
    "ingredient-unit-1": "cups",
    "ingredient-description-1": "flour",
    "ingredient-quantity-2": "",
    "ingredient-unit-2": "",
    "ingredient-description-2": "",
    "ingredient-quantity-3": "",
    "ingredient-unit-3": "",
    "ingredient-description-3": "salt",
}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_openapi_tag_descriptions(self, client):
        """Tag descriptions are published in the OpenAPI schema."""
        tags = {t["name"]: t.get("description") for t in client.get("/openapi.json").json()["tags"]}
        assert set(tags) == {"recipes", "pagination", "health", "analytics"}
        assert tags["analytics"] == "Read back logged interaction events."


class TestFormEndpoints:
    """POST /recipes/form and /recipes/form/rows."""

    def test_create_form(self, client):
        response = client.post("/recipes/form", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["is_editing"] is False
        assert data["submit_label"] == "UPLOAD RECIPE"
        assert data["ingredient_row_count"] == 3
        assert data["markup"].count('class="upload__ingredient-row"') == 3

    def test_edit_form(self, client):
        response = client.post("/recipes/form", json={"recipe": RECIPE_JSON})
        assert response.status_code == 200
        data = response.json()
        assert data["is_editing"] is True
        assert data["submit_label"] == "UPDATE RECIPE"
        assert data["ingredient_row_count"] == 5
        assert data["markup"].count('class="upload__ingredient-row"') == 5
        assert 'value="Guacamole"' in data["markup"]

    def test_next_row(self, client):
        response = client.post("/recipes/form/rows", json={"ingredient_row_count": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["ingredient_row_count"] == 4
        assert "Ingredient 4</label>" in data["markup"]
        assert data["markup"].count('class="upload__ingredient-row"') == 1

    def test_next_row_rejects_negative_count(self, client):
        response = client.post("/recipes/form/rows", json={"ingredient_row_count": -1})
        assert response.status_code == 422


class TestValidateEndpoint:
    """POST /recipes/validate."""

    def test_valid_submission(self, client):
        response = client.post(
            "/recipes/validate",
            json={"fields": VALID_FIELDS, "ingredient_row_count": 3},
            headers={"X-Session-ID": "test-session"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_editing"] is False
        assert data["source_id"] is None
        assert data["message"] == "Recipe was successfully uploaded!"

        recipe = data["recipe"]
        assert recipe["title"] == "Pancakes"
        assert recipe["sourceUrl"] == "https://example.com/pancakes"
        assert recipe["cookingTime"] == 20
        assert recipe["servings"] == 4
        assert recipe["ingredients"] == [
            {"quantity": 2, "unit": "cups", "description": "flour"},
            {"quantity": None, "unit": "", "description": "salt"},
        ]

    def test_edit_submission_returns_source_id(self, client):
        response = client.post(
            "/recipes/validate",
            json={"fields": VALID_FIELDS, "is_editing": True, "source_id": "recipe-7"},
        )
        assert response.status_code == 200
        assert response.json()["is_editing"] is True
        assert response.json()["source_id"] == "recipe-7"

    def test_source_id_dropped_in_create_mode(self, client):
        response = client.post(
            "/recipes/validate",
            json={"fields": VALID_FIELDS, "is_editing": False, "source_id": "recipe-7"},
        )
        assert response.json()["source_id"] is None

    def test_negative_values(self, client):
        fields = dict(VALID_FIELDS, cookingTime="-5")
        response = client.post("/recipes/validate", json={"fields": fields})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "negative_value"
        assert detail["message"] == "Cooking time and servings cannot be negative numbers."

    def test_invalid_ingredient(self, client):
        fields = dict(VALID_FIELDS, **{"ingredient-quantity-1": "-1"})
        response = client.post("/recipes/validate", json={"fields": fields})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "invalid_ingredient"
        assert "descriptions are provided for all ingredients" in detail["message"]

    def test_non_numeric_servings(self, client):
        fields = dict(VALID_FIELDS, servings="lots")
        response = client.post("/recipes/validate", json={"fields": fields})
        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "invalid_recipe"

    def test_huge_ingredient_index_stays_cheap(self, client):
        """A single far-out row index is read on its own, not as millions of blank rows."""
        fields = {"cookingTime": "1", "servings": "1", "ingredient-unit-3000000": ""}
        with patch("recipebook.form._read_row", wraps=form._read_row) as read_row:
            response = client.post("/recipes/validate", json={"fields": fields})
        assert response.status_code == 200
        assert response.json()["recipe"]["ingredients"] == []
        assert read_row.call_count == 1

    def test_row_count_is_bounded(self, client):
        response = client.post(
            "/recipes/validate",
            json={"fields": VALID_FIELDS, "ingredient_row_count": MAX_INGREDIENT_ROWS + 1},
        )
        assert response.status_code == 422

        response = client.post("/recipes/form/rows", json={"ingredient_row_count": MAX_INGREDIENT_ROWS})
        assert response.status_code == 422


class TestPaginationEndpoint:
    """GET /pagination."""

    def test_single_page(self, client):
        response = client.get("/pagination", params={"result_count": 8, "page_size": 10, "page": 1})
        assert response.status_code == 200
        data = response.json()
        assert data["page_count"] == 1
        assert data["indicator"] is None
        assert data["controls"] == []
        assert data["markup"] == ""

    def test_middle_page(self, client):
        response = client.get("/pagination", params={"result_count": 45, "page_size": 10, "page": 3})
        data = response.json()
        assert data["page_count"] == 5
        assert data["indicator"] == "3/5"
        assert [(c["kind"], c["target_page"], c["label"]) for c in data["controls"]] == [
            ("prev", 2, "Page 2"),
            ("next", 4, "Page 4"),
        ]

    def test_default_page_size(self, client):
        with patch.dict("os.environ", {"RESULTS_PER_PAGE": "10"}):
            response = client.get("/pagination", params={"result_count": 25})
        data = response.json()
        assert data["page_count"] == 3
        assert data["current_page"] == 1

    def test_stale_page_is_clamped(self, client):
        response = client.get("/pagination", params={"result_count": 25, "page_size": 10, "page": 7})
        data = response.json()
        assert data["current_page"] == 3
        assert data["indicator"] == "3/3"
        assert [c["kind"] for c in data["controls"]] == ["prev"]

    def test_invalid_query(self, client):
        assert client.get("/pagination", params={"result_count": -1}).status_code == 422
        assert client.get("/pagination", params={"result_count": 5, "page": 0}).status_code == 422
        assert client.get("/pagination", params={"result_count": 5, "page_size": 0}).status_code == 422
