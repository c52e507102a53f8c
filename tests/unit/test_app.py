"""Unit tests for the HTTP surface (app.py + src/api/routes.py).

The Gemini call is mocked; image lookups use the deterministic fallback because
PEXELS_API_KEY is cleared in tests/conftest.py.
"""

import re
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app import app, create_app
from src.utils.config import config
from src.utils.errors import ParseError, UpstreamError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def mock_llm(return_value=None, side_effect=None):
    return patch("src.services.recipes.call_llm", new_callable=AsyncMock, return_value=return_value, side_effect=side_effect)


class TestStaticRoutes:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_categories(self, client):
        response = client.get("/api/categories")
        assert response.status_code == 200
        categories = response.json()["categories"]
        assert len(categories) == 10
        assert categories[0] == {"id": "quick-curries", "title": "Quick Curries", "summary": "30-minute paneer curries."}
        assert all(set(c) == {"id", "title", "summary"} for c in categories)

    def test_json_content_type(self, client):
        assert client.get("/api/health").headers["content-type"].startswith("application/json")


class TestIdeasEndpoint:
    def test_single_idea_is_normalized_and_enriched(self, client):
        llm_output = {"ideas": [{"id": "Quick Paneer", "title": "Quick Paneer", "blurb": "Fast."}]}
        with mock_llm(llm_output) as llm:
            response = client.post("/api/ideas", json={"query": "paneer dinner"})

        assert response.status_code == 200
        idea = response.json()["ideas"][0]
        assert idea["id"] == "quick-paneer"
        assert idea["imageUrl"]
        assert idea["imageAlt"] == "Quick Paneer"
        assert "categoryId" not in idea
        assert "User query: paneer dinner" in llm.await_args.args[0]

    def test_eleven_ideas_truncated_to_ten_in_order(self, client):
        llm_output = {"ideas": [{"id": f"idea-{i}", "title": f"Idea {i}", "blurb": ""} for i in range(11)]}
        with mock_llm(llm_output):
            response = client.post("/api/ideas", json={"query": "paneer"})

        ideas = response.json()["ideas"]
        assert len(ideas) == 10
        assert [idea["id"] for idea in ideas] == [f"idea-{i}" for i in range(10)]

    def test_unrelated_document_yields_empty_ideas(self, client):
        with mock_llm({"unrelated": 42}):
            response = client.post("/api/ideas", json={"query": "paneer"})

        assert response.status_code == 200
        assert response.json() == {"ideas": []}

    def test_non_json_model_text_yields_500(self, client):
        with patch("src.clients.gemini.call_gemini_text", new_callable=AsyncMock, return_value="Here are ideas!"):
            response = client.post("/api/ideas", json={"query": "paneer"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate ideas"}

    def test_upstream_error_is_not_leaked(self, client):
        with mock_llm(side_effect=UpstreamError('{"error": {"message": "API key not valid"}}', status=400)):
            response = client.post("/api/ideas", json={"query": "paneer"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate ideas"}
        assert "API key" not in response.text

    def test_category_and_ingredients_request(self, client):
        llm_output = {"ideas": [{"title": "Paneer Pakora"}]}
        with mock_llm(llm_output) as llm:
            response = client.post("/api/ideas", json={"categoryId": "snacks", "ingredients": ["paneer", "besan"]})

        idea = response.json()["ideas"][0]
        assert idea["categoryId"] == "snacks"
        prompt = llm.await_args.args[0]
        assert "Category: snacks" in prompt
        assert "Ingredients: paneer, besan" in prompt

    def test_empty_body_is_accepted(self, client):
        with mock_llm({"ideas": []}) as llm:
            response = client.post("/api/ideas")

        assert response.status_code == 200
        assert response.json() == {"ideas": []}
        assert "User query: (none)" in llm.await_args.args[0]

    def test_ideas_response_invariants(self, client):
        llm_output = {"ideas": [{"id": "--A--"}, {"title": "?!"}, "junk", {"id": "Tikka", "title": "Tikka"}]}
        with mock_llm(llm_output):
            ideas = client.post("/api/ideas", json={"query": "x"}).json()["ideas"]

        assert len(ideas) <= 10
        for idea in ideas:
            assert SLUG_PATTERN.match(idea["id"])
            assert idea["title"]
            assert idea["imageUrl"]

    def test_malformed_body_yields_400(self, client):
        with mock_llm({"ideas": []}) as llm:
            response = client.post("/api/ideas", json=["paneer"])

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}
        llm.assert_not_awaited()


class TestRecipeEndpoint:
    def test_string_servings_coerced(self, client):
        llm_output = {"recipe": {"id": "palak-paneer", "title": "Palak Paneer", "servings": "4", "ingredients": ["paneer"]}}
        with mock_llm(llm_output):
            response = client.post("/api/recipe", json={"title": "Palak Paneer", "categoryId": "quick-curries"})

        assert response.status_code == 200
        recipe = response.json()["recipe"]
        assert recipe["servings"] == 4
        assert recipe["category"] == "quick-curries"
        assert recipe["totalTimeMinutes"] == 30
        assert recipe["steps"] == []
        assert recipe["tips"] == []
        assert recipe["imageUrl"]
        assert recipe["imageAlt"] == "Palak Paneer"

    @pytest.mark.parametrize("body", [{"title": ""}, {"title": "   "}, {}, {"categoryId": "snacks"}])
    def test_missing_title_rejected_before_llm(self, client, body):
        with mock_llm({"recipe": {}}) as llm:
            response = client.post("/api/recipe", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "title is required"}
        llm.assert_not_awaited()

    def test_missing_body_rejected(self, client):
        with mock_llm({"recipe": {}}) as llm:
            response = client.post("/api/recipe")

        assert response.status_code == 400
        assert response.json() == {"error": "title is required"}
        llm.assert_not_awaited()

    def test_no_recipe_yields_null(self, client):
        with mock_llm({"something": "else"}):
            response = client.post("/api/recipe", json={"title": "Palak Paneer"})

        assert response.status_code == 200
        assert response.json() == {"recipe": None}

    def test_empty_recipe_object_is_normalized(self, client):
        with mock_llm({"recipe": {}}):
            response = client.post("/api/recipe", json={"title": "Palak Paneer"})

        assert response.status_code == 200
        recipe = response.json()["recipe"]
        assert recipe["id"] == "palak-paneer"
        assert recipe["title"] == "Palak Paneer"
        assert recipe["servings"] == 2

    @pytest.mark.parametrize("error", [UpstreamError("quota"), ParseError("bad json")])
    def test_upstream_and_parse_errors_yield_500(self, client, error):
        with mock_llm(side_effect=error):
            response = client.post("/api/recipe", json={"title": "Palak Paneer"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate recipe detail"}

    def test_detail_response_invariants(self, client):
        llm_output = {"recipe": {"servings": 0, "totalTimeMinutes": "soon", "ingredients": "paneer"}}
        with mock_llm(llm_output):
            recipe = client.post("/api/recipe", json={"title": "Paneer Tikka"}).json()["recipe"]

        assert recipe["id"] == "paneer-tikka"
        assert recipe["servings"] >= 1
        assert recipe["totalTimeMinutes"] >= 1
        for key in ("ingredients", "steps", "tips"):
            assert isinstance(recipe[key], list)
        assert recipe["imageUrl"]


class TestErrorHandling:
    def test_unhandled_error_yields_generic_500(self):
        with TestClient(app, raise_server_exceptions=False) as client:
            with patch("src.api.routes.generate_ideas", new_callable=AsyncMock, side_effect=RuntimeError("boom")):
                response = client.post("/api/ideas", json={"query": "paneer"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}

    def test_missing_google_key_exits_non_zero(self):
        with patch.object(config, "GOOGLE_API_KEY", ""):
            with pytest.raises(SystemExit) as exc:
                create_app()
        assert exc.value.code == 1
