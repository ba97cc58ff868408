"""
Recipe Server: HTTP API Tests
================================

What:  End-to-end tests through FastAPI, the middleware chain and the dispatcher.
How:   HTTPX AsyncClient over ASGITransport against create_app(store=spy_store).

What we test:
    ✅ The full create → get → update → delete lifecycle over HTTP
    ✅ Status codes for bad bodies, unknown ids and malformed ids
    ✅ X-Request-ID propagation into headers and error payloads
    ✅ Home page and health check
"""

import asyncio

import pytest


class TestRecipeLifecycle:
    """The concrete request/response cases of the API."""

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/recipes")
        assert response.status_code == 200
        assert response.json() == {}

    @pytest.mark.asyncio
    async def test_create_get_update_delete(self, test_client, spy_store):
        created = await test_client.post(
            "/recipes",
            json={"name": "Tomato Soup", "ingredients": [{"name": "tomato"}]},
        )
        assert created.status_code == 201
        assert created.json()["id"] == "tomato-soup"
        assert spy_store.backing.count() == 1

        fetched = await test_client.get("/recipes/tomato-soup")
        assert fetched.status_code == 200
        assert fetched.json() == {"name": "Tomato Soup", "ingredients": [{"name": "tomato"}]}

        updated = await test_client.put(
            "/recipes/tomato-soup",
            json={"name": "Tomato Soup", "ingredients": [{"name": "tomato"}, {"name": "cream"}]},
        )
        assert updated.status_code == 200
        refetched = await test_client.get("/recipes/tomato-soup")
        assert refetched.json()["ingredients"] == [{"name": "tomato"}, {"name": "cream"}]

        deleted = await test_client.delete("/recipes/tomato-soup")
        assert deleted.status_code == 200
        assert deleted.json() == {"status": "success"}

        gone = await test_client.get("/recipes/tomato-soup")
        assert gone.status_code == 404
        assert gone.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_trailing_slash_lists(self, test_client):
        await test_client.post("/recipes/", json={"name": "Bread"})
        response = await test_client.get("/recipes/")
        assert response.status_code == 200
        assert list(response.json()) == ["bread"]

    @pytest.mark.asyncio
    async def test_get_unknown(self, test_client):
        response = await test_client.get("/recipes/does-not-exist")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_concurrent_creates(self, test_client):
        names = [f"Soup {i}" for i in range(25)]
        responses = await asyncio.gather(
            *(test_client.post("/recipes", json={"name": n}) for n in names)
        )
        assert all(r.status_code == 201 for r in responses)
        listed = await test_client.get("/recipes")
        assert len(listed.json()) == 25


class TestRejectedRequests:
    """Requests that must fail before the store is called."""

    @pytest.mark.asyncio
    async def test_invalid_json_is_400(self, test_client, spy_store):
        response = await test_client.post(
            "/recipes",
            content=b'{"name": "Tomato Soup", "ingredients": [',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert spy_store.calls == []

    @pytest.mark.asyncio
    async def test_malformed_id_never_reaches_store(self, test_client, spy_store):
        response = await test_client.get("/recipes/Invalid_ID!")
        assert response.status_code == 404
        assert response.json()["error"] == "route_not_found"
        assert spy_store.calls == []

    @pytest.mark.asyncio
    async def test_patch_is_route_not_found(self, test_client, spy_store):
        response = await test_client.patch("/recipes/soup", json={"name": "Soup"})
        assert response.status_code == 404
        assert spy_store.calls == []


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/recipes")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_echoed_in_error(self, test_client):
        response = await test_client.get(
            "/recipes/missing", headers={"X-Request-ID": "trace-42"}
        )
        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"


class TestHomeAndHealth:

    @pytest.mark.asyncio
    async def test_home_page(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.text == "This is my home page"

    @pytest.mark.asyncio
    async def test_health_counts_recipes(self, test_client):
        await test_client.post("/recipes", json={"name": "Toast"})
        response = await test_client.get("/health")
        assert response.status_code == 200
        payload = response.json()
        assert payload["status"] == "healthy"
        assert payload["recipes"] == 1
