"""
FlowRouter Backend - Application Router Tests
=============================================

What:  End-to-end tests of every rule in ApplicationRouter.routing().
How:   HTTPX AsyncClient against a full app (middleware, exception handlers)
       whose BookRepository uses an in-memory SQLite database.
"""

import pytest


JSON = {"Content-Type": "application/json"}


class TestHello:
    @pytest.mark.asyncio
    async def test_hello_requires_json_media_type(self, test_client):
        response = await test_client.get("/api/v10/hello", headers=JSON)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text == "<h1>Hello World from FastAPI 101!</h1>"

    @pytest.mark.asyncio
    async def test_hello_without_json_falls_through(self, test_client):
        response = await test_client.get("/api/v10/hello")

        assert response.status_code == 404
        assert response.text == "GET on /api/v10/hello not implemented yet!"

    @pytest.mark.asyncio
    async def test_hello_name_with_age(self, test_client):
        response = await test_client.get("/api/v10/hello/Ada", params={"age": "36"})

        assert response.status_code == 200
        assert response.text == "<h1>Hello Ada, your age is 36!</h1>"

    @pytest.mark.asyncio
    async def test_hello_name_without_age(self, test_client):
        response = await test_client.get("/api/v10/hello/Ada")

        assert response.text == "<h1>Hello Ada, your age is unknown!</h1>"

    @pytest.mark.asyncio
    async def test_hello_name_is_escaped(self, test_client):
        response = await test_client.get("/api/v10/hello/<b>", params={"age": "<i>"})

        assert response.text == "<h1>Hello &lt;b&gt;, your age is &lt;i&gt;!</h1>"

    @pytest.mark.asyncio
    async def test_hello_name_only_answers_get(self, test_client):
        response = await test_client.delete("/api/v10/hello/Ada")

        assert response.status_code == 404
        assert response.text == "DELETE on /api/v10/hello/Ada not implemented yet!"

    @pytest.mark.asyncio
    async def test_sub_router(self, test_client):
        response = await test_client.post("/api/v10/uri/with/complex/management")

        assert response.status_code == 200
        assert response.text == "<h1>Hello World from Mr. Subrouter!</h1>"


class TestBooks:
    @pytest.mark.asyncio
    async def test_save_then_list(self, test_client):
        saved = await test_client.put(
            "/api/v10/book", json={"title": "Odyssey", "first_edition": 1614}
        )

        assert saved.status_code == 200
        book = saved.json()
        assert book["title"] == "Odyssey"
        assert book["first_edition"] == 1614
        assert isinstance(book["id"], int)

        listed = await test_client.get("/api/v10/book")

        assert listed.status_code == 200
        assert listed.json() == [book]

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/api/v10/book")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_save_without_body_is_bad_request(self, test_client):
        response = await test_client.put("/api/v10/book")

        assert response.status_code == 400
        assert response.text == ""

    @pytest.mark.asyncio
    async def test_save_invalid_body(self, test_client):
        response = await test_client.put("/api/v10/book", json={"title": "Odyssey"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["errors"][0]["loc"] == ["first_edition"]
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_unsupported_verb_on_collection(self, test_client):
        response = await test_client.post("/api/v10/book", json={"title": "x", "first_edition": 1})

        assert response.status_code == 404
        assert response.text == (
            "POST on /api/v10/book with content type application/json not implemented yet!"
        )

    @pytest.mark.asyncio
    async def test_get_single_book(self, test_client):
        book = (await test_client.put(
            "/api/v10/book", json={"title": "Iliad", "first_edition": 1598}
        )).json()

        response = await test_client.get(f"/api/v10/book/{book['id']}")

        assert response.status_code == 200
        assert response.json() == book

    @pytest.mark.asyncio
    async def test_get_missing_book(self, test_client):
        response = await test_client.get("/api/v10/book/999")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "book with ID '999' was not found"

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_not_routed(self, test_client):
        response = await test_client.get("/api/v10/book/abc")

        assert response.status_code == 404
        assert response.text == "GET on /api/v10/book/abc not implemented yet!"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("verb", ["GET", "PATCH", "DELETE"])
    @pytest.mark.parametrize("book_id", ["2147483648", "99999999999999999999999"])
    async def test_id_beyond_column_range_is_not_found(self, test_client, verb, book_id):
        response = await test_client.request(
            verb, f"/api/v10/book/{book_id}", json={"title": "Nothing"}
        )

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == f"book with ID '{book_id}' was not found"

    @pytest.mark.asyncio
    async def test_update_title(self, test_client):
        book = (await test_client.put(
            "/api/v10/book", json={"title": "Odissey", "first_edition": 1614}
        )).json()

        response = await test_client.patch(f"/api/v10/book/{book['id']}", json={"title": "Odyssey"})

        assert response.status_code == 200
        assert response.json() == {**book, "title": "Odyssey"}

    @pytest.mark.asyncio
    async def test_update_missing_book(self, test_client):
        response = await test_client.patch("/api/v10/book/404", json={"title": "Nothing"})

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_delete(self, test_client):
        book = (await test_client.put(
            "/api/v10/book", json={"title": "Aeneid", "first_edition": 1697}
        )).json()

        deleted = await test_client.delete(f"/api/v10/book/{book['id']}")
        again = await test_client.delete(f"/api/v10/book/{book['id']}")

        assert deleted.status_code == 204
        assert again.status_code == 404


class TestAmbientRoutes:
    @pytest.mark.asyncio
    async def test_health_is_not_captured_by_flow(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/v10/hello/Ada", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_fallback_echoes_the_encoded_uri(self, test_client):
        response = await test_client.get("/api/v10/a%20b")

        assert response.status_code == 404
        assert response.text == "GET on /api/v10/a%20b not implemented yet!"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/api/v10/nowhere")

        assert len(response.headers["X-Request-ID"]) == 8
