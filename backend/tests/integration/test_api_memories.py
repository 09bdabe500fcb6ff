"""
Integration tests for memory endpoints.
"""

import pytest


async def create_memory(client, **fields):
    body = {"date": "2023-02-14", "title": "First date", **fields}
    response = await client.post("/memories", json=body)
    assert response.status_code == 201
    return response.json()


class TestMemoryEndpoints:
    """Tests for /memories."""

    @pytest.mark.integration
    @pytest.mark.api
    async def test_create_memory(self, client):
        data = await create_memory(client, content="Coffee at the lake", tags=["firsts"])

        assert data["id"]
        assert data["title"] == "First date"
        assert data["type"] == "text"
        assert data["tags"] == ["firsts"]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_create_with_blank_title(self, client):
        response = await client.post("/memories", json={"date": "2024-01-01", "title": " "})

        assert response.status_code == 422

    @pytest.mark.integration
    @pytest.mark.api
    async def test_timeline_newest_first(self, client):
        await create_memory(client, id="old", date="2022-03-01")
        await create_memory(client, id="new", date="2024-03-01")

        response = await client.get("/memories")

        assert [memory["id"] for memory in response.json()] == ["new", "old"]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_update_memory(self, client):
        created = await create_memory(client)

        response = await client.put(
            f"/memories/{created['id']}", json={"date": "2023-02-14", "title": "Our first date"}
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Our first date"
        assert response.json()["id"] == created["id"]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_update_missing_memory(self, client):
        response = await client.put("/memories/ghost", json={"date": "2023-02-14", "title": "X"})

        assert response.status_code == 404

    @pytest.mark.integration
    @pytest.mark.api
    async def test_delete_memory(self, client):
        created = await create_memory(client)

        response = await client.delete(f"/memories/{created['id']}")

        assert response.status_code == 200
        assert (await client.get("/memories")).json() == []
        assert (await client.delete(f"/memories/{created['id']}")).status_code == 404

    @pytest.mark.integration
    @pytest.mark.api
    async def test_gallery_and_media_removal(self, client):
        created = await create_memory(client, type="image", images=["img-a", "img-b"])

        gallery = (await client.get("/memories/gallery")).json()
        assert [(item["memoryId"], item["index"]) for item in gallery] == [(created["id"], 0), (created["id"], 1)]

        response = await client.delete(f"/memories/{created['id']}/media/0")
        assert response.status_code == 200
        assert response.json()["images"] == ["img-b"]

        assert (await client.delete(f"/memories/{created['id']}/media/5")).status_code == 404
