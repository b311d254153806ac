"""
End-to-end catalog flow through the HTTP API.

Covers a user's whole journey: register, log in, create a record with an
image, browse and enrich it, get rejected on somebody else's record, edit and
finally delete it.
"""

import pytest

pytestmark = pytest.mark.asyncio

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x01" * 32


async def _login(api, email: str, password: str = "secret123") -> str:
    response = await api.post("/api/auth/register", json={"email": email, "password": password})
    assert response.status_code in (201, 409), response.text
    response = await api.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["id"]


class TestCatalogFlow:
    async def test_owner_lifecycle(self, api, make_pokemon):
        """Test create, read, enrich, update and delete by the owner."""
        seeded = await make_pokemon("bulbasaur", height=7, weight=69)
        seeded_id = seeded.id

        ash_id = await _login(api, "ash@example.com")

        created = await api.post(
            "/api/pokemon",
            data={"name": "sparky", "height": "4", "weight": "60"},
            files={"image": ("sparky.png", PNG_BYTES, "image/png")},
        )
        assert created.status_code == 201
        record = created.json()
        assert record["ownerId"] == ash_id

        image = await api.get(record["image"])
        assert image.status_code == 200
        assert image.content == PNG_BYTES

        listing = (await api.get("/api/pokemon", params={"sortBy": "name", "sortOrder": "desc"})).json()
        assert [p["name"] for p in listing["data"]] == ["sparky", "bulbasaur"]
        assert listing["totalItems"] == 2

        details = (await api.get(f"/api/pokemon/{seeded_id}", params={"view": "details"})).json()
        assert details["pokeApiDetails"] == {
            "pokedexId": 1,
            "description": "A strange seed was planted on its back at birth.",
            "category": "Seed Pokémon",
            "types": ["grass", "poison"],
            "abilities": [{"name": "overgrow", "isHidden": False}],
            "stats": [{"name": "hp", "baseStat": 45}],
            "gender": "M: 87.5%, F: 12.5%",
        }

        # unknown to PokeAPI: enrichment is skipped, the record still renders
        own_details = (await api.get(f"/api/pokemon/{record['id']}", params={"view": "details"})).json()
        assert own_details["pokeApiDetails"] is None
        assert own_details["name"] == "sparky"

        updated = await api.put(
            f"/api/pokemon/{record['id']}",
            data={"name": "sparky-2", "removeImage": "true"},
        )
        assert updated.status_code == 200
        assert updated.json()["name"] == "sparky-2"
        assert updated.json()["image"] is None
        assert (await api.get(record["image"])).status_code == 404

        assert (await api.put(f"/api/pokemon/{seeded_id}", data={"weight": "1"})).status_code == 403

        assert (await api.delete(f"/api/pokemon/{record['id']}")).status_code == 204
        nav = (await api.get("/api/pokemon/list-for-nav")).json()
        assert nav == [{"id": seeded_id, "name": "bulbasaur"}]

    async def test_records_are_guarded_per_owner(self, api):
        """Test that a second user can read but not change the first user's record."""
        await _login(api, "ash@example.com")
        record = (await api.post("/api/pokemon", data={"name": "Pika", "height": "4", "weight": "60"})).json()
        assert (await api.post("/api/auth/logout")).status_code == 204

        # anonymous users can browse but not write
        assert (await api.get(f"/api/pokemon/{record['id']}")).status_code == 200
        assert (await api.delete(f"/api/pokemon/{record['id']}")).status_code == 401

        await _login(api, "misty@example.com")
        assert (await api.put(f"/api/pokemon/{record['id']}", data={"weight": "1"})).status_code == 403
        assert (await api.delete(f"/api/pokemon/{record['id']}")).status_code == 403

        await api.post("/api/auth/logout")
        await _login(api, "ash@example.com")
        assert (await api.delete(f"/api/pokemon/{record['id']}")).status_code == 204
