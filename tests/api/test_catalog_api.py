"""
API tests for catalog discovery.
"""

from datetime import timedelta

import pytest

from pincast_expo.domain.value_objects.listing_state import ListingState


@pytest.mark.e2e
class TestCatalogAPI:
    async def test_distance_sort_without_coordinates(self, client):
        response = await client.get("/api/v1/catalog", params={"sort": "distance"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "INVALID_ARGUMENT"
        assert body["detail"] == (
            "Latitude and longitude are required when using distance sort"
        )

    async def test_invalid_sort(self, client):
        response = await client.get("/api/v1/catalog", params={"sort": "rating"})

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Invalid sort option. Valid options are: distance, popularity, newest"
        )

    async def test_distance_sort(self, client, seed):
        owner = await seed.user()
        near = await seed.listing(owner, lat=0.001, title="Near")
        far = await seed.listing(owner, lat=0.2, title="Far")
        await seed.listing(owner, lat=0.0005, state=ListingState.PENDING)
        await seed.listing(owner, lat=5.0)

        response = await client.get(
            "/api/v1/catalog", params={"sort": "distance", "lat": "0", "lng": "0"}
        )

        assert response.status_code == 200
        items = response.json()
        assert [item["id"] for item in items] == [str(near.id), str(far.id)]
        assert items[0]["distanceMeters"] == 111
        assert set(items[0]) == {
            "id",
            "title",
            "slug",
            "heroUrl",
            "sessions7d",
            "distanceMeters",
        }

    async def test_popularity_sort(self, client, seed):
        owner = await seed.user()
        listings = [await seed.listing(owner) for _ in range(3)]
        for listing, count in zip(listings, (25, 100, 50)):
            await seed.sessions(listing, count)
        await seed.sessions(listings[0], 500, age=timedelta(days=9))

        response = await client.get("/api/v1/catalog", params={"sort": "popularity"})

        assert response.status_code == 200
        items = response.json()
        assert [item["sessions7d"] for item in items] == [100, 50, 25]
        assert all("distanceMeters" not in item for item in items)

    async def test_newest_sort(self, client, seed):
        owner = await seed.user()
        older = await seed.listing(owner)
        newer = await seed.listing(owner)
        unversioned = await seed.listing(owner)
        await seed.version(older, age=timedelta(days=3))
        await seed.version(newer, age=timedelta(hours=1))

        response = await client.get("/api/v1/catalog", params={"sort": "newest"})

        assert [item["id"] for item in response.json()] == [
            str(newer.id),
            str(older.id),
            str(unversioned.id),
        ]

    async def test_request_id_is_echoed(self, client):
        response = await client.get(
            "/api/v1/health", headers={"X-Request-ID": "req-123"}
        )

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "req-123"
        assert response.json()["status"] == "healthy"
