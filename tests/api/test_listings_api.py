"""
API tests for the staff review lifecycle.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from pincast_expo.data.repositories.event_repository import EventRepository
from pincast_expo.domain.entities.analytics_event import (
    APP_STATE_CHANGE,
    APP_VERSION_ROLLBACK,
)
from pincast_expo.domain.exceptions import StorageError
from pincast_expo.domain.value_objects.listing_state import ListingState


@pytest.mark.e2e
class TestChangeStateAPI:
    async def test_publish_pending_listing(self, client, seed, developer, staff, staff_headers):
        # Arrange
        listing = await seed.listing(developer, state=ListingState.PENDING)

        # Act
        response = await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "published"},
            headers=staff_headers,
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "App state changed from 'pending' to 'published'"
        assert body["listing"]["state"] == "published"
        assert body["listing"]["geo"]["center"] == [0.0, 0.0]

        assert (await seed.reload(listing.id)).state is ListingState.PUBLISHED
        events = await seed.events(listing.id)
        assert [e.event for e in events] == [APP_STATE_CHANGE]
        assert events[0].actor_id == staff.id
        assert events[0].metadata == {
            "fromState": "pending",
            "toState": "published",
            "reason": "Changed by staff reviewer@pincast.fm",
        }

    async def test_invalid_transition(self, client, seed, developer, staff_headers):
        listing = await seed.listing(developer, state=ListingState.PUBLISHED)

        response = await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "rejected", "reason": "nope"},
            headers=staff_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_TRANSITION"
        assert response.json()["detail"] == (
            "Invalid state transition from 'published' to 'rejected'"
        )
        assert (await seed.reload(listing.id)).state is ListingState.PUBLISHED
        assert await seed.events(listing.id) == []

    async def test_repeated_transition_is_rejected(
        self, client, seed, developer, staff_headers
    ):
        listing = await seed.listing(developer, state=ListingState.PUBLISHED)
        url = f"/api/v1/listings/{listing.id}/state"

        first = await client.patch(url, json={"state": "hidden"}, headers=staff_headers)
        second = await client.patch(url, json={"state": "hidden"}, headers=staff_headers)

        assert first.status_code == 200
        assert second.status_code == 400
        assert len(await seed.events(listing.id)) == 1

    async def test_unknown_listing(self, client, staff_headers):
        response = await client.patch(
            f"/api/v1/listings/{uuid4()}/state",
            json={"state": "published"},
            headers=staff_headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "App not found"

    async def test_unknown_state_value(self, client, seed, developer, staff_headers):
        listing = await seed.listing(developer)

        response = await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "archived"},
            headers=staff_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ARGUMENT"


@pytest.mark.e2e
class TestAuthOnLifecycleAPI:
    async def test_missing_token(self, client, seed, developer):
        listing = await seed.listing(developer, state=ListingState.PENDING)

        response = await client.patch(
            f"/api/v1/listings/{listing.id}/state", json={"state": "published"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["detail"] == "Authentication required"

    async def test_expired_token(self, client, seed, developer, staff, make_token, auth_headers):
        listing = await seed.listing(developer, state=ListingState.PENDING)
        token = make_token(staff.identity_subject, expires_in=timedelta(minutes=-1))

        response = await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "published"},
            headers=auth_headers(token),
        )

        assert response.status_code == 401

    async def test_developer_is_forbidden(self, client, seed, developer, make_token, auth_headers):
        listing = await seed.listing(developer, state=ListingState.PENDING)

        response = await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "published"},
            headers=auth_headers(make_token(developer.identity_subject)),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Staff access required"
        assert (await seed.reload(listing.id)).state is ListingState.PENDING

    async def test_unknown_subject_is_forbidden(self, client, seed, developer, make_token, auth_headers):
        listing = await seed.listing(developer, state=ListingState.PENDING)

        response = await client.post(
            f"/api/v1/listings/{listing.id}/rollback",
            json={"versionId": str(uuid4())},
            headers=auth_headers(make_token("idp|ghost")),
        )

        assert response.status_code == 403


@pytest.mark.e2e
class TestRollbackAPI:
    async def test_rollback_republishes(self, client, seed, developer, staff_headers):
        listing = await seed.listing(developer, state=ListingState.HIDDEN)
        target = await seed.version(
            listing,
            semver="1.0.0",
            deploy_url="https://cdn.example.com/1.0.0",
            age=timedelta(days=1),
        )
        await seed.version(listing, semver="1.1.0")

        response = await client.post(
            f"/api/v1/listings/{listing.id}/rollback",
            json={"versionId": str(target.id), "reason": "1.1.0 crashes on launch"},
            headers=staff_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Rolled back to version 1.0.0"
        assert body["deployUrl"] == "https://cdn.example.com/1.0.0"
        assert body["version"]["id"] == str(target.id)
        assert body["listing"]["state"] == "published"

        events = await seed.events(listing.id)
        assert [e.event for e in events] == [APP_VERSION_ROLLBACK]
        assert events[0].metadata == {
            "versionId": str(target.id),
            "semver": "1.0.0",
            "reason": "1.1.0 crashes on launch",
        }

    async def test_no_versions(self, client, seed, developer, staff_headers):
        listing = await seed.listing(developer, state=ListingState.HIDDEN)

        response = await client.post(
            f"/api/v1/listings/{listing.id}/rollback",
            json={"versionId": str(uuid4())},
            headers=staff_headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "No versions found for this app"

    async def test_unknown_version(self, client, seed, developer, staff_headers):
        listing = await seed.listing(developer, state=ListingState.HIDDEN)
        await seed.version(listing)

        response = await client.post(
            f"/api/v1/listings/{listing.id}/rollback",
            json={"versionId": str(uuid4())},
            headers=staff_headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Target version not found"
        assert (await seed.reload(listing.id)).state is ListingState.HIDDEN


@pytest.mark.e2e
class TestReviewViewsAPI:
    async def test_review_queue(self, client, seed, developer, staff_headers):
        pending = await seed.listing(developer, state=ListingState.PENDING)
        await seed.listing(developer, state=ListingState.PUBLISHED)
        await seed.version(pending)

        response = await client.get("/api/v1/listings/review-queue", headers=staff_headers)

        assert response.status_code == 200
        items = response.json()
        assert [item["id"] for item in items] == [str(pending.id)]
        assert items[0]["owner"]["displayName"] == "Studio Dev"
        assert items[0]["latestVersion"]["semver"] == "0.1.0"

    async def test_listing_detail_includes_audit_trail(
        self, client, seed, developer, staff_headers
    ):
        listing = await seed.listing(developer, state=ListingState.PENDING)
        await seed.version(listing)
        await seed.sessions(listing, 2)
        await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "published"},
            headers=staff_headers,
        )

        response = await client.get(f"/api/v1/listings/{listing.id}", headers=staff_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["state"] == "published"
        assert len(body["versions"]) == 1
        assert [entry["event"] for entry in body["auditTrail"]] == [APP_STATE_CHANGE]

    async def test_audit_trail_survives_newer_sessions(
        self, client, seed, developer, staff_headers
    ):
        listing = await seed.listing(developer, state=ListingState.PENDING)
        await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "published"},
            headers=staff_headers,
        )
        await seed.sessions(listing, 60, age=timedelta(0))

        response = await client.get(f"/api/v1/listings/{listing.id}", headers=staff_headers)

        assert response.status_code == 200
        trail = response.json()["auditTrail"]
        assert [entry["event"] for entry in trail] == [APP_STATE_CHANGE]
        assert trail[0]["metadata"]["toState"] == "published"

    async def test_public_app_page(self, client, seed, developer):
        listing = await seed.listing(developer, slug="harbor-hunt")
        await seed.version(listing, semver="1.2.3")

        response = await client.get("/api/v1/apps/harbor-hunt")
        missing = await client.get("/api/v1/apps/nope")

        assert response.status_code == 200
        assert response.json()["developerName"] == "Studio Dev"
        assert response.json()["semver"] == "1.2.3"
        assert missing.status_code == 404


@pytest.fixture
def failing_event_writes(monkeypatch):
    """Make every analytics append blow up after the state change commits."""

    def install(error: Exception):
        async def append_event(self, event):
            raise error

        monkeypatch.setattr(EventRepository, "append_event", append_event)

    return install


@pytest.mark.e2e
class TestAuditWriteFailureAPI:
    @pytest.mark.parametrize(
        "error", [StorageError("database is locked"), RuntimeError("serializer bug")]
    )
    async def test_transition_still_succeeds(
        self, client, seed, developer, staff_headers, failing_event_writes, error
    ):
        listing = await seed.listing(developer, state=ListingState.PENDING)
        failing_event_writes(error)

        response = await client.patch(
            f"/api/v1/listings/{listing.id}/state",
            json={"state": "published"},
            headers=staff_headers,
        )

        assert response.status_code == 200
        assert response.json()["listing"]["state"] == "published"
        assert (await seed.reload(listing.id)).state is ListingState.PUBLISHED
        assert await seed.events(listing.id) == []

    async def test_rollback_still_succeeds(
        self, client, seed, developer, staff_headers, failing_event_writes
    ):
        listing = await seed.listing(developer, state=ListingState.HIDDEN)
        version = await seed.version(listing, semver="2.0.1")
        failing_event_writes(ValueError("bad metadata"))

        response = await client.post(
            f"/api/v1/listings/{listing.id}/rollback",
            json={"versionId": str(version.id)},
            headers=staff_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Rolled back to version 2.0.1"
        assert (await seed.reload(listing.id)).state is ListingState.PUBLISHED
