"""End-to-end tests for the engagement API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from vibe.domain.repository import StoryRepository
from vibe.domain.value import UserId
from vibe.interface.api.app import create_app
from vibe.util.di.container import setup_di
from tests.conftest import make_story, make_token
from tests.di import build_test_container

COMMENT = "Really enjoyed this one, thanks for posting."


@pytest.fixture
def container(monkeypatch):
    """Test container with a short long-poll timeout."""
    monkeypatch.setenv("NOTIFICATIONS__LONG_POLL_TIMEOUT_SECONDS", "0.05")
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client backed by in-memory repositories."""
    app = create_app(with_container=False)
    setup_di(app, container)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed_story(client, container):
    """Seed a story on the app's event loop and return it."""

    def _seed(author_id: UserId | None = None):
        story_repo = client.portal.call(container.get, StoryRepository)
        return client.portal.call(make_story, story_repo, author_id)

    return _seed


def _login(client: TestClient, token: str) -> None:
    client.cookies.clear()
    client.cookies.set("auth_token", token)


class TestEngagementFlow:
    """End-to-end tests for a story's full engagement lifecycle."""

    def test_engagement_lifecycle(self, client, seed_story):
        """Votes, ratings and moderated comments should reach the story view."""
        # Arrange
        story = seed_story()
        base = f"/stories/{story.id}"
        reader = make_token(handle="reader")
        moderator = make_token(handle="mod", roles=["moderator"])

        # Act & Assert - reader engages
        _login(client, reader)
        response = client.post(f"{base}/vote")
        assert response.status_code == 200
        assert response.json()["action"] == "added"
        assert response.json()["vote_count"] == 1

        response = client.post(f"{base}/rating", json={"value": 4})
        assert response.status_code == 200
        assert response.json()["accepted"] is True

        response = client.post(f"{base}/comments", json={"content": COMMENT})
        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        comment_id = response.json()["comment_id"]

        response = client.get(f"{base}/comments")
        assert response.json()["total"] == 0

        # Act & Assert - moderator approves
        _login(client, moderator)
        response = client.get(
            "/moderation/comments", params={"story_id": str(story.id)}
        )
        assert response.status_code == 200
        assert [c["comment_id"] for c in response.json()["comments"]] == [comment_id]

        response = client.post(
            f"/moderation/comments/{comment_id}", json={"decision": "approve"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        response = client.post(
            f"/moderation/comments/{comment_id}", json={"decision": "reject"}
        )
        assert response.status_code == 409

        # Assert - public view
        response = client.get(f"{base}/comments")
        assert [c["comment_id"] for c in response.json()["comments"]] == [comment_id]

        response = client.get(base)
        assert response.status_code == 200
        data = response.json()
        assert data["vote_count"] == 1
        assert data["average_rating"] == 4.0
        assert data["approved_comment_count"] == 1

        _login(client, reader)
        response = client.get(f"{base}/me")
        assert response.json() == {
            "story_id": str(story.id),
            "voted": True,
            "rating": 4,
            "bookmarked": False,
        }

    def test_two_reader_story_walkthrough(self, client, seed_story):
        """Two readers vote, rate, comment and report on one story."""
        # Arrange
        story = seed_story()
        base = f"/stories/{story.id}"
        reader_a = make_token(handle="alice")
        reader_b = make_token(handle="bob")
        moderator = make_token(handle="mod", roles=["moderator"])
        assert client.get(base).json()["vote_count"] == 0

        # Act & Assert - votes toggle per reader
        _login(client, reader_a)
        assert client.post(f"{base}/vote").json()["vote_count"] == 1
        assert client.post(f"{base}/vote").json()["vote_count"] == 0
        _login(client, reader_b)
        assert client.post(f"{base}/vote").json()["vote_count"] == 1

        # Act & Assert - ratings are one-time
        _login(client, reader_a)
        assert client.post(f"{base}/rating", json={"value": 4}).status_code == 200
        _login(client, reader_b)
        assert client.post(f"{base}/rating", json={"value": 5}).status_code == 200
        assert client.get(base).json()["average_rating"] == 4.5

        _login(client, reader_a)
        again = client.post(f"{base}/rating", json={"value": 1})
        assert again.status_code == 409
        assert client.get(base).json()["average_rating"] == 4.5

        # Act & Assert - comments wait for approval
        short = client.post(f"{base}/comments", json={"content": "too short"})
        assert short.status_code == 400
        created = client.post(
            f"{base}/comments", json={"content": "This is a great app, really."}
        )
        assert created.json()["status"] == "pending"
        comment_id = created.json()["comment_id"]

        _login(client, moderator)
        approved = client.post(
            f"/moderation/comments/{comment_id}", json={"decision": "approve"}
        )
        assert approved.status_code == 200
        assert client.get(base).json()["approved_comment_count"] == 1
        visible = client.get(f"{base}/comments").json()["comments"]
        assert [c["comment_id"] for c in visible] == [comment_id]

        # Act & Assert - one pending report per reporter
        _login(client, reader_b)
        blank = client.post(f"{base}/reports", json={"reason": ""})
        assert blank.status_code == 400
        report = client.post(f"{base}/reports", json={"reason": "spam content here"})
        assert report.status_code == 201
        assert report.json()["status"] == "pending"
        duplicate = client.post(
            f"{base}/reports", json={"reason": "spam content here"}
        )
        assert duplicate.status_code == 409

        # Assert - final story view
        data = client.get(base).json()
        assert data["vote_count"] == 1
        assert data["average_rating"] == 4.5
        assert data["approved_comment_count"] == 1

    def test_bookmarks(self, client, seed_story):
        """Bookmarks should toggle and list for the current user only."""
        # Arrange
        story = seed_story()
        _login(client, make_token())

        # Act
        toggled = client.post(f"/stories/{story.id}/bookmark")
        listed = client.get("/users/me/bookmarks")

        # Assert
        assert toggled.json()["bookmarked"] is True
        assert listed.json()["total"] == 1
        assert listed.json()["bookmarks"][0]["story_id"] == str(story.id)


class TestErrors:
    """End-to-end tests for error statuses."""

    def test_unauthenticated_vote_is_401(self, client, seed_story):
        """Mutations without a token should be rejected."""
        story = seed_story()
        response = client.post(f"/stories/{story.id}/vote")
        assert response.status_code == 401

    def test_reader_cannot_moderate(self, client):
        """Moderation without the role should be forbidden."""
        _login(client, make_token())
        response = client.get("/moderation/reports")
        assert response.status_code == 403

    def test_unknown_story_is_404(self, client):
        """Unknown stories should be reported as not found."""
        _login(client, make_token())
        assert client.get(f"/stories/{uuid4()}").status_code == 404
        assert client.post(f"/stories/{uuid4()}/vote").status_code == 404

    def test_malformed_story_id_is_400(self, client):
        """Malformed identifiers should be a bad request."""
        assert client.get("/stories/not-a-uuid").status_code == 400

    def test_duplicate_rating_is_409(self, client, seed_story):
        """A second rating should conflict and keep the reason."""
        story = seed_story()
        _login(client, make_token())
        client.post(f"/stories/{story.id}/rating", json={"value": 5})

        response = client.post(f"/stories/{story.id}/rating", json={"value": 1})

        assert response.status_code == 409
        assert response.json()["detail"] == "You have already rated this story"

    def test_invalid_rating_is_400(self, client, seed_story):
        """Ratings outside the range should be a bad request."""
        story = seed_story()
        _login(client, make_token())
        response = client.post(f"/stories/{story.id}/rating", json={"value": 9})
        assert response.status_code == 400

    def test_short_comment_is_400(self, client, seed_story):
        """Comments below the minimum length should be a bad request."""
        story = seed_story()
        _login(client, make_token())
        response = client.post(f"/stories/{story.id}/comments", json={"content": "meh"})
        assert response.status_code == 400


class TestReports:
    """End-to-end tests for reporting and resolving stories."""

    def test_report_and_resolve(self, client, seed_story):
        """A report should be deduplicated until a moderator closes it."""
        # Arrange
        story = seed_story()
        reporter = make_token()
        moderator = make_token(roles=["moderator"])

        # Act & Assert
        _login(client, reporter)
        created = client.post(f"/stories/{story.id}/reports", json={"reason": "spam"})
        assert created.status_code == 201
        duplicate = client.post(f"/stories/{story.id}/reports", json={"reason": "spam"})
        assert duplicate.status_code == 409

        _login(client, moderator)
        pending = client.get("/moderation/reports", params={"status": "pending"})
        assert pending.json()["total"] == 1

        report_id = created.json()["report_id"]
        resolved = client.post(
            f"/moderation/reports/{report_id}", json={"outcome": "dismissed"}
        )
        assert resolved.status_code == 200
        assert resolved.json()["status"] == "dismissed"

        _login(client, reporter)
        again = client.post(f"/stories/{story.id}/reports", json={"reason": "spam"})
        assert again.status_code == 201


class TestTags:
    """End-to-end tests for tagging."""

    def test_author_retags_story(self, client, seed_story):
        """Only the author may retag, and new names become tags."""
        # Arrange
        author_id = UserId(uuid4())
        story = seed_story(author_id)

        # Act & Assert
        _login(client, make_token())
        forbidden = client.put(
            f"/stories/{story.id}/tags", json={"new_tag_names": ["Science"]}
        )
        assert forbidden.status_code == 403

        _login(client, make_token(author_id))
        updated = client.put(
            f"/stories/{story.id}/tags", json={"new_tag_names": ["Science"]}
        )
        assert updated.status_code == 200
        assert len(updated.json()["tag_ids"]) == 1

        empty = client.put(f"/stories/{story.id}/tags", json={"new_tag_names": [" "]})
        assert empty.status_code == 400

        tags = client.get("/tags").json()["tags"]
        assert [t["name"] for t in tags] == ["Science"]

    def test_resolve_requires_auth(self, client):
        """Resolving tags should require a token."""
        response = client.post("/tags/resolve", json={"new_tag_names": ["AI"]})
        assert response.status_code == 401


class TestChangeFeed:
    """End-to-end tests for the long-poll change feed."""

    def test_changes_since_last_seen_version(self, client, seed_story):
        """The feed should report changes and then time out quietly."""
        # Arrange
        story = seed_story()
        _login(client, make_token())
        client.post(f"/stories/{story.id}/vote")
        client.post(f"/stories/{story.id}/rating", json={"value": 3})

        # Act
        first = client.get(f"/stories/{story.id}/changes", params={"since": 0})
        version = first.json()["version"]
        second = client.get(f"/stories/{story.id}/changes", params={"since": version})

        # Assert
        assert first.status_code == 200
        assert first.json()["changed"] is True
        assert version == 2
        assert first.json()["story"]["average_rating"] == 3.0
        assert second.json()["changed"] is False
        assert second.json()["version"] == version

    def test_changes_for_unknown_story_is_404(self, client):
        """Watching an unknown story should be not found."""
        response = client.get(f"/stories/{uuid4()}/changes")
        assert response.status_code == 404


class TestHealth:
    """End-to-end tests for the health check."""

    def test_health(self, client):
        """Health should report the service as healthy."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
