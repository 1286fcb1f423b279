"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from vibe.config import AuthSettings
from vibe.domain.model import Story
from vibe.domain.repository import StoryRepository
from vibe.domain.value import StoryId, TagId, UserId


async def make_story(
    story_repository: StoryRepository,
    author_id: UserId | None = None,
    tag_ids: frozenset[TagId] = frozenset(),
    title: str = "A story worth reading",
) -> Story:
    """Save a fresh story with zeroed counters.

    Story submission lives outside this service, so tests seed stories
    straight through the repository.
    """
    story = Story(
        id=StoryId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        title=title,
        tag_ids=tag_ids,
        created_at=datetime.now() - timedelta(days=1),
    )
    return await story_repository.save(story)


def make_token(
    user_id: UserId | str | None = None,
    handle: str = "reader",
    roles: list[str] | None = None,
    settings: AuthSettings | None = None,
    expires_in: timedelta = timedelta(days=1),
) -> str:
    """Mint an auth token the way the identity provider would."""
    settings = settings or AuthSettings()
    payload = {
        "user_id": str(user_id or uuid4()),
        "handle": handle,
        "roles": roles or [],
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
