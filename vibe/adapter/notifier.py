"""In-process story change feed.

The broker keeps a monotonically increasing version per story and wakes
long-poll subscribers when it moves. Notifiers are the domain-facing side:
they hand events to the broker either immediately or once the request's
transaction has committed.
"""

import asyncio
from typing import Iterable

import logfire

from vibe.domain.service.notifier import ChangeNotifier
from vibe.domain.value import StoryChanged, StoryField, StoryId


class StoryChangeBroker:
    """Application-wide registry of story versions and waiting subscribers.

    Besides the story's version, the broker remembers the version at which
    each projected field last moved, so a subscriber several versions
    behind learns every field that changed since it last looked.
    """

    def __init__(self) -> None:
        self._versions: dict[StoryId, int] = {}
        self._field_versions: dict[StoryId, dict[StoryField, int]] = {}
        self._waiters: dict[StoryId, asyncio.Event] = {}

    def current_version(self, story_id: StoryId) -> int:
        """Version of the last published change (0 if none)."""
        return self._versions.get(story_id, 0)

    def publish(self, event: StoryChanged) -> StoryChanged:
        """Publish a change, assigning it the story's next version.

        Args:
            event: Change to publish (its version is ignored)

        Returns:
            The event as published, with its version
        """
        version = self.current_version(event.story_id) + 1
        self._versions[event.story_id] = version
        field_versions = self._field_versions.setdefault(event.story_id, {})
        for field in event.fields:
            field_versions[field] = version
        published = event.model_copy(update={"version": version})

        waiter = self._waiters.pop(event.story_id, None)
        if waiter is not None:
            waiter.set()

        logfire.info(
            "Story change published",
            story_id=str(published.story_id),
            version=published.version,
            fields=sorted(f.value for f in published.fields),
        )
        return published

    def changes_since(self, story_id: StoryId, since: int) -> StoryChanged | None:
        """Summarize everything published after version ``since``.

        Returns:
            An event at the current version naming every field that moved
            after ``since``, or None if the story has not moved
        """
        version = self.current_version(story_id)
        if version <= since:
            return None
        fields = frozenset(
            field
            for field, changed_at in self._field_versions.get(story_id, {}).items()
            if changed_at > since
        )
        return StoryChanged(story_id=story_id, fields=fields, version=version)

    async def wait_for_change(
        self, story_id: StoryId, since: int, timeout: float
    ) -> StoryChanged | None:
        """Wait until the story's version exceeds ``since``.

        Args:
            story_id: Story to watch
            since: Last version the caller has seen
            timeout: Seconds to wait before giving up

        Returns:
            The changes since ``since``, or None if nothing changed within
            the timeout
        """
        changes = self.changes_since(story_id, since)
        if changes is not None:
            return changes

        waiter = self._waiters.setdefault(story_id, asyncio.Event())
        try:
            await asyncio.wait_for(waiter.wait(), timeout)
        except asyncio.TimeoutError:
            return None
        return self.changes_since(story_id, since)


class ImmediateChangeNotifier(ChangeNotifier):
    """Publishes straight to the broker.

    Used where every repository write is already durable when it returns
    (the in-memory store).
    """

    def __init__(self, broker: StoryChangeBroker) -> None:
        self.broker = broker

    def notify(self, story_id: StoryId, fields: Iterable[StoryField]) -> None:
        self.broker.publish(StoryChanged(story_id=story_id, fields=frozenset(fields)))


class TransactionalChangeNotifier(ChangeNotifier):
    """Buffers notifications until the request transaction commits.

    The session provider calls ``flush`` after a successful commit and
    ``discard`` after a rollback, so subscribers never observe a change
    that was not persisted.
    """

    def __init__(self, broker: StoryChangeBroker) -> None:
        self.broker = broker
        self._pending: dict[StoryId, set[StoryField]] = {}

    def notify(self, story_id: StoryId, fields: Iterable[StoryField]) -> None:
        self._pending.setdefault(story_id, set()).update(fields)

    def flush(self) -> None:
        """Publish buffered changes, one event per story."""
        pending, self._pending = self._pending, {}
        for story_id, fields in pending.items():
            self.broker.publish(
                StoryChanged(story_id=story_id, fields=frozenset(fields))
            )

    def discard(self) -> None:
        """Drop buffered changes."""
        if self._pending:
            logfire.info(
                "Discarding unpublished story changes", count=len(self._pending)
            )
        self._pending = {}
