"""Story change notification port."""

from typing import Iterable

from vibe.domain.value import StoryField, StoryId


class ChangeNotifier:
    """Generic interface for announcing changes to projected story fields.

    Domain services call ``notify`` as the last step of a successful
    mutation. Implementations decide when the notification becomes visible
    to subscribers (immediately, or once the surrounding transaction
    commits).
    """

    def notify(self, story_id: StoryId, fields: Iterable[StoryField]) -> None:
        """Record that fields of a story changed.

        Args:
            story_id: The story that changed
            fields: Projected fields affected by the mutation
        """
        raise NotImplementedError
