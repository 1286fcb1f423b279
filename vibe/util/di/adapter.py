"""Adapter DI providers."""

from dishka import Scope, provide

from vibe.adapter.notifier import StoryChangeBroker
from vibe.util.di.base import ProviderBase


class AdapterProvider(ProviderBase):
    """Adapter Provider.

    The change broker is process-wide: long-poll subscribers in one request
    are woken by commits in another.
    """

    scope = Scope.APP

    @provide
    def get_change_broker(self) -> StoryChangeBroker:
        """Provide the story change broker."""
        return StoryChangeBroker()
