"""Tag domain service."""

from typing import Iterable, Sequence

import logfire

from vibe.config import EngagementSettings
from vibe.domain.error import ValidationError
from vibe.domain.model.tag import Tag
from vibe.domain.repository import TagRepository
from vibe.domain.value import TagId, TagName

from .base import Service


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(
        self, tag_repository: TagRepository, settings: EngagementSettings
    ) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
            settings: Engagement limits
        """
        self.tag_repository = tag_repository
        self.settings = settings

    def _parse_names(self, raw_names: Sequence[str]) -> list[TagName]:
        """Strip, validate and de-duplicate submitted names.

        Blank names are skipped. Duplicates are detected case-insensitively;
        the first spelling wins.
        """
        names: list[TagName] = []
        seen: set[str] = set()
        for raw in raw_names:
            stripped = raw.strip()
            if not stripped:
                continue
            if len(stripped) > self.settings.tag_name_max_length:
                raise ValidationError(
                    f"Tag name must be at most "
                    f"{self.settings.tag_name_max_length} characters: {stripped!r}"
                )
            name = TagName(stripped)
            if name.key not in seen:
                seen.add(name.key)
                names.append(name)
        return names

    async def resolve(
        self, existing_tag_ids: Iterable[TagId], new_tag_names: Sequence[str]
    ) -> frozenset[TagId]:
        """Resolve tag references into a canonical set of tag IDs.

        Names are matched case-insensitively against existing tags; names
        with no match become new tags keeping the submitted casing.

        Args:
            existing_tag_ids: IDs of already existing tags
            new_tag_names: Free-text tag names

        Returns:
            Combined set of tag IDs

        Raises:
            ValidationError: If an ID is unknown, a name is too long, or the
                result would be empty
        """
        existing = frozenset(existing_tag_ids)
        with logfire.span(
            "tag_service.resolve",
            existing_count=len(existing),
            names=list(new_tag_names),
        ):
            names = self._parse_names(new_tag_names)
            if not existing and not names:
                raise ValidationError("A story must carry at least one tag")

            if existing:
                found = await self.tag_repository.find_by_ids(existing)
                missing = existing - {tag.id for tag in found}
                if missing:
                    raise ValidationError(
                        f"Tags not found: {', '.join(sorted(str(m) for m in missing))}"
                    )

            resolved = set(existing)
            for name in names:
                tag = await self.tag_repository.get_or_create(name)
                resolved.add(tag.id)

            logfire.info("Tags resolved", count=len(resolved))
            return frozenset(resolved)

    async def get_all_tags(self, limit: int = 100, order_by: str = "name") -> list[Tag]:
        """Get all available tags.

        Args:
            limit: Maximum number of tags to return
            order_by: Field to order by ('name' or 'created_at')

        Returns:
            List of tags
        """
        with logfire.span("tag_service.get_all_tags", limit=limit, order_by=order_by):
            tags = await self.tag_repository.find_all(limit=limit, order_by=order_by)
            logfire.info("Tags retrieved", count=len(tags))
            return tags
