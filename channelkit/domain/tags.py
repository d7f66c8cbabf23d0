"""Tags — in-memory tag config and storage."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from channelkit.domain.models import DISCORD_BLURPLE, Embed, RenderedMessage

Check = Callable[[Any], Any]


@dataclass
class Tag:
    category: str
    key: str
    title: str
    description: str
    color: Optional[int] = DISCORD_BLURPLE
    image: Optional[str] = None
    guild_id: Optional[int] = None  # None = available in every guild


TagFormatter = Callable[[Tag], RenderedMessage]


def default_tag_formatter(tag: Tag) -> RenderedMessage:
    return RenderedMessage(
        embed=Embed(
            title=tag.title,
            description=tag.description,
            color=tag.color,
            image=tag.image,
            footer=f"{tag.category}/{tag.key}",
        )
    )


class SimpleTagsConfig:
    """A simple in-memory tags configuration.

    Register command checks with ``user_command_check`` / ``staff_command_check``;
    set ``logging_channel_name`` to log tag changes to a channel of that name.
    """

    def __init__(
        self,
        tag_formatter: TagFormatter = default_tag_formatter,
        logging_channel_name: Optional[str] = None,
    ):
        self.tag_formatter = tag_formatter
        self.logging_channel_name = logging_channel_name
        self._user_command_checks: List[Check] = []
        self._staff_command_checks: List[Check] = []

    def user_command_check(self, check: Check) -> Check:
        self._user_command_checks.append(check)
        return check

    def staff_command_check(self, check: Check) -> Check:
        self._staff_command_checks.append(check)
        return check

    def get_tag_formatter(self) -> TagFormatter:
        return self.tag_formatter

    def get_user_command_checks(self) -> List[Check]:
        return list(self._user_command_checks)

    def get_staff_command_checks(self) -> List[Check]:
        return list(self._staff_command_checks)

    async def get_logging_channel_or_none(self, channel):
        """Resolve the logging channel among ``channel``'s guild channels, or None."""
        if not self.logging_channel_name:
            return None
        return await channel.find_guild_channel(self.logging_channel_name)


class InMemoryTagStore:
    """Tags keyed by (guild_id, key). Guild tags shadow global ones."""

    def __init__(self):
        self._tags: Dict[Tuple[Optional[int], str], Tag] = {}

    def set_tag(self, tag: Tag) -> None:
        self._tags[(tag.guild_id, tag.key)] = tag

    def get_tag(self, key: str, guild_id: Optional[int] = None) -> Optional[Tag]:
        if guild_id is not None and (guild_id, key) in self._tags:
            return self._tags[(guild_id, key)]
        return self._tags.get((None, key))

    def delete_tag(self, key: str, guild_id: Optional[int] = None) -> bool:
        return self._tags.pop((guild_id, key), None) is not None

    def find_tags(self, category: Optional[str] = None, guild_id: Optional[int] = None) -> List[Tag]:
        """Tags visible from ``guild_id`` (global tags included), sorted by key."""
        visible: Dict[str, Tag] = {}
        for (tag_guild, key), tag in self._tags.items():
            if tag_guild is None:
                visible.setdefault(key, tag)
            elif tag_guild == guild_id:
                visible[key] = tag
        tags = [t for t in visible.values() if category is None or t.category == category]
        return sorted(tags, key=lambda t: t.key)
