"""Discord channel adapter — ChannelPort implementation over discord.py."""

from typing import List, Optional

import discord

from channelkit.domain.models import Embed, EmbedField, RenderedMessage
from channelkit.errors import NotFoundIgnorable, PlatformApiError
from channelkit.ports.inbound import ChannelMessage, GuildInfo

_BULK_DELETE_LIMIT = 100


def to_discord_embed(embed: Embed) -> discord.Embed:
    result = discord.Embed(
        title=embed.title,
        description=embed.description,
        color=embed.color,
    )
    for f in embed.fields:
        result.add_field(name=f.name, value=f.value, inline=f.inline)
    if embed.image:
        result.set_image(url=embed.image)
    if embed.thumbnail:
        result.set_thumbnail(url=embed.thumbnail)
    if embed.footer:
        result.set_footer(text=embed.footer)
    return result


def from_discord_embed(embed: discord.Embed) -> Embed:
    return Embed(
        title=embed.title,
        description=embed.description,
        color=embed.color.value if embed.color is not None else None,
        fields=[EmbedField(f.name or "", f.value or "", bool(f.inline)) for f in embed.fields],
        image=embed.image.url if embed.image else None,
        thumbnail=embed.thumbnail.url if embed.thumbnail else None,
        footer=embed.footer.text if embed.footer else None,
    )


def to_channel_message(message: discord.Message) -> ChannelMessage:
    """Convert a discord.Message to a platform-agnostic snapshot."""
    return ChannelMessage(
        id=message.id,
        created_at=message.created_at,
        author_id=message.author.id if message.author else None,
        is_default=message.type == discord.MessageType.default,
        content=message.content or "",
        embeds=[from_discord_embed(e) for e in message.embeds],
        has_components=bool(message.components),
    )


def _platform_error(action: str, error: Exception) -> PlatformApiError:
    if isinstance(error, discord.NotFound):
        return NotFoundIgnorable(f"{action}: {error}", cause=error)
    status = getattr(error, "status", None)
    return PlatformApiError(f"{action}: {error}", status=status, cause=error)


class DiscordLogChannel:
    """LogDestination implementation sending to a Discord text channel."""

    def __init__(self, channel: discord.abc.Messageable):
        self._channel = channel

    async def send(self, rendered: RenderedMessage) -> None:
        await self._channel.send(
            content=rendered.content,
            embed=to_discord_embed(rendered.embed) if rendered.embed else None,
            allowed_mentions=discord.AllowedMentions.none(),
        )


class DiscordChannel:
    """ChannelPort implementation wrapping a discord.TextChannel."""

    def __init__(self, channel: discord.TextChannel, self_id: Optional[int]):
        self._channel = channel
        self._self_id = self_id

    @property
    def id(self) -> int:
        return self._channel.id

    @property
    def name(self) -> str:
        return self._channel.name

    @property
    def mention(self) -> str:
        return self._channel.mention

    @property
    def self_id(self) -> Optional[int]:
        return self._self_id

    @property
    def guild(self) -> Optional[GuildInfo]:
        guild = self._channel.guild
        if guild is None:
            return None
        return GuildInfo(id=guild.id, name=guild.name)

    async def list_messages(self) -> List[ChannelMessage]:
        try:
            return [to_channel_message(m) async for m in self._channel.history(limit=None, oldest_first=True)]
        except (discord.HTTPException, discord.ClientException) as e:
            raise _platform_error("Failed to list messages", e) from e

    async def create_message(self, rendered: RenderedMessage) -> int:
        try:
            message = await self._channel.send(
                content=rendered.content,
                embed=to_discord_embed(rendered.embed) if rendered.embed else None,
                allowed_mentions=discord.AllowedMentions.none(),
            )
        except (discord.HTTPException, discord.ClientException) as e:
            raise _platform_error("Failed to create message", e) from e
        return message.id

    async def edit_message(self, message_id: int, rendered: RenderedMessage) -> None:
        kwargs = {
            "content": rendered.content,
            "embeds": [to_discord_embed(rendered.embed)] if rendered.embed else [],
            "allowed_mentions": discord.AllowedMentions.none(),
        }
        if rendered.clear_components:
            kwargs["view"] = None
        try:
            await self._channel.get_partial_message(message_id).edit(**kwargs)
        except (discord.HTTPException, discord.ClientException) as e:
            raise _platform_error(f"Failed to edit message {message_id}", e) from e

    async def delete_message(self, message_id: int) -> None:
        try:
            await self._channel.get_partial_message(message_id).delete()
        except (discord.HTTPException, discord.ClientException) as e:
            raise _platform_error(f"Failed to delete message {message_id}", e) from e

    async def bulk_delete(self, message_ids: List[int]) -> None:
        try:
            for start in range(0, len(message_ids), _BULK_DELETE_LIMIT):
                chunk = message_ids[start:start + _BULK_DELETE_LIMIT]
                await self._channel.delete_messages([discord.Object(id=i) for i in chunk])
        except (discord.HTTPException, discord.ClientException) as e:
            raise _platform_error("Failed to bulk delete messages", e) from e

    async def find_guild_channel(self, name: str) -> Optional[DiscordLogChannel]:
        guild = self._channel.guild
        if guild is None:
            return None
        matches = [c for c in guild.text_channels if c.name.lower() == name.lower()]
        return DiscordLogChannel(matches[-1]) if matches else None
