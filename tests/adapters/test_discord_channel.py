"""Tests for the Discord channel adapter — conversions and error mapping."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from channelkit.adapters.discord.channel import (
    DiscordChannel,
    DiscordLogChannel,
    from_discord_embed,
    to_channel_message,
    to_discord_embed,
)
from channelkit.domain.models import Embed, EmbedField, RenderedMessage
from channelkit.errors import NotFoundIgnorable, PlatformApiError


def _not_found():
    return discord.NotFound(MagicMock(status=404, reason="Not Found"), "Unknown Message")


def _forbidden():
    return discord.Forbidden(MagicMock(status=403, reason="Forbidden"), "Missing Permissions")


def _discord_message(message_id=1, author_id=999, content="hi", embeds=None, components=None,
                     message_type=discord.MessageType.default):
    message = MagicMock()
    message.id = message_id
    message.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    message.author.id = author_id
    message.type = message_type
    message.content = content
    message.embeds = embeds or []
    message.components = components or []
    return message


def _text_channel(messages=()):
    channel = MagicMock()
    channel.id = 500
    channel.name = "welcome"
    channel.mention = "<#500>"
    channel.guild.id = 1
    channel.guild.name = "Guild"

    async def history(**kwargs):
        for m in messages:
            yield m

    channel.history = MagicMock(side_effect=history)
    channel.send = AsyncMock(return_value=MagicMock(id=777))
    channel.delete_messages = AsyncMock()
    partial = MagicMock()
    partial.edit = AsyncMock()
    partial.delete = AsyncMock()
    channel.get_partial_message = MagicMock(return_value=partial)
    return channel, partial


class TestEmbedConversion:
    def test_round_trip(self):
        embed = Embed(
            title="T",
            description="D",
            color=0x123456,
            fields=[EmbedField("n", "v", True)],
            image="https://img",
            thumbnail="https://thumb",
            footer="faq/rules",
        )
        assert from_discord_embed(to_discord_embed(embed)) == embed

    def test_empty_parts_are_none(self):
        converted = from_discord_embed(discord.Embed(title="Only title"))
        assert converted.image is None
        assert converted.thumbnail is None
        assert converted.footer is None
        assert converted.color is None


class TestToChannelMessage:
    def test_default_message(self):
        msg = to_channel_message(_discord_message(components=[MagicMock()]))
        assert msg.id == 1
        assert msg.author_id == 999
        assert msg.is_default is True
        assert msg.has_components is True

    def test_system_message(self):
        msg = to_channel_message(_discord_message(message_type=discord.MessageType.pins_add, content=""))
        assert msg.is_default is False
        assert msg.content == ""


class TestDiscordChannel:
    @pytest.mark.asyncio
    async def test_metadata(self):
        raw, _ = _text_channel()
        channel = DiscordChannel(raw, self_id=999)
        assert channel.id == 500
        assert channel.name == "welcome"
        assert channel.mention == "<#500>"
        assert channel.self_id == 999
        assert channel.guild.name == "Guild"

    @pytest.mark.asyncio
    async def test_list_messages(self):
        raw, _ = _text_channel([_discord_message(1), _discord_message(2)])
        messages = await DiscordChannel(raw, 999).list_messages()
        assert [m.id for m in messages] == [1, 2]

    @pytest.mark.asyncio
    async def test_create_message_suppresses_mentions(self):
        raw, _ = _text_channel()
        message_id = await DiscordChannel(raw, 999).create_message(
            RenderedMessage(content="hi @everyone", embed=Embed(title="T"))
        )
        assert message_id == 777
        kwargs = raw.send.call_args.kwargs
        assert kwargs["content"] == "hi @everyone"
        assert kwargs["embed"].title == "T"
        assert kwargs["allowed_mentions"].everyone is False

    @pytest.mark.asyncio
    async def test_edit_clears_components(self):
        raw, partial = _text_channel()
        await DiscordChannel(raw, 999).edit_message(5, RenderedMessage(content="x", clear_components=True))
        raw.get_partial_message.assert_called_once_with(5)
        kwargs = partial.edit.call_args.kwargs
        assert kwargs["view"] is None
        assert kwargs["embeds"] == []

    @pytest.mark.asyncio
    async def test_edit_keeps_view_when_not_clearing(self):
        raw, partial = _text_channel()
        await DiscordChannel(raw, 999).edit_message(5, RenderedMessage(content="x"))
        assert "view" not in partial.edit.call_args.kwargs

    @pytest.mark.asyncio
    async def test_delete_not_found_is_ignorable(self):
        raw, partial = _text_channel()
        partial.delete.side_effect = _not_found()
        with pytest.raises(NotFoundIgnorable) as exc_info:
            await DiscordChannel(raw, 999).delete_message(5)
        assert exc_info.value.status == 404
        assert isinstance(exc_info.value.cause, discord.NotFound)

    @pytest.mark.asyncio
    async def test_forbidden_maps_to_platform_error(self):
        raw, partial = _text_channel()
        partial.edit.side_effect = _forbidden()
        with pytest.raises(PlatformApiError) as exc_info:
            await DiscordChannel(raw, 999).edit_message(5, RenderedMessage(content="x"))
        assert not isinstance(exc_info.value, NotFoundIgnorable)
        assert exc_info.value.status == 403

    @pytest.mark.asyncio
    async def test_bulk_delete_chunks(self):
        raw, _ = _text_channel()
        await DiscordChannel(raw, 999).bulk_delete(list(range(1, 251)))
        sizes = [len(call.args[0]) for call in raw.delete_messages.call_args_list]
        assert sizes == [100, 100, 50]

    @pytest.mark.asyncio
    async def test_find_guild_channel_is_case_insensitive(self):
        raw, _ = _text_channel()
        logs = MagicMock()
        logs.name = "Bot-Logs"
        logs.send = AsyncMock()
        other = MagicMock()
        other.name = "general"
        raw.guild.text_channels = [other, logs]

        found = await DiscordChannel(raw, 999).find_guild_channel("bot-logs")
        assert isinstance(found, DiscordLogChannel)

        await found.send(RenderedMessage(embed=Embed(title="report")))
        assert logs.send.call_args.kwargs["embed"].title == "report"

    @pytest.mark.asyncio
    async def test_find_guild_channel_missing(self):
        raw, _ = _text_channel()
        raw.guild.text_channels = []
        assert await DiscordChannel(raw, 999).find_guild_channel("bot-logs") is None
