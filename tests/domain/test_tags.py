"""Tests for domain/tags.py — tag config and in-memory store."""

import pytest

from channelkit.domain.tags import (
    InMemoryTagStore,
    SimpleTagsConfig,
    Tag,
    default_tag_formatter,
)

from fakes import FakeChannel, FakeLogChannel


def _tag(key, guild_id=None, category="faq", title=None):
    return Tag(category=category, key=key, title=title or key.title(), description=f"About {key}", guild_id=guild_id)


class TestDefaultFormatter:
    def test_footer_shows_category_and_key(self):
        rendered = default_tag_formatter(_tag("install"))
        assert rendered.embed.title == "Install"
        assert rendered.embed.description == "About install"
        assert rendered.embed.footer == "faq/install"


class TestSimpleTagsConfig:
    def test_checks_register_as_decorators(self):
        config = SimpleTagsConfig()

        @config.user_command_check
        def is_member(ctx):
            return True

        @config.staff_command_check
        def is_staff(ctx):
            return False

        assert config.get_user_command_checks() == [is_member]
        assert config.get_staff_command_checks() == [is_staff]
        assert is_member(None) is True

    def test_custom_formatter(self):
        formatter = lambda tag: None  # noqa: E731
        assert SimpleTagsConfig(tag_formatter=formatter).get_tag_formatter() is formatter

    def test_default_formatter(self):
        assert SimpleTagsConfig().get_tag_formatter() is default_tag_formatter

    @pytest.mark.asyncio
    async def test_logging_channel_resolved_by_name(self):
        channel = FakeChannel()
        log = FakeLogChannel()
        channel.log_channels["tag-logs"] = log
        config = SimpleTagsConfig(logging_channel_name="tag-logs")

        assert await config.get_logging_channel_or_none(channel) is log

    @pytest.mark.asyncio
    async def test_logging_channel_unset(self):
        assert await SimpleTagsConfig().get_logging_channel_or_none(FakeChannel()) is None


class TestInMemoryTagStore:
    def test_global_tag(self):
        store = InMemoryTagStore()
        store.set_tag(_tag("rules"))
        assert store.get_tag("rules").key == "rules"
        assert store.get_tag("rules", guild_id=5).key == "rules"

    def test_guild_tag_shadows_global(self):
        store = InMemoryTagStore()
        store.set_tag(_tag("rules", title="Global"))
        store.set_tag(_tag("rules", guild_id=5, title="Local"))

        assert store.get_tag("rules", guild_id=5).title == "Local"
        assert store.get_tag("rules", guild_id=6).title == "Global"
        assert store.get_tag("rules").title == "Global"

    def test_missing(self):
        assert InMemoryTagStore().get_tag("nope") is None

    def test_delete(self):
        store = InMemoryTagStore()
        store.set_tag(_tag("rules", guild_id=5))
        assert store.delete_tag("rules") is False
        assert store.delete_tag("rules", guild_id=5) is True
        assert store.get_tag("rules", guild_id=5) is None

    def test_find_tags(self):
        store = InMemoryTagStore()
        store.set_tag(_tag("zeta"))
        store.set_tag(_tag("alpha", guild_id=5))
        store.set_tag(_tag("beta", guild_id=6))
        store.set_tag(_tag("mods", category="staff"))

        assert [t.key for t in store.find_tags(guild_id=5)] == ["alpha", "mods", "zeta"]
        assert [t.key for t in store.find_tags(category="faq", guild_id=5)] == ["alpha", "zeta"]
        assert [t.key for t in store.find_tags()] == ["mods", "zeta"]
