"""Tests for the typed AppConfig dataclass and env parsing helpers."""

import pytest

from channelkit.config import (
    AppConfig,
    SimpleWelcomeConfig,
    TagsSettings,
    WelcomeSettings,
    _parse_refresh_seconds,
    parse_channel_map,
)


class TestWelcomeSettings:
    def test_defaults(self):
        c = WelcomeSettings()
        assert c.refresh_seconds == 600.0
        assert c.http_timeout == 30.0
        assert c.log_channel_name is None
        assert c.channels == {}


class TestAppConfig:
    def test_defaults(self):
        c = AppConfig()
        assert c.port == 3000
        assert c.discord_token == ""
        assert isinstance(c.welcome, WelcomeSettings)
        assert isinstance(c.tags, TagsSettings)

    def test_from_env(self):
        c = AppConfig.from_env()
        assert isinstance(c.welcome.channels, dict)
        assert c.welcome.http_timeout > 0

    def test_from_env_copies_channel_map(self):
        c1 = AppConfig.from_env()
        c2 = AppConfig.from_env()
        assert c1.welcome.channels is not c2.welcome.channels


class TestParseRefreshSeconds:
    @pytest.mark.parametrize("raw", ["", "0", "off", "None", "disabled", "-5", "abc"])
    def test_disabled(self, raw):
        assert _parse_refresh_seconds(raw) is None

    def test_seconds(self):
        assert _parse_refresh_seconds("90") == 90.0
        assert _parse_refresh_seconds(" 1.5 ") == 1.5


class TestParseChannelMap:
    def test_pairs(self):
        raw = "123=https://a.example/w.yml, 456=https://b.example/w.yml"
        assert parse_channel_map(raw) == {
            123: "https://a.example/w.yml",
            456: "https://b.example/w.yml",
        }

    def test_url_may_contain_equals(self):
        assert parse_channel_map("1=https://x/?a=b") == {1: "https://x/?a=b"}

    def test_malformed_entries_skipped(self):
        assert parse_channel_map("abc=https://x,2,3=,4=https://y") == {4: "https://y"}

    def test_empty(self):
        assert parse_channel_map("") == {}


class TestSimpleWelcomeConfig:
    def test_from_settings(self):
        config = SimpleWelcomeConfig.from_settings(WelcomeSettings(refresh_seconds=None, log_channel_name="logs"))
        assert config.get_refresh_delay() is None
        assert config.log_channel_name == "logs"
        assert config.get_block_registry().get("links") is not None
