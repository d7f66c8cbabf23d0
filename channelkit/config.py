"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

_DISABLED_VALUES = ("", "0", "off", "none", "disabled")


def _parse_refresh_seconds(raw: str) -> Optional[float]:
    """Parse WELCOME_REFRESH_SECONDS; disabled values map to None."""
    value = raw.strip().lower()
    if value in _DISABLED_VALUES:
        return None
    try:
        seconds = float(value)
    except ValueError:
        _stderr_print(f"Invalid WELCOME_REFRESH_SECONDS={raw!r}, refresh disabled")
        return None
    return seconds if seconds > 0 else None


def _parse_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


def parse_channel_map(raw: str) -> Dict[int, str]:
    """Parse ``<channel_id>=<url>`` pairs separated by commas."""
    channels: Dict[int, str] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        channel_id, sep, url = pair.partition("=")
        if not sep or not url.strip():
            _stderr_print(f"Ignoring malformed WELCOME_CHANNELS entry: {pair!r}")
            continue
        try:
            channels[int(channel_id.strip())] = url.strip()
        except ValueError:
            _stderr_print(f"Ignoring WELCOME_CHANNELS entry with bad channel id: {pair!r}")
    return channels


CONFIG = {
    "port": int(os.getenv("PORT", "3000")),
    "discord_token": os.getenv("DISCORD_TOKEN", ""),
    # Welcome channels
    "welcome_refresh_seconds": _parse_refresh_seconds(os.getenv("WELCOME_REFRESH_SECONDS", "600")),
    "welcome_http_timeout": _parse_float("WELCOME_HTTP_TIMEOUT", 30.0),
    "welcome_log_channel": os.getenv("WELCOME_LOG_CHANNEL", "").strip() or None,
    "welcome_channels": parse_channel_map(os.getenv("WELCOME_CHANNELS", "")),
    # Tags
    "tags_log_channel": os.getenv("TAGS_LOG_CHANNEL", "").strip() or None,
}


# ── Typed config ──────────────────────────────────────


@dataclass
class WelcomeSettings:
    refresh_seconds: Optional[float] = 600.0  # None disables periodic refresh
    http_timeout: float = 30.0
    log_channel_name: Optional[str] = None
    channels: Dict[int, str] = field(default_factory=dict)


@dataclass
class TagsSettings:
    log_channel_name: Optional[str] = None


@dataclass
class AppConfig:
    """Typed configuration built from the environment."""

    port: int = 3000
    discord_token: str = ""
    welcome: WelcomeSettings = field(default_factory=WelcomeSettings)
    tags: TagsSettings = field(default_factory=TagsSettings)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=CONFIG["port"],
            discord_token=CONFIG["discord_token"],
            welcome=WelcomeSettings(
                refresh_seconds=CONFIG["welcome_refresh_seconds"],
                http_timeout=CONFIG["welcome_http_timeout"],
                log_channel_name=CONFIG["welcome_log_channel"],
                channels=dict(CONFIG["welcome_channels"]),
            ),
            tags=TagsSettings(log_channel_name=CONFIG["tags_log_channel"]),
        )


class SimpleWelcomeConfig:
    """In-memory welcome channel config provider.

    Resolves the logging channel by (case-insensitive) name among the
    channels of the welcome channel's guild.
    """

    def __init__(
        self,
        refresh_seconds: Optional[float] = 600.0,
        log_channel_name: Optional[str] = None,
        registry=None,
    ):
        from channelkit.domain.blocks import default_registry

        self.refresh_seconds = refresh_seconds
        self.log_channel_name = log_channel_name
        self._registry = registry or default_registry()

    @classmethod
    def from_settings(cls, settings: WelcomeSettings) -> "SimpleWelcomeConfig":
        return cls(
            refresh_seconds=settings.refresh_seconds,
            log_channel_name=settings.log_channel_name,
        )

    def get_refresh_delay(self) -> Optional[float]:
        return self.refresh_seconds

    async def get_logging_channel(self, channel, guild):
        if not self.log_channel_name:
            return None
        return await channel.find_guild_channel(self.log_channel_name)

    def get_block_registry(self):
        return self._registry
