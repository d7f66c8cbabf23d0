"""Port interfaces (Hexagonal Architecture)."""

from channelkit.ports.inbound import ChannelMessage, GuildInfo
from channelkit.ports.outbound import (
    ChannelPort,
    DocumentTransport,
    LogDestination,
    WelcomeConfigProvider,
)

__all__ = [
    "ChannelMessage",
    "GuildInfo",
    "ChannelPort",
    "DocumentTransport",
    "LogDestination",
    "WelcomeConfigProvider",
]
