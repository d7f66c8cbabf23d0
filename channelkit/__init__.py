"""channelkit — welcome channel sync, tags and log retrieval for Discord bots."""

from channelkit.config import CONFIG, AppConfig, SimpleWelcomeConfig
from channelkit.domain.blocks import Block, BlockRegistry, EmbedBlock, LinksBlock, TextBlock, default_registry
from channelkit.domain.catalog import BlockCatalog
from channelkit.domain.logs import LogRetriever, Order, PastebinRetriever, retrieve_logs
from channelkit.domain.scheduler import Scheduler, Task
from channelkit.domain.tags import InMemoryTagStore, SimpleTagsConfig, Tag
from channelkit.domain.welcome import WelcomeChannel, WelcomeRegistry
from channelkit.errors import (
    BlockValidationError,
    ChannelKitError,
    FetchError,
    NotFoundIgnorable,
    ParseError,
    PlatformApiError,
)

__all__ = [
    "CONFIG",
    "AppConfig",
    "SimpleWelcomeConfig",
    "Block",
    "BlockRegistry",
    "EmbedBlock",
    "LinksBlock",
    "TextBlock",
    "default_registry",
    "BlockCatalog",
    "LogRetriever",
    "Order",
    "PastebinRetriever",
    "retrieve_logs",
    "Scheduler",
    "Task",
    "InMemoryTagStore",
    "SimpleTagsConfig",
    "Tag",
    "WelcomeChannel",
    "WelcomeRegistry",
    "BlockValidationError",
    "ChannelKitError",
    "FetchError",
    "NotFoundIgnorable",
    "ParseError",
    "PlatformApiError",
]
