"""Outbound ports — interfaces for external system adapters."""

from typing import List, Optional, Protocol, runtime_checkable

from channelkit.domain.models import RenderedMessage
from channelkit.ports.inbound import ChannelMessage, GuildInfo


@runtime_checkable
class LogDestination(Protocol):
    """A channel diagnostics can be sent to."""

    async def send(self, rendered: RenderedMessage) -> None: ...


@runtime_checkable
class ChannelPort(Protocol):
    """Interface for the chat channel a welcome channel manages.

    Implementations raise ``PlatformApiError`` on failed calls and
    ``NotFoundIgnorable`` when the target message no longer exists.
    """

    @property
    def id(self) -> int: ...

    @property
    def name(self) -> str: ...

    @property
    def mention(self) -> str: ...

    @property
    def self_id(self) -> Optional[int]: ...

    @property
    def guild(self) -> Optional[GuildInfo]: ...

    async def list_messages(self) -> List[ChannelMessage]: ...
    async def create_message(self, rendered: RenderedMessage) -> int: ...
    async def edit_message(self, message_id: int, rendered: RenderedMessage) -> None: ...
    async def delete_message(self, message_id: int) -> None: ...
    async def bulk_delete(self, message_ids: List[int]) -> None: ...
    async def find_guild_channel(self, name: str) -> Optional[LogDestination]: ...


@runtime_checkable
class DocumentTransport(Protocol):
    """Interface for downloading the block document.

    Raises ``FetchError`` for transport failures and non-2xx responses.
    """

    async def get_text(self, url: str) -> str: ...


@runtime_checkable
class WelcomeConfigProvider(Protocol):
    """Interface for per-bot welcome channel configuration."""

    def get_refresh_delay(self) -> Optional[float]: ...

    async def get_logging_channel(
        self, channel: ChannelPort, guild: Optional[GuildInfo]
    ) -> Optional[LogDestination]: ...

    def get_block_registry(self): ...
