"""Discord client that runs welcome channels.

Builds one WelcomeChannel per configured channel once the gateway is
ready, forwards interactions to them and shuts them down on close.
"""

import asyncio
import sys
from typing import Dict, Optional, Set

import discord

from channelkit.adapters.discord.channel import DiscordChannel
from channelkit.adapters.http.document_client import DocumentClient
from channelkit.config import SimpleWelcomeConfig
from channelkit.domain.catalog import BlockCatalog
from channelkit.domain.welcome import WelcomeChannel, WelcomeRegistry
from channelkit.ports.outbound import DocumentTransport


def _log(msg: str):
    print(msg, file=sys.stderr)


class WelcomeBot(discord.Client):
    """discord.Client keeping the configured welcome channels in sync."""

    def __init__(
        self,
        channels: Dict[int, str],
        config: SimpleWelcomeConfig,
        registry: Optional[WelcomeRegistry] = None,
        transport: Optional[DocumentTransport] = None,
        **discord_kwargs,
    ):
        intents = discord.Intents.default()
        super().__init__(intents=intents, **discord_kwargs)
        self._channel_urls = dict(channels)
        self._config = config
        self.registry = registry if registry is not None else WelcomeRegistry()
        self._catalog = BlockCatalog(transport or DocumentClient(), config.get_block_registry())
        self._setup_tasks: Set[asyncio.Task] = set()

    async def on_ready(self):
        _log(f"[welcome] logged in as {self.user}, {len(self._channel_urls)} welcome channel(s) configured")
        for channel_id, url in self._channel_urls.items():
            if channel_id in self.registry:
                continue
            welcome = self.build_welcome_channel(channel_id, url)
            if welcome is None:
                continue
            self.registry.add(welcome)
            task = asyncio.create_task(self._run_setup(welcome))
            self._setup_tasks.add(task)
            task.add_done_callback(self._setup_tasks.discard)

    def build_welcome_channel(self, channel_id: int, url: str) -> Optional[WelcomeChannel]:
        channel = self.get_channel(channel_id)
        if not isinstance(channel, discord.TextChannel):
            _log(f"[welcome] channel {channel_id} not found or not a text channel — skipping")
            return None
        return WelcomeChannel(
            DiscordChannel(channel, self.user.id if self.user else None),
            url,
            self._config,
            self._catalog,
        )

    async def _run_setup(self, welcome: WelcomeChannel):
        try:
            await welcome.setup()
        except Exception as e:
            _log(f"[welcome:{welcome.channel.id}] setup failed: {e}")

    async def on_interaction(self, interaction: discord.Interaction):
        welcome = self.registry.get(interaction.channel_id) if interaction.channel_id else None
        if welcome is None:
            return
        try:
            await welcome.handle_interaction(interaction)
        except Exception as e:
            _log(f"[welcome:{welcome.channel.id}] interaction failed: {e}")

    async def close(self):
        self.registry.shutdown_all()
        await super().close()
