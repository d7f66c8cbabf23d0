"""Welcome channel — keeps a channel's bot messages in sync with a remote block document.

One ``WelcomeChannel`` per channel. Each instance owns its block list,
message mapping, refresh task and lock; instances share nothing.
"""

import asyncio
import sys
from typing import Dict, List, Mapping, Optional

from channelkit.domain.blocks import Block
from channelkit.domain.catalog import BlockCatalog
from channelkit.domain.reconciler import MessageReconciler, ReconcileResult
from channelkit.domain.reporter import FailureReporter, Phase
from channelkit.domain.scheduler import Scheduler, Task
from channelkit.errors import NotFoundIgnorable, PlatformApiError
from channelkit.ports.outbound import ChannelPort, WelcomeConfigProvider


def _log(msg: str):
    print(msg, file=sys.stderr)


class WelcomeChannel:
    """Reconciles ``channel`` against the blocks published at ``url``.

    Manual ``populate()`` calls and timer-driven ones serialize on the
    same lock: entering a pass disarms the refresh timer and it is only
    re-armed once the pass has settled, successfully or not.
    """

    def __init__(
        self,
        channel: ChannelPort,
        url: str,
        config: WelcomeConfigProvider,
        catalog: BlockCatalog,
        scheduler: Optional[Scheduler] = None,
    ):
        self.channel = channel
        self.url = url
        self._config = config
        self._catalog = catalog
        self.scheduler = scheduler or Scheduler()
        self._reporter = FailureReporter(config)
        self._reconciler = MessageReconciler(channel)
        self._blocks: List[Block] = []
        self._mapping: Dict[int, Block] = {}
        self._task: Optional[Task] = None
        self._lock = asyncio.Lock()
        self.last_result: Optional[ReconcileResult] = None

    @property
    def task(self) -> Optional[Task]:
        return self._task

    @property
    def mapping(self) -> Mapping[int, Block]:
        return dict(self._mapping)

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def get_blocks(self) -> List[Block]:
        return list(self._blocks)

    async def handle_interaction(self, event) -> None:
        for block in self._blocks:
            await block.handle_interaction(event)

    async def setup(self) -> None:
        """(Re)create the refresh task, run a pass immediately, then arm the task."""
        delay = self._config.get_refresh_delay()

        if self.scheduler.is_shutdown:
            self.scheduler = Scheduler()

        if self._task is not None:
            self.scheduler.remove(self._task)
            self._task = None

        if delay is not None:
            self._task = self.scheduler.schedule(
                delay, self.populate, start_now=False, name=f"welcome:{self.channel.id}"
            )

        try:
            await self.populate()
        finally:
            if self._task is not None:
                self._task.start()

    def shutdown(self) -> None:
        if self._task is not None:
            self._task.cancel()
        self.scheduler.shutdown()

    async def populate(self) -> ReconcileResult:
        """Run one fetch + diff + apply pass."""
        async with self._lock:
            if self._task is not None:
                self._task.cancel()
            try:
                return await self._populate()
            finally:
                if self._task is not None:
                    self._task.start()

    async def _populate(self) -> ReconcileResult:
        guild = self.channel.guild

        try:
            blocks = await self._catalog.fetch(self.url)
        except Exception as e:
            await self._reporter.report(self.channel, Phase.FETCH, e)
            raise

        self._blocks = list(blocks)
        for block in self._blocks:
            block.attach(self.channel, guild)

        # Rebuilt from the live messages on every pass.
        mapping: Dict[int, Block] = {}
        try:
            messages = await self.channel.list_messages()
            result = await self._reconciler.reconcile(messages, self._blocks, mapping)
        except Exception as e:
            self._mapping = mapping
            await self._reporter.report(self.channel, Phase.MESSAGES, e)
            raise

        self._mapping = mapping
        self.last_result = result
        _log(f"[welcome:{self.channel.id}] populate: {result.summary()}")
        return result

    async def clear(self) -> int:
        """Delete every default-type message in the channel. Returns the number targeted."""
        async with self._lock:
            messages = [m for m in await self.channel.list_messages() if m.is_default]
            if not messages:
                return 0

            ids = [m.id for m in messages]
            try:
                await self.channel.bulk_delete(ids)
            except NotFoundIgnorable:
                pass
            except PlatformApiError as bulk_error:
                _log(f"[welcome:{self.channel.id}] bulk delete rejected ({bulk_error.message}), deleting one by one")
                try:
                    for message_id in ids:
                        try:
                            await self.channel.delete_message(message_id)
                        except NotFoundIgnorable:
                            pass
                except Exception as e:
                    await self._reporter.report(self.channel, Phase.CLEAR, e)
                    raise

            for message_id in ids:
                self._mapping.pop(message_id, None)
            _log(f"[welcome:{self.channel.id}] cleared {len(ids)} message(s)")
            return len(ids)


class WelcomeRegistry:
    """Live welcome channels keyed by channel id."""

    def __init__(self):
        self._channels: Dict[int, WelcomeChannel] = {}

    def add(self, welcome: WelcomeChannel) -> None:
        existing = self._channels.get(welcome.channel.id)
        if existing is not None and existing is not welcome:
            existing.shutdown()
        self._channels[welcome.channel.id] = welcome

    def get(self, channel_id: int) -> Optional[WelcomeChannel]:
        return self._channels.get(channel_id)

    def remove(self, channel_id: int) -> Optional[WelcomeChannel]:
        welcome = self._channels.pop(channel_id, None)
        if welcome is not None:
            welcome.shutdown()
        return welcome

    def all(self) -> List[WelcomeChannel]:
        return list(self._channels.values())

    def __contains__(self, channel_id: int) -> bool:
        return channel_id in self._channels

    def __len__(self) -> int:
        return len(self._channels)

    def shutdown_all(self) -> None:
        for welcome in self._channels.values():
            welcome.shutdown()
        self._channels.clear()
