"""Failure reporter — best-effort diagnostics to the operator's log channel."""

import sys
from enum import Enum

from channelkit.domain.models import DISCORD_RED, Embed, EmbedField, RenderedMessage
from channelkit.errors import ChannelKitError
from channelkit.ports.outbound import ChannelPort, WelcomeConfigProvider


def _log(msg: str):
    print(msg, file=sys.stderr)


_MAX_ERROR_CHARS = 3800  # embed descriptions are capped at 4096


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class Phase(Enum):
    FETCH = "Failed to update blocks"
    MESSAGES = "Failed to update messages"
    CLEAR = "Failed to clear channel"

    @property
    def title(self) -> str:
        if self is Phase.CLEAR:
            return "Failed to clear welcome channel"
        return "Welcome channel update failed"


def _describe(cause: BaseException) -> str:
    if isinstance(cause, ChannelKitError):
        return str(cause)
    return f"{type(cause).__name__}: {cause}"


def build_report(channel: ChannelPort, phase: Phase, cause: BaseException) -> RenderedMessage:
    description = "\n".join([
        f"**__{phase.value}__**",
        "",
        "```",
        _truncate(_describe(cause), _MAX_ERROR_CHARS),
        "```",
    ])
    return RenderedMessage(
        embed=Embed(
            title=phase.title,
            description=description,
            color=DISCORD_RED,
            fields=[
                EmbedField(
                    name="Channel",
                    value=f"{channel.mention} (`{channel.id}` / `{channel.name}`)",
                ),
            ],
        ),
    )


class FailureReporter:
    """Sends failure diagnostics; never raises.

    Callers re-raise the original error after ``report()`` returns.
    """

    def __init__(self, config: WelcomeConfigProvider):
        self._config = config

    async def report(self, channel: ChannelPort, phase: Phase, cause: BaseException) -> bool:
        """Return True when a diagnostic was delivered."""
        _log(f"[welcome:{channel.id}] {phase.value}: {cause}")
        try:
            destination = await self._config.get_logging_channel(channel, channel.guild)
            if destination is None:
                return False
            await destination.send(build_report(channel, phase, cause))
            return True
        except Exception as e:
            _log(f"[welcome:{channel.id}] failed to send failure report: {e}")
            return False
