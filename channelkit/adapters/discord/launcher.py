"""Launcher — runs the welcome bot and the trigger API together."""

import asyncio
import sys

import uvicorn

from channelkit.adapters.discord.bot import WelcomeBot
from channelkit.adapters.http.document_client import DocumentClient
from channelkit.adapters.web.server import app
from channelkit.adapters.web.welcome_routes import registry
from channelkit.config import AppConfig, SimpleWelcomeConfig


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_bot(config: AppConfig) -> WelcomeBot:
    return WelcomeBot(
        channels=config.welcome.channels,
        config=SimpleWelcomeConfig.from_settings(config.welcome),
        registry=registry,
        transport=DocumentClient(timeout=config.welcome.http_timeout),
    )


async def launch():
    config = AppConfig.from_env()
    if not config.discord_token:
        _log("DISCORD_TOKEN not set — nothing to launch.")
        return
    if not config.welcome.channels:
        _log("WELCOME_CHANNELS is empty — the bot will start without welcome channels.")

    bot = build_bot(config)
    server = uvicorn.Server(uvicorn.Config(app, host="0.0.0.0", port=config.port, log_level="info"))

    refresh = config.welcome.refresh_seconds
    _log(f"Launching welcome bot (refresh={'off' if refresh is None else f'{refresh:g}s'})")
    try:
        await asyncio.gather(bot.start(config.discord_token), server.serve())
    finally:
        if not bot.is_closed():
            await bot.close()


if __name__ == "__main__":
    asyncio.run(launch())
