"""Launcher for the web relay or the Discord bridge."""

import argparse
import asyncio
import sys
from dataclasses import asdict
from typing import List, Optional

from command_ai.config import AppConfig


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_discord_bot(config: AppConfig):
    """Wire a Discord client, Gemini adapter and CommandAssistant together."""
    from command_ai.adapters.discord.adapter import DiscordBotAdapter
    from command_ai.adapters.llm.gemini_adapter import GeminiAdapter
    from command_ai.domain.assistant import CommandAssistant
    from command_ai.infrastructure.usage import UsageTracker

    bot = DiscordBotAdapter(channel_ids=config.discord.channel_ids)
    tracker = UsageTracker(usage_file=config.usage_file, limits=asdict(config.usage_limits))
    bot.attach(CommandAssistant(
        llm=GeminiAdapter(config.gemini, usage_tracker=tracker),
        sink=bot.sink,
        prefixes=config.triggers.prefixes,
        quick_prefixes=config.triggers.quick_prefixes,
        delay=config.delivery.delay_seconds,
        welcome_delay=config.delivery.welcome_delay_seconds,
    ))
    return bot


async def launch_discord(config: AppConfig):
    if not config.discord.token:
        _log("Discord bot not configured (set DISCORD_BOT_TOKEN in .env)")
        return
    if not config.gemini.is_configured:
        _log("GEMINI_API_KEY not set — every query will fail")
    bot = build_discord_bot(config)
    _log("Starting Discord bridge...")
    async with bot:
        await bot.start(config.discord.token)


def run_web(config: AppConfig, host: str = "0.0.0.0"):
    import uvicorn

    from command_ai.adapters.web.server import app

    uvicorn.run(app, host=host, port=config.port, log_level="info")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="command_ai", description="Chat command AI bridge")
    parser.add_argument("mode", nargs="?", choices=("web", "discord"), default="web")
    parser.add_argument("--host", default="0.0.0.0")
    args = parser.parse_args(argv)

    config = AppConfig.from_env()
    if args.mode == "discord":
        asyncio.run(launch_discord(config))
    else:
        run_web(config, host=args.host)
    return 0
