"""Discord adapter — bridges discord.Client to CommandAssistant.

A Discord channel stands in for the in-game chat: triggers typed there
are answered in the same channel, with Minecraft color codes removed.
"""

import sys
from typing import Dict, Hashable, Iterable, Optional

import discord

from command_ai.domain.assistant import CommandAssistant
from command_ai.domain.formatting import strip_color_codes
from command_ai.ports.inbound import ChatEvent


def _log(msg: str):
    print(msg, file=sys.stderr)


class DiscordChatSink:
    """ChatSinkPort implementation that routes a recipient to a channel."""

    _LIMIT = 2000

    def __init__(self, client: discord.Client):
        self._client = client
        self._routes: Dict[str, int] = {}

    def route(self, recipient_id: Hashable, channel_id: int):
        """Remember the channel a recipient last wrote in."""
        self._routes[str(recipient_id)] = channel_id

    def channel_for(self, recipient_id: Hashable) -> Optional[int]:
        return self._routes.get(str(recipient_id))

    async def send(self, recipient_id: Hashable, text: str) -> None:
        channel_id = self.channel_for(recipient_id)
        if channel_id is None:
            raise LookupError(f"no channel known for recipient {recipient_id}")
        channel = self._client.get_channel(channel_id)
        if channel is None:
            raise LookupError(f"channel {channel_id} not found")
        text = strip_color_codes(text)
        if not text.strip():
            return
        # Split long messages
        while text:
            await channel.send(text[:self._LIMIT])
            text = text[self._LIMIT:]


class DiscordBotAdapter(discord.Client):
    """Thin Discord client that feeds chat messages to CommandAssistant.

    Build the assistant with ``adapter.sink`` as its sink before starting.
    """

    def __init__(self, channel_ids: Optional[Iterable[int]] = None, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        # Privileged: enable "Server Members Intent" in the developer portal
        intents.members = True
        super().__init__(intents=intents, **discord_kwargs)
        self._channel_ids = set(channel_ids or [])
        self.sink = DiscordChatSink(self)
        self.assistant: Optional[CommandAssistant] = None

    def attach(self, assistant: CommandAssistant):
        self.assistant = assistant

    def _to_event(self, message: discord.Message) -> ChatEvent:
        """Convert a Discord message to a platform-agnostic ChatEvent."""
        return ChatEvent(
            sender_id=str(message.author.id),
            sender_name=str(message.author),
            message=message.content,
            channel_id=message.channel.id,
        )

    def accepts(self, message: discord.Message) -> bool:
        if not self.user or message.author == self.user or message.author.bot:
            return False
        return not self._channel_ids or message.channel.id in self._channel_ids

    async def on_ready(self):
        _log(f"[CommandAI] logged in as {self.user}")

    async def on_message(self, message: discord.Message):
        if self.assistant is None or not self.accepts(message):
            return
        event = self._to_event(message)
        if not self.assistant.match(event.message).matched:
            return
        self.sink.route(event.sender_id, event.channel_id)
        await self.assistant.handle_chat(event)

    async def on_member_join(self, member: discord.Member):
        if self.assistant is None or not self._channel_ids:
            return
        self.sink.route(str(member.id), next(iter(sorted(self._channel_ids))))
        self.assistant.schedule_greet(str(member.id))
