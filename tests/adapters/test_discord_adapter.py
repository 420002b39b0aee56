"""Tests for the Discord adapter — ChatEvent conversion and channel sink."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import pytest

from command_ai.adapters.discord.adapter import DiscordBotAdapter, DiscordChatSink
from command_ai.domain.assistant import CommandAssistant
from command_ai.ports.inbound import ChatEvent


class FakeChannel:
    def __init__(self, channel_id):
        self.id = channel_id
        self.sent = []

    async def send(self, text):
        self.sent.append(text)


class FakeClient:
    def __init__(self, channels):
        self._channels = {c.id: c for c in channels}

    def get_channel(self, channel_id):
        return self._channels.get(channel_id)


def _message(content, author_id=1, bot=False, channel_id=100):
    author = SimpleNamespace(id=author_id, bot=bot)
    return SimpleNamespace(
        content=content,
        author=author,
        channel=SimpleNamespace(id=channel_id),
    )


class TestChatEvent:
    def test_defaults(self):
        event = ChatEvent(sender_id="1", sender_name="Steve", message="!cmd hi")
        assert event.cancel is False
        assert event.channel_id is None


class TestDiscordChatSink:
    @pytest.mark.asyncio
    async def test_routes_and_strips_colors(self):
        channel = FakeChannel(100)
        sink = DiscordChatSink(FakeClient([channel]))
        sink.route("1", 100)
        await sink.send("1", "§71.§r §e/give @s apple§r")
        assert channel.sent == ["1. /give @s apple"]

    @pytest.mark.asyncio
    async def test_blank_lines_skipped(self):
        channel = FakeChannel(100)
        sink = DiscordChatSink(FakeClient([channel]))
        sink.route(1, 100)
        await sink.send(1, "")
        await sink.send(1, "§r")
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_long_text_split(self):
        channel = FakeChannel(100)
        sink = DiscordChatSink(FakeClient([channel]))
        sink.route("1", 100)
        await sink.send("1", "a" * 4500)
        assert [len(c) for c in channel.sent] == [2000, 2000, 500]

    @pytest.mark.asyncio
    async def test_unknown_recipient_raises(self):
        sink = DiscordChatSink(FakeClient([]))
        with pytest.raises(LookupError):
            await sink.send("nobody", "hi")

    @pytest.mark.asyncio
    async def test_missing_channel_raises(self):
        sink = DiscordChatSink(FakeClient([]))
        sink.route("1", 999)
        with pytest.raises(LookupError):
            await sink.send("1", "hi")


class TestDiscordBotAdapter:
    def test_intents_cover_messages_and_member_joins(self):
        bot = DiscordBotAdapter(channel_ids=[1])
        assert bot.intents.message_content is True
        assert bot.intents.members is True

    @pytest.mark.asyncio
    async def test_member_join_schedules_greeting(self):
        bot = DiscordBotAdapter(channel_ids=[200, 100])
        assistant = CommandAssistant(llm=AsyncMock(), sink=bot.sink, delay=0)
        assistant.schedule_greet = MagicMock()
        bot.attach(assistant)
        await bot.on_member_join(SimpleNamespace(id=9))
        assert bot.sink.channel_for("9") == 100
        assistant.schedule_greet.assert_called_once_with("9")

    def test_to_event(self):
        bot = DiscordBotAdapter()
        event = bot._to_event(_message("!cmd 비 오게", author_id=42, channel_id=7))
        assert event.sender_id == "42"
        assert event.message == "!cmd 비 오게"
        assert event.channel_id == 7

    def test_accepts_filters_bots_and_channels(self):
        bot = DiscordBotAdapter(channel_ids=[100])
        me = SimpleNamespace(id=0)
        with patch.object(DiscordBotAdapter, "user", new_callable=PropertyMock, return_value=me):
            assert bot.accepts(_message("!cmd x", channel_id=100)) is True
            assert bot.accepts(_message("!cmd x", channel_id=200)) is False
            assert bot.accepts(_message("!cmd x", bot=True)) is False

    def test_accepts_nothing_before_login(self):
        bot = DiscordBotAdapter()
        assert bot.accepts(_message("!cmd x")) is False

    @pytest.mark.asyncio
    async def test_on_message_routes_then_handles(self):
        bot = DiscordBotAdapter()
        assistant = CommandAssistant(llm=AsyncMock(), sink=bot.sink, delay=0)
        assistant.handle_chat = AsyncMock(return_value=True)
        bot.attach(assistant)
        me = SimpleNamespace(id=0)
        with patch.object(DiscordBotAdapter, "user", new_callable=PropertyMock, return_value=me):
            await bot.on_message(_message("!cmd 정오", author_id=5, channel_id=300))
            await bot.on_message(_message("just chatting", author_id=6, channel_id=300))
        assert bot.sink.channel_for("5") == 300
        assert bot.sink.channel_for("6") is None
        assistant.handle_chat.assert_awaited_once()
