"""CommandAssistant — trigger dispatch and request flow, no framework dependencies.

Handles:
- Trigger matching (query / help / quick table)
- Prompt building and the remote LLM call via LLMPort
- Reply parsing and rendering
- Paced explanation output via PacedDelivery
"""

import asyncio
import sys
from typing import Dict, Hashable, List, Optional, Sequence

from command_ai.domain.delivery import PacedDelivery
from command_ai.domain.formatting import (
    error_line,
    help_lines,
    loading_lines,
    quick_lines,
    render_reply,
    welcome_lines,
)
from command_ai.domain.models import ParsedReply, QuickCommand, TriggerMatch
from command_ai.domain.prompts import QUICK_COMMANDS, SYSTEM_PROMPT, build_prompt
from command_ai.domain.response_parser import parse_reply
from command_ai.ports.inbound import ChatEvent
from command_ai.ports.outbound import ChatSinkPort, LLMPort


def _log(msg: str):
    print(msg, file=sys.stderr)


def match_trigger(
    message: str,
    prefixes: Sequence[str],
    quick_prefixes: Sequence[str] = (),
) -> TriggerMatch:
    """Classify a chat line.

    ``<prefix><whitespace><query>`` is a query. A bare prefix (trailing
    whitespace allowed) asks for help and a bare quick prefix asks for
    the quick table. Anything else,
    including ``!cmdfoo``, does not match.
    """
    bare = message.rstrip()
    if bare in quick_prefixes:
        return TriggerMatch(kind="quick")
    for prefix in prefixes:
        if bare == prefix:
            return TriggerMatch(kind="help")
        if not message.startswith(prefix):
            continue
        rest = message[len(prefix):]
        if not rest[:1].isspace():
            continue
        query = rest.lstrip()
        if query:
            return TriggerMatch(kind="query", query=query)
    return TriggerMatch()


class CommandAssistant:
    """Pure assistant logic — testable with mock ports."""

    def __init__(
        self,
        llm: LLMPort,
        sink: ChatSinkPort,
        delivery: Optional[PacedDelivery] = None,
        prefixes: Sequence[str] = ("!cmd", "!커맨드"),
        quick_prefixes: Sequence[str] = ("!quick", "!퀵"),
        instructions: str = SYSTEM_PROMPT,
        quick_commands: Optional[Dict[str, List[QuickCommand]]] = None,
        delay: float = 0.15,
        welcome_delay: float = 0.0,
    ):
        self.llm = llm
        self.sink = sink
        self.delivery = delivery or PacedDelivery(sink, delay=delay)
        self.prefixes = tuple(prefixes)
        self.quick_prefixes = tuple(quick_prefixes)
        self.instructions = instructions
        self.quick_commands = quick_commands if quick_commands is not None else QUICK_COMMANDS
        self.welcome_delay = welcome_delay
        self._requests: set = set()

    def match(self, message: str) -> TriggerMatch:
        return match_trigger(message, self.prefixes, self.quick_prefixes)

    async def handle_chat(self, event: ChatEvent) -> bool:
        """Handle one chat event end to end.

        Sets ``event.cancel`` and returns True when the message was consumed.
        """
        trigger = self.match(event.message)
        if not trigger.matched:
            return False
        event.cancel = True

        if trigger.kind == "help":
            await self.show_help(event.sender_id)
        elif trigger.kind == "quick":
            await self.show_quick(event.sender_id)
        else:
            await self.answer(event.sender_id, trigger.query, sender_name=event.sender_name)
        return True

    def dispatch(self, event: ChatEvent) -> bool:
        """Mark the event and run the handler as a background task.

        For event sources that must decide about cancellation synchronously.
        """
        if not self.match(event.message).matched:
            return False
        self._spawn(self.handle_chat(event))
        event.cancel = True
        return True

    def schedule_greet(self, recipient_id: Hashable) -> asyncio.Task:
        return self._spawn(self.greet(recipient_id))

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._requests.add(task)
        task.add_done_callback(self._requests.discard)
        return task

    async def _send_lines(self, recipient_id: Hashable, lines: Sequence[str]):
        for line in lines:
            try:
                await self.sink.send(recipient_id, line)
            except Exception as e:
                _log(f"[CommandAI] WARN send to {recipient_id} failed: {e}")

    async def show_help(self, recipient_id: Hashable):
        await self._send_lines(recipient_id, help_lines(self.prefixes))

    async def show_quick(self, recipient_id: Hashable):
        primary = self.prefixes[0] if self.prefixes else "!cmd"
        await self._send_lines(recipient_id, quick_lines(self.quick_commands, primary))

    async def greet(self, recipient_id: Hashable):
        """Welcome banner shown when a player joins."""
        if self.welcome_delay > 0:
            await asyncio.sleep(self.welcome_delay)
        await self._send_lines(recipient_id, welcome_lines(self.prefixes))

    async def request(self, query: str) -> ParsedReply:
        """Call the LLM for one query and parse the answer."""
        raw = await self.llm.generate(build_prompt(query, self.instructions))
        return parse_reply(raw)

    async def answer(self, recipient_id: Hashable, query: str, sender_name: str = "") -> Optional[ParsedReply]:
        """Loading banner, LLM call, then commands now and explanation paced.

        Any failure is reported to the recipient as a single line and
        nothing is queued.
        """
        _log(f"[CommandAI] query from {sender_name or recipient_id}: {query[:80]}")
        await self._send_lines(recipient_id, loading_lines())
        try:
            reply = await self.request(query)
        except Exception as e:
            _log(f"[CommandAI] LLM error for {recipient_id}: {e}")
            await self._send_lines(recipient_id, [error_line(str(e))])
            return None

        rendered = render_reply(reply)
        await self._send_lines(recipient_id, rendered["immediate"])
        self.delivery.enqueue(recipient_id, rendered["paced"])
        _log(f"[CommandAI] {len(reply.commands)} command(s) sent to {recipient_id}")
        return reply

    async def wait_idle(self):
        """Wait for in-flight requests and paced output to finish."""
        while self._requests:
            await asyncio.gather(*list(self._requests), return_exceptions=True)
        await self.delivery.wait_idle()
