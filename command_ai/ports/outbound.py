"""Outbound ports — interfaces for external system adapters."""

from typing import Hashable, Protocol, runtime_checkable

from command_ai.domain.models import Prompt


@runtime_checkable
class LLMPort(Protocol):
    """Interface for the remote text generation service."""

    @property
    def is_configured(self) -> bool: ...

    async def generate(self, prompt: Prompt) -> str: ...


@runtime_checkable
class ChatSinkPort(Protocol):
    """Interface for sending one line of chat text to one recipient."""

    async def send(self, recipient_id: Hashable, text: str) -> None: ...

