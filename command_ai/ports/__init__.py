"""Port interfaces (Hexagonal Architecture)."""

from command_ai.ports.inbound import ChatEvent
from command_ai.ports.outbound import ChatSinkPort, LLMPort

__all__ = [
    "ChatEvent",
    "ChatSinkPort",
    "LLMPort",
]
