"""Command AI — chat-command bridge from game chat to Gemini."""

__version__ = "0.1.0"

from command_ai.domain.models import ParsedReply, Prompt
from command_ai.domain.response_parser import parse_reply
from command_ai.domain.delivery import PacedDelivery
from command_ai.domain.assistant import CommandAssistant, match_trigger

__all__ = [
    "ParsedReply",
    "Prompt",
    "parse_reply",
    "PacedDelivery",
    "CommandAssistant",
    "match_trigger",
]
