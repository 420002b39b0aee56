"""Domain layer — pure Python, no framework dependencies."""

from command_ai.domain.models import ParsedReply, Prompt, QuickCommand, TriggerMatch
from command_ai.domain.response_parser import parse_reply, parse_commands, strip_commands

__all__ = [
    "ParsedReply",
    "Prompt",
    "QuickCommand",
    "TriggerMatch",
    "parse_reply",
    "parse_commands",
    "strip_commands",
]
