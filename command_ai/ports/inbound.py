"""Inbound port — platform-agnostic chat event representation."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ChatEvent:
    """Game/Discord-agnostic chat message.

    ``cancel`` is set by the dispatcher when the message was consumed and
    must not propagate to normal chat.
    """

    sender_id: str
    sender_name: str
    message: str
    channel_id: Optional[int] = None
    cancel: bool = False
