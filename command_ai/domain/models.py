"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ParsedReply:
    """Commands and leftover prose extracted from one LLM response."""

    commands: List[str] = field(default_factory=list)
    explanation: str = ""


@dataclass
class Prompt:
    """Fixed instructions plus one user query. Built per request."""

    instructions: str
    query: str

    @property
    def text(self) -> str:
        return f"{self.instructions}\n\n사용자 요청: {self.query}"


@dataclass
class TriggerMatch:
    """Result of matching a chat line against the trigger prefixes."""

    kind: Optional[str] = None  # "query" | "help" | "quick" | None
    query: str = ""

    @property
    def matched(self) -> bool:
        return self.kind is not None


@dataclass
class QuickCommand:
    query: str
    desc: str
