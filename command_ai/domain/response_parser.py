"""Fenced command extraction from LLM response text.

Pure Python, no framework dependencies. A two-state scanner walks the text
once, so the cost stays linear for any input.
"""

from typing import List, Optional

from command_ai.domain.models import ParsedReply

FENCE = "```"

# Tags recognized even when the model puts them on their own line
KNOWN_LANGUAGE_TAGS = frozenset({"minecraft", "mcfunction"})

_MAX_TAG_LENGTH = 20

_OUTSIDE = "outside-fence"
_INSIDE = "inside-fence"


def _is_tag(line: str) -> bool:
    line = line.strip()
    return (
        0 < len(line) <= _MAX_TAG_LENGTH
        and line.isascii()
        and line.isalpha()
    )


def strip_language_tag(body: str, on_fence_line: bool = True) -> str:
    """Drop a bare language tag line from a trimmed fence body.

    A tag written directly after the opening fence (```mcfunction) is
    always dropped. A lone word on the first line of the body only counts
    as a tag when it is a known one, so a one-word command such as
    ``kill`` survives.
    """
    first, sep, rest = body.partition("\n")
    if not sep:
        return body
    if not _is_tag(first):
        return body
    if on_fence_line or first.strip().lower() in KNOWN_LANGUAGE_TAGS:
        return rest
    return body


def _clean_block(raw_body: str) -> str:
    body = raw_body.strip()
    on_fence_line = bool(raw_body) and not raw_body[0].isspace()
    return strip_language_tag(body, on_fence_line=on_fence_line)


def parse_reply(raw: Optional[str]) -> ParsedReply:
    """Split raw response text into command blocks and explanation.

    Never raises. An opening fence with no closer is left in the
    explanation untouched.
    """
    text = raw or ""
    commands: List[str] = []
    outside: List[str] = []

    state = _OUTSIDE
    pos = 0
    opener = 0
    while True:
        if state == _OUTSIDE:
            start = text.find(FENCE, pos)
            if start < 0:
                outside.append(text[pos:])
                break
            outside.append(text[pos:start])
            opener = start
            pos = start + len(FENCE)
            state = _INSIDE
        else:
            end = text.find(FENCE, pos)
            if end < 0:
                # Unterminated fence: keep it as prose
                outside.append(text[opener:])
                break
            commands.append(_clean_block(text[pos:end]))
            pos = end + len(FENCE)
            state = _OUTSIDE

    return ParsedReply(commands=commands, explanation="".join(outside).strip())


def parse_commands(raw: Optional[str]) -> List[str]:
    """Extract only the command blocks."""
    return parse_reply(raw).commands


def strip_commands(raw: Optional[str]) -> str:
    """Remove all fenced blocks, returning the trimmed prose."""
    return parse_reply(raw).explanation


def explanation_lines(explanation: str) -> List[str]:
    """Non-blank explanation lines, each trimmed."""
    return [line.strip() for line in explanation.split("\n") if line.strip()]
