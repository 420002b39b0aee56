"""Chat line rendering with Minecraft color markers.

Every function returns plain lists of lines; adapters decide how to send
them. Non-Minecraft surfaces call ``strip_color_codes`` first.
"""

import re
from typing import Dict, List, Sequence

from command_ai.domain.models import ParsedReply, QuickCommand
from command_ai.domain.prompts import HELP_EXAMPLES
from command_ai.domain.response_parser import explanation_lines

RULE = "§e━━━━━━━━━━━━━━━━━━━━━━"
TITLE = "§6[커맨드 AI]§r"

_COLOR_RE = re.compile(r"§[0-9a-fk-or]", re.IGNORECASE)


def strip_color_codes(text: str) -> str:
    """Remove § formatting codes."""
    return _COLOR_RE.sub("", text)


def loading_lines() -> List[str]:
    return [RULE, f"{TITLE} 커맨드 생성 중...", RULE]


def error_line(message: str) -> str:
    return f"§c[오류]§r AI 응답을 가져올 수 없습니다: §c{message}§r"


def header_lines() -> List[str]:
    return [RULE, "§a[커맨드 AI 응답]", RULE]


def command_lines(commands: Sequence[str]) -> List[str]:
    """Numbered command list with a paste hint after the first entry."""
    if not commands:
        return []
    lines = ["§b▶ 생성된 커맨드:§r"]
    for index, cmd in enumerate(commands):
        lines.append(f"§7{index + 1}.§r §e{cmd}§r")
        if index == 0:
            lines.append("§8(채팅창에 입력하거나 커맨드 블록에 붙여넣으세요)§r")
    lines.append("")
    return lines


def explanation_payload(explanation: str) -> List[str]:
    """Explanation text as paced lines, blanks dropped."""
    return [f"§f{line}§r" for line in explanation_lines(explanation)]


def render_reply(reply: ParsedReply) -> Dict[str, List[str]]:
    """Split a parsed reply into immediate lines and paced lines."""
    immediate = header_lines() + command_lines(reply.commands) + [RULE]
    return {
        "immediate": immediate,
        "paced": explanation_payload(reply.explanation),
    }


def help_lines(prefixes: Sequence[str]) -> List[str]:
    lines = [RULE, "§6§l커맨드 AI 도우미", RULE, "", "§b사용법:§r"]
    lines.extend(f"§7{p} <원하는 작업>§r" for p in prefixes)
    lines.extend(["", "§b예시:§r"])
    primary = prefixes[0] if prefixes else "!cmd"
    lines.extend(f"§7{primary} {example}§r" for example in HELP_EXAMPLES)
    lines.extend(["", RULE])
    return lines


def quick_lines(table: Dict[str, List[QuickCommand]], primary_prefix: str) -> List[str]:
    lines = [RULE, "§6빠른 커맨드 카테고리", RULE]
    for category, entries in table.items():
        lines.append(f"§a▶ {category}§r")
        for entry in entries:
            lines.append(f"  §7{primary_prefix} {entry.query}§r - {entry.desc}")
    lines.append(RULE)
    return lines


def welcome_lines(prefixes: Sequence[str]) -> List[str]:
    joined = " 또는 ".join(prefixes)
    return [
        RULE,
        "§6커맨드 AI 활성화",
        f"§7{joined} 입력으로 시작",
        RULE,
    ]
