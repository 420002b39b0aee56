"""Tests for domain/formatting.py and domain/prompts.py."""

from command_ai.domain.formatting import (
    RULE,
    command_lines,
    explanation_payload,
    help_lines,
    quick_lines,
    render_reply,
    strip_color_codes,
)
from command_ai.domain.models import ParsedReply, Prompt, QuickCommand
from command_ai.domain.prompts import SYSTEM_PROMPT, build_prompt


class TestStripColorCodes:
    def test_strips_codes(self):
        assert strip_color_codes("§6§l커맨드§r AI") == "커맨드 AI"

    def test_plain_text_untouched(self):
        assert strip_color_codes("/give @s apple") == "/give @s apple"


class TestRenderReply:
    def test_commands_then_footer(self):
        out = render_reply(ParsedReply(commands=["/a", "/b"], explanation="x\n\n y "))
        assert out["immediate"][:3] == [RULE, "§a[커맨드 AI 응답]", RULE]
        assert out["immediate"][-1] == RULE
        assert out["paced"] == ["§fx§r", "§fy§r"]

    def test_command_numbering(self):
        lines = command_lines(["/a", "/b"])
        assert lines[1] == "§71.§r §e/a§r"
        assert lines[3] == "§72.§r §e/b§r"
        assert lines[-1] == ""

    def test_empty_commands(self):
        assert command_lines([]) == []

    def test_empty_explanation(self):
        assert explanation_payload("   \n ") == []


class TestStaticPayloads:
    def test_help_uses_primary_prefix_for_examples(self):
        lines = help_lines(("!ask", "!질문"))
        assert "§7!ask <원하는 작업>§r" in lines
        assert "§7!질문 <원하는 작업>§r" in lines
        assert "§7!ask 크리퍼를 소환해주세요§r" in lines

    def test_quick_table(self):
        lines = quick_lines({"시간": [QuickCommand("낮으로", "시간을 낮으로")]}, "!cmd")
        assert "§a▶ 시간§r" in lines
        assert "  §7!cmd 낮으로§r - 시간을 낮으로" in lines


class TestPrompt:
    def test_build_prompt(self):
        prompt = build_prompt("비 오게")
        assert isinstance(prompt, Prompt)
        assert prompt.instructions == SYSTEM_PROMPT
        assert prompt.text == f"{SYSTEM_PROMPT}\n\n사용자 요청: 비 오게"

    def test_system_prompt_asks_for_fences(self):
        assert "```" in SYSTEM_PROMPT
