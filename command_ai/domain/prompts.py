"""Fixed prompt text and quick-command table."""

from typing import Dict, List

from command_ai.domain.models import Prompt, QuickCommand

SYSTEM_PROMPT = """당신은 Minecraft Bedrock Edition의 커맨드 전문가입니다.
사용자의 요청을 듣고 정확한 Minecraft 커맨드를 생성해주세요.

규칙:
1. 커맨드는 /execute, /give, /summon, /fill, /setblock 등 Bedrock Edition 문법을 정확히 따라야 합니다
2. Java Edition과 Bedrock Edition의 차이점을 이해하고 Bedrock 문법을 사용하세요
3. 커맨드를 먼저 제시하고, 그 다음 간단한 설명을 추가하세요
4. 복잡한 요청은 여러 커맨드로 나누어 설명하세요
5. 커맨드는 코드 블록(백틱 3개)으로 감싸주세요
6. 한국어로 친절하게 답변하세요

예시:
사용자: "다이아몬드 검 10개 주세요"
답변:
```
/give @s diamond_sword 10
```
이 커맨드는 자신에게 다이아몬드 검 10개를 지급합니다."""

QUICK_COMMANDS: Dict[str, List[QuickCommand]] = {
    "날씨": [
        QuickCommand("날씨 맑게", "날씨를 맑게"),
        QuickCommand("비 오게", "비 내리게"),
        QuickCommand("천둥", "천둥 치게"),
    ],
    "시간": [
        QuickCommand("낮으로", "시간을 낮으로"),
        QuickCommand("밤으로", "시간을 밤으로"),
        QuickCommand("정오", "정오로 설정"),
    ],
    "아이템": [
        QuickCommand("다이아 검", "다이아몬드 검 받기"),
        QuickCommand("다이아 갑옷", "다이아몬드 갑옷 세트"),
    ],
}

HELP_EXAMPLES = [
    "다이아몬드 검 10개 주세요",
    "반경 5칸 내 돌을 공기로 채워주세요",
    "크리퍼를 소환해주세요",
    "날씨를 맑게 해주세요",
    "내 위치에 횃불 설치",
]


def build_prompt(query: str, instructions: str = SYSTEM_PROMPT) -> Prompt:
    return Prompt(instructions=instructions, query=query)
