"""Chat relay API routes for a game-side script."""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from command_ai.adapters.llm.gemini_adapter import GeminiAdapter
from command_ai.adapters.web.outbox import OutboxSink
from command_ai.config import AppConfig
from command_ai.domain.assistant import CommandAssistant
from command_ai.infrastructure.usage import UsageTracker
from command_ai.ports.inbound import ChatEvent

chat_router = APIRouter(prefix="/chat", tags=["Chat"])

_app_config = AppConfig.from_env()
outbox = OutboxSink()
usage_tracker = UsageTracker(
    usage_file=_app_config.usage_file,
    limits=asdict(_app_config.usage_limits),
)
assistant = CommandAssistant(
    llm=GeminiAdapter(_app_config.gemini, usage_tracker=usage_tracker),
    sink=outbox,
    prefixes=_app_config.triggers.prefixes,
    quick_prefixes=_app_config.triggers.quick_prefixes,
    delay=_app_config.delivery.delay_seconds,
    welcome_delay=_app_config.delivery.welcome_delay_seconds,
)


class ChatMessageRequest(BaseModel):
    player_id: str
    player_name: str = ""
    message: str


class ChatMessageResponse(BaseModel):
    cancel: bool
    kind: str = ""


class JoinRequest(BaseModel):
    player_id: str
    player_name: str = ""


class OutboxResponse(BaseModel):
    lines: List[str]


@chat_router.post("/message", response_model=ChatMessageResponse)
async def chat_message(req: ChatMessageRequest):
    event = ChatEvent(
        sender_id=req.player_id,
        sender_name=req.player_name or req.player_id,
        message=req.message,
    )
    trigger = assistant.match(event.message)
    assistant.dispatch(event)
    return ChatMessageResponse(cancel=event.cancel, kind=trigger.kind or "")


@chat_router.post("/join")
async def chat_join(req: JoinRequest):
    assistant.schedule_greet(req.player_id)
    return {"ok": True}


@chat_router.get("/outbox/{player_id}", response_model=OutboxResponse)
async def chat_outbox(player_id: str):
    return OutboxResponse(lines=outbox.collect(player_id))
