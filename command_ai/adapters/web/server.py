"""FastAPI application for the game chat relay."""

import sys

from fastapi import FastAPI

from command_ai.adapters.web import chat_routes
from command_ai.adapters.web.chat_routes import chat_router

app = FastAPI(title="Command AI Relay")
app.include_router(chat_router)


@app.get("/status")
async def status():
    """Relay status endpoint"""
    assistant = chat_routes.assistant
    return {
        "gemini_configured": assistant.llm.is_configured,
        "active_deliveries": assistant.delivery.active_recipients,
        "usage": chat_routes.usage_tracker.get_status(),
    }


@app.on_event("startup")
async def startup_event():
    print("Command AI relay starting", file=sys.stderr)
    if not chat_routes.assistant.llm.is_configured:
        print("GEMINI_API_KEY not set (add it to .env)", file=sys.stderr)
    print(f"Triggers: {', '.join(chat_routes.assistant.prefixes)}", file=sys.stderr)


@app.on_event("shutdown")
async def shutdown_event():
    await chat_routes.assistant.wait_idle()
