"""LLM adapters."""

from command_ai.adapters.llm.gemini_adapter import GeminiAdapter, RemoteServiceError

__all__ = [
    "GeminiAdapter",
    "RemoteServiceError",
]
