"""Gemini generateContent adapter using aiohttp — implements LLMPort."""

import asyncio
import sys
from typing import Any, Dict, Optional

import aiohttp

from command_ai.config import GeminiConfig
from command_ai.domain.models import Prompt
from command_ai.infrastructure.usage import UsageTracker


def _log(msg: str):
    print(msg, file=sys.stderr)


class RemoteServiceError(Exception):
    """Non-success status or unusable body from the remote service."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class GeminiAdapter:
    """One POST per query, no retries. Implements LLMPort protocol."""

    def __init__(
        self,
        config: Optional[GeminiConfig] = None,
        usage_tracker: Optional[UsageTracker] = None,
    ):
        self.config = config or GeminiConfig()
        self.usage_tracker = usage_tracker

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def build_payload(self, prompt: Prompt) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt.text}]}],
            "generationConfig": self.config.generation.to_payload(),
        }

    @staticmethod
    def extract_text(data: Any) -> str:
        """First candidate's first text part, or RemoteServiceError."""
        try:
            candidates = data.get("candidates") or []
            if candidates:
                return candidates[0]["content"]["parts"][0]["text"]
        except (AttributeError, KeyError, IndexError, TypeError):
            pass
        raise RemoteServiceError("응답을 받을 수 없습니다.")

    async def generate(self, prompt: Prompt) -> str:
        if not self.is_configured:
            raise RemoteServiceError("GEMINI_API_KEY가 설정되지 않았습니다.")
        stamp = self.usage_tracker.acquire() if self.usage_tracker else None

        try:
            text = await self._request(prompt)
        except BaseException:
            if stamp is not None:
                self.usage_tracker.release(stamp)
            raise

        if stamp is not None:
            self.usage_tracker.record_call(stamp)
            warning = self.usage_tracker.get_warning()
            if warning:
                _log(f"[Gemini] {warning}")
        return text

    async def _request(self, prompt: Prompt) -> str:
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        params = {"key": self.config.api_key}
        _log(f"[Gemini] request ({len(prompt.query)} chars query)")

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.config.api_url,
                    params=params,
                    json=self.build_payload(prompt),
                ) as resp:
                    if resp.status != 200:
                        raise RemoteServiceError(
                            f"API 오류: 상태 코드 {resp.status}", status=resp.status,
                        )
                    try:
                        data = await resp.json(content_type=None)
                    except ValueError:
                        raise RemoteServiceError("응답을 받을 수 없습니다.", status=resp.status)
        except asyncio.TimeoutError:
            raise RemoteServiceError(f"시간 초과 ({self.config.timeout_seconds:g}초)")
        except aiohttp.ClientError as e:
            raise RemoteServiceError(f"연결 실패: {e}")

        return self.extract_text(data)
