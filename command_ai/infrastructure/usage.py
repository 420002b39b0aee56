"""Remote call usage tracking and rate limiting."""

import json
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_USAGE_LIMITS = {
    "max_calls_per_minute": 30,
    "max_calls_per_hour": 300,
    "max_calls_per_day": 1500,
    "min_call_interval_seconds": 0,
    "warning_threshold_pct": 80,
    "paused": False,
}


def _get_default_limits() -> Dict[str, Any]:
    from command_ai.config import CONFIG
    return dict(CONFIG["usage_limits"])


class UsageLimitExceeded(Exception):
    """Raised when a usage limit is exceeded"""
    pass


class UsageTracker:
    """Tracks Gemini request usage and enforces rate limits.

    ``usage_file=None`` keeps the call log in memory only.
    """

    def __init__(
        self,
        usage_file: Optional[str] = "memory/usage.json",
        limits: Optional[Dict[str, Any]] = None,
    ):
        self.usage_file = Path(usage_file) if usage_file else None
        if self.usage_file:
            self.usage_file.parent.mkdir(parents=True, exist_ok=True)
        merged = dict(DEFAULT_USAGE_LIMITS)
        merged.update(limits if limits is not None else _get_default_limits())
        self.limits = merged
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        if self.usage_file and self.usage_file.exists():
            try:
                with open(self.usage_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict) and isinstance(data.get("calls"), list):
                    return data
            except (OSError, ValueError) as e:
                print(f"[Usage] ignoring unreadable usage file: {e}", file=sys.stderr)
        return {"calls": [], "total_calls": 0}

    def _save(self):
        if not self.usage_file:
            return
        try:
            with open(self.usage_file, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            print(f"[Usage] failed to save usage data: {e}", file=sys.stderr)

    def _calls_since(self, seconds: float) -> int:
        cutoff = (datetime.now() - timedelta(seconds=seconds)).isoformat()
        return sum(1 for ts in self._data["calls"] if ts > cutoff)

    def _cleanup_old_calls(self):
        cutoff = (datetime.now() - timedelta(hours=24)).isoformat()
        self._data["calls"] = [ts for ts in self._data["calls"] if ts > cutoff]

    def check_limits(self):
        """Raise UsageLimitExceeded if the next call would break a limit."""
        limits = self.limits

        if limits.get("paused", False):
            raise UsageLimitExceeded("사용이 일시 중지되었습니다")

        min_interval = limits["min_call_interval_seconds"]
        if min_interval and self._data["calls"]:
            last_call = self._data["calls"][-1]
            elapsed = (datetime.now() - datetime.fromisoformat(last_call)).total_seconds()
            if elapsed < min_interval:
                raise UsageLimitExceeded(
                    f"잠시 후 다시 시도하세요 ({min_interval - elapsed:.1f}초 남음)"
                )

        for window, key, label in (
            (60, "max_calls_per_minute", "분당"),
            (3600, "max_calls_per_hour", "시간당"),
            (86400, "max_calls_per_day", "일일"),
        ):
            used = self._calls_since(window)
            if used >= limits[key]:
                raise UsageLimitExceeded(f"{label} 요청 한도 초과: {used}/{limits[key]}")

    def acquire(self) -> str:
        """Check limits and reserve a slot for one call.

        The reserved timestamp counts against every window right away, so
        calls still waiting on the network cannot overshoot a limit. Pass it
        to ``record_call`` on success or ``release`` on failure.
        """
        self.check_limits()
        self._cleanup_old_calls()
        stamp = datetime.now().isoformat()
        self._data["calls"].append(stamp)
        return stamp

    def release(self, stamp: str):
        """Return a slot reserved by ``acquire`` for a call that failed."""
        calls = self._data["calls"]
        if stamp in calls:
            calls.remove(stamp)

    def record_call(self, stamp: Optional[str] = None):
        if stamp is None:
            self._cleanup_old_calls()
            self._data["calls"].append(datetime.now().isoformat())
        self._data["total_calls"] = self._data.get("total_calls", 0) + 1
        self._save()

    def get_warning(self) -> Optional[str]:
        """Warning text once daily usage crosses the threshold."""
        limits = self.limits
        per_day = self._calls_since(86400)
        threshold = limits["max_calls_per_day"] * limits["warning_threshold_pct"] / 100
        if per_day >= threshold:
            return (
                f"Usage warning: {per_day}/{limits['max_calls_per_day']} "
                f"daily calls used ({per_day * 100 // max(limits['max_calls_per_day'], 1)}%)"
            )
        return None

    def get_status(self) -> Dict[str, Any]:
        limits = self.limits
        return {
            "calls_today": self._calls_since(86400),
            "calls_this_hour": self._calls_since(3600),
            "calls_this_minute": self._calls_since(60),
            "limits": {
                "per_minute": limits["max_calls_per_minute"],
                "per_hour": limits["max_calls_per_hour"],
                "per_day": limits["max_calls_per_day"],
            },
            "paused": limits.get("paused", False),
            "total_calls_all_time": self._data.get("total_calls", 0),
        }
