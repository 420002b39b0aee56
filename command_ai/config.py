"""Configuration loaded from the environment (.env supported)."""

import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(p.strip() for p in raw.split(",") if p.strip())


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-pro").strip()

CONFIG: Dict[str, Any] = {
    "port": _int_env("PORT", 3000),
    # Gemini
    "gemini_api_key": os.getenv("GEMINI_API_KEY", ""),
    "gemini_model": GEMINI_MODEL,
    "gemini_api_url": os.getenv(
        "GEMINI_API_URL", f"{GEMINI_API_BASE}/{GEMINI_MODEL}:generateContent"
    ),
    "gemini_timeout_seconds": _float_env("GEMINI_TIMEOUT_SECONDS", 10.0),
    # Low temperature keeps command syntax exact
    "generation": {
        "temperature": _float_env("GEMINI_TEMPERATURE", 0.3),
        "maxOutputTokens": _int_env("GEMINI_MAX_OUTPUT_TOKENS", 1500),
        "topP": _float_env("GEMINI_TOP_P", 0.8),
        "topK": _int_env("GEMINI_TOP_K", 40),
    },
    # Chat triggers
    "trigger_prefixes": _split_csv(os.getenv("TRIGGER_PREFIXES", "!cmd,!커맨드")),
    "quick_prefixes": _split_csv(os.getenv("QUICK_PREFIXES", "!quick,!퀵")),
    # 3 game ticks at 20 TPS
    "delivery_delay_seconds": _float_env("DELIVERY_DELAY_SECONDS", 0.15),
    "welcome_delay_seconds": _float_env("WELCOME_DELAY_SECONDS", 2.0),
    # Discord relay
    "discord_bot_token": os.getenv("DISCORD_BOT_TOKEN", ""),
    "discord_channel_ids": [
        int(c) for c in _split_csv(os.getenv("DISCORD_CHANNEL_IDS", "")) if c.isdigit()
    ],
    # Usage limits for remote calls
    "usage_file": os.getenv("USAGE_FILE", "memory/usage.json"),
    "usage_limits": {
        "max_calls_per_minute": _int_env("MAX_CALLS_PER_MINUTE", 30),
        "max_calls_per_hour": _int_env("MAX_CALLS_PER_HOUR", 300),
        "max_calls_per_day": _int_env("MAX_CALLS_PER_DAY", 1500),
        "min_call_interval_seconds": _int_env("MIN_CALL_INTERVAL_SECONDS", 0),
        "warning_threshold_pct": 80,
        "paused": os.getenv("USAGE_PAUSED", "false").strip().lower() in ("1", "true", "yes", "on"),
    },
}

if not CONFIG["trigger_prefixes"]:
    _stderr_print("TRIGGER_PREFIXES is empty, falling back to '!cmd'")
    CONFIG["trigger_prefixes"] = ("!cmd",)


# ── Typed config ──────────────────────────────────────


@dataclass
class GenerationConfig:
    temperature: float = 0.3
    max_output_tokens: int = 1500
    top_p: float = 0.8
    top_k: int = 40

    def to_payload(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
            "topP": self.top_p,
            "topK": self.top_k,
        }


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = "gemini-pro"
    api_url: str = f"{GEMINI_API_BASE}/gemini-pro:generateContent"
    timeout_seconds: float = 10.0
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass
class TriggerConfig:
    prefixes: Tuple[str, ...] = ("!cmd", "!커맨드")
    quick_prefixes: Tuple[str, ...] = ("!quick", "!퀵")


@dataclass
class DeliveryConfig:
    delay_seconds: float = 0.15
    welcome_delay_seconds: float = 2.0


@dataclass
class UsageLimitsConfig:
    max_calls_per_minute: int = 30
    max_calls_per_hour: int = 300
    max_calls_per_day: int = 1500
    min_call_interval_seconds: int = 0
    warning_threshold_pct: int = 80
    paused: bool = False


@dataclass
class DiscordConfig:
    token: str = ""
    channel_ids: List[int] = field(default_factory=list)


@dataclass
class AppConfig:
    """Typed configuration assembled from CONFIG."""

    port: int = 3000
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    triggers: TriggerConfig = field(default_factory=TriggerConfig)
    delivery: DeliveryConfig = field(default_factory=DeliveryConfig)
    usage_file: str = "memory/usage.json"
    usage_limits: UsageLimitsConfig = field(default_factory=UsageLimitsConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        gen = CONFIG["generation"]
        return cls(
            port=CONFIG["port"],
            gemini=GeminiConfig(
                api_key=CONFIG["gemini_api_key"],
                model=CONFIG["gemini_model"],
                api_url=CONFIG["gemini_api_url"],
                timeout_seconds=CONFIG["gemini_timeout_seconds"],
                generation=GenerationConfig(
                    temperature=gen["temperature"],
                    max_output_tokens=gen["maxOutputTokens"],
                    top_p=gen["topP"],
                    top_k=gen["topK"],
                ),
            ),
            triggers=TriggerConfig(
                prefixes=tuple(CONFIG["trigger_prefixes"]),
                quick_prefixes=tuple(CONFIG["quick_prefixes"]),
            ),
            delivery=DeliveryConfig(
                delay_seconds=CONFIG["delivery_delay_seconds"],
                welcome_delay_seconds=CONFIG["welcome_delay_seconds"],
            ),
            usage_file=CONFIG["usage_file"],
            usage_limits=UsageLimitsConfig(**CONFIG["usage_limits"]),
            discord=DiscordConfig(
                token=CONFIG["discord_bot_token"],
                channel_ids=list(CONFIG["discord_channel_ids"]),
            ),
        )
