from command_ai.infrastructure.usage import UsageLimitExceeded, UsageTracker

__all__ = ["UsageLimitExceeded", "UsageTracker"]
