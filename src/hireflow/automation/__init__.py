"""Bot automation: status progression and activity statistics."""

from .progression import (
    BatchResult,
    ProgressionEngine,
    ProgressionPolicy,
    TransitionRecord,
    decide_next_status,
    default_seed,
    run_progression_batch,
)
from .stats import (
    BotActivityEntry,
    BotStats,
    bot_activity_feed,
    build_bot_stats,
    ready_for_processing,
    recent_bot_activity,
    status_counts,
)

__all__ = [
    "BatchResult",
    "ProgressionEngine",
    "ProgressionPolicy",
    "TransitionRecord",
    "decide_next_status",
    "default_seed",
    "run_progression_batch",
    "BotActivityEntry",
    "BotStats",
    "bot_activity_feed",
    "build_bot_stats",
    "ready_for_processing",
    "recent_bot_activity",
    "status_counts",
]
