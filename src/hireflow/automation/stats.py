"""Bot activity and pipeline statistics."""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from hireflow.automation.progression import BOT_NAME
from hireflow.config import settings
from hireflow.core.models import (
    FINAL_STATUSES,
    Application,
    ApplicationStatus,
    HistorySource,
    RoleType,
    utc_now,
)


class BotActivityEntry(BaseModel):
    """A bot-authored history entry, flattened for dashboards."""
    application_id: str
    job_title: str
    status: ApplicationStatus = Field(..., description="Application's current status")
    prev_status: str
    new_status: ApplicationStatus
    source: HistorySource
    note: str
    timestamp: datetime


class BotStats(BaseModel):
    """Summary of bot processing."""
    generated_at: datetime
    window_hours: int
    recent_bot_activity: Dict[str, int] = Field(default_factory=dict, description="Bot transitions per source")
    total_by_status: Dict[str, int] = Field(default_factory=dict, description="Technical applications per status")
    ready_for_processing: int = 0


def status_counts(
    applications: Iterable[Application],
    role_type: Optional[RoleType] = RoleType.TECHNICAL,
) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for application in applications:
        if role_type is not None and application.role_type != role_type:
            continue
        key = application.status.value
        counts[key] = counts.get(key, 0) + 1
    return counts


def recent_bot_activity(applications: Iterable[Application], since: datetime) -> Dict[str, int]:
    """Count bot transitions at or after ``since``, grouped by source."""
    counts: Dict[str, int] = {}
    for application in applications:
        for entry in application.history:
            if entry.updated_by == BOT_NAME and entry.timestamp >= since:
                counts[entry.source.value] = counts.get(entry.source.value, 0) + 1
    return counts


def bot_activity_feed(
    applications: Iterable[Application],
    limit: Optional[int] = None,
) -> List[BotActivityEntry]:
    """Newest bot history entries first."""
    limit = settings.activity_feed_limit if limit is None else limit
    entries = [
        BotActivityEntry(
            application_id=application.id,
            job_title=application.job_title,
            status=application.status,
            prev_status=entry.prev_status,
            new_status=entry.new_status,
            source=entry.source,
            note=entry.note,
            timestamp=entry.timestamp,
        )
        for application in applications
        for entry in application.history
        if entry.updated_by == BOT_NAME
    ]
    entries.sort(key=lambda e: e.timestamp, reverse=True)
    return entries[:limit]


def ready_for_processing(applications: Iterable[Application]) -> int:
    return sum(
        1
        for application in applications
        if application.role_type == RoleType.TECHNICAL and application.status not in FINAL_STATUSES
    )


def build_bot_stats(
    applications: Iterable[Application],
    now: Optional[datetime] = None,
    window_hours: Optional[int] = None,
) -> BotStats:
    now = now or utc_now()
    window_hours = settings.stats_window_hours if window_hours is None else window_hours
    applications = list(applications)
    return BotStats(
        generated_at=now,
        window_hours=window_hours,
        recent_bot_activity=recent_bot_activity(applications, now - timedelta(hours=window_hours)),
        total_by_status=status_counts(applications),
        ready_for_processing=ready_for_processing(applications),
    )
