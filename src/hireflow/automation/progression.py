"""Automated status progression for technical applications."""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from hireflow.config import Settings, settings
from hireflow.core.models import (
    Application,
    ApplicationStatus,
    HistorySource,
    ParticipantRole,
    clamp_score,
    coerce_score,
    utc_now,
)
from hireflow.utils.logging import get_logger, log_batch_context

logger = get_logger(__name__)

SeedFn = Callable[[str], int]

BOT_NAME = "Bot"

# Notes are shown to applicants, so they never mention the score or seed.
TRANSITION_NOTES: Dict[tuple, str] = {
    (ApplicationStatus.APPLIED, ApplicationStatus.REVIEWED):
        "Bot: Application reviewed and moved to next stage",
    (ApplicationStatus.APPLIED, ApplicationStatus.REJECTED):
        "Bot: Application did not pass initial screening",
    (ApplicationStatus.REVIEWED, ApplicationStatus.INTERVIEW):
        "Bot: Application approved for interview",
    (ApplicationStatus.REVIEWED, ApplicationStatus.REJECTED):
        "Bot: Application not selected for interview",
    (ApplicationStatus.INTERVIEW, ApplicationStatus.OFFER):
        "Bot: Interview successful, extending offer",
    (ApplicationStatus.INTERVIEW, ApplicationStatus.REJECTED):
        "Bot: Interview did not meet requirements",
}


def default_seed(application_id: Any) -> int:
    """Deterministic draw in [0, 100) from the id's trailing character."""
    text = str(application_id) if application_id is not None else ""
    if not text:
        return 0
    return abs(ord(text[-1])) % 100


@dataclass(frozen=True)
class ProgressionPolicy:
    """Score thresholds for the bot's transitions."""
    reject_below: int = 10
    interview_min_score: int = 25
    offer_bias: int = 20
    offer_cap: int = 90

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ProgressionPolicy":
        config = config or settings
        return cls(
            reject_below=config.bot_reject_below,
            interview_min_score=config.bot_interview_min_score,
            offer_bias=config.bot_offer_bias,
            offer_cap=config.bot_offer_cap,
        )

    def offer_threshold(self, match_score: Any) -> int:
        base = clamp_score(coerce_score(match_score))
        return min(self.offer_cap, base + self.offer_bias)


def _status_or_none(status: Union[ApplicationStatus, str, None]) -> Optional[ApplicationStatus]:
    try:
        return ApplicationStatus(status)
    except ValueError:
        return None


def decide_next_status(
    status: Union[ApplicationStatus, str, None],
    match_score: Any,
    application_id: Any,
    policy: Optional[ProgressionPolicy] = None,
    seed_fn: SeedFn = default_seed,
) -> Optional[ApplicationStatus]:
    """
    Decide the bot's next status for one application.

    Args:
        status: Current status; unknown values yield no transition
        match_score: Stored match score; non-numeric values count as 0
        application_id: Identity the Interview-stage seed is drawn from
        policy: Score thresholds
        seed_fn: Maps the identity to an integer in [0, 100)

    Returns:
        The next status, or None when the bot leaves the application alone
    """
    policy = policy or ProgressionPolicy()
    current = _status_or_none(status)
    score = coerce_score(match_score)

    if current == ApplicationStatus.APPLIED:
        if score < policy.reject_below:
            return ApplicationStatus.REJECTED
        return ApplicationStatus.REVIEWED

    if current == ApplicationStatus.REVIEWED:
        if score >= policy.interview_min_score:
            return ApplicationStatus.INTERVIEW
        return ApplicationStatus.REJECTED

    if current == ApplicationStatus.INTERVIEW:
        if seed_fn(application_id) < policy.offer_threshold(score):
            return ApplicationStatus.OFFER
        return ApplicationStatus.REJECTED

    return None


@dataclass
class TransitionRecord:
    """One committed bot transition."""
    id: str
    prev_status: ApplicationStatus
    new_status: ApplicationStatus

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "prevStatus": self.prev_status.value,
            "newStatus": self.new_status.value,
        }


@dataclass
class BatchResult:
    """Outcome of one progression batch."""
    timestamp: datetime
    transitions: List[TransitionRecord] = field(default_factory=list)
    skipped: int = 0
    failed: int = 0
    cancelled: bool = False

    @property
    def updated_count(self) -> int:
        return len(self.transitions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the external ``{updatedCount, transitions}`` shape."""
        return {
            "updatedCount": self.updated_count,
            "transitions": [t.to_dict() for t in self.transitions],
            "skipped": self.skipped,
            "failed": self.failed,
            "cancelled": self.cancelled,
            "timestamp": self.timestamp.isoformat(),
        }


class ProgressionEngine:
    """Advances technical applications through Applied, Reviewed and Interview."""

    def __init__(
        self,
        store,
        policy: Optional[ProgressionPolicy] = None,
        seed_fn: Optional[SeedFn] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the engine.

        Args:
            store: Provides ``get_job``, ``list_pending_technical`` and a
                status-checked ``save``
            policy: Score thresholds, taken from settings when omitted
            seed_fn: Interview-stage seed function
            clock: Source of the invocation timestamp
        """
        self.logger = logger.bind(component="progression_engine")
        self.store = store
        self.policy = policy or ProgressionPolicy.from_settings()
        self.seed_fn = seed_fn or default_seed
        self.clock = clock or utc_now

    def _skip_reason(self, application: Application) -> Optional[str]:
        if not application.is_technical:
            return "application_not_technical"
        if application.is_terminal_for_bot:
            return "terminal_status"
        job = self.store.get_job(application.job_id)
        if job is None:
            return "job_not_found"
        if not job.is_technical:
            return "job_not_technical"
        return None

    def advance(
        self,
        application: Application,
        invocation_is_automated: bool,
        now: datetime,
    ) -> Optional[Application]:
        """
        Compute the next state of one application without saving it.

        Returns:
            An updated copy carrying one new history entry and one new
            comment, or None when the application is skipped
        """
        reason = self._skip_reason(application)
        if reason:
            self.logger.info(
                "Skipping application",
                application_id=application.id,
                status=application.status.value,
                reason=reason,
            )
            return None

        new_status = decide_next_status(
            application.status,
            application.match_score,
            application.id,
            policy=self.policy,
            seed_fn=self.seed_fn,
        )
        if new_status is None or new_status == application.status:
            self.logger.info(
                "Skipping application",
                application_id=application.id,
                status=application.status.value,
                reason="status_not_handled",
            )
            return None

        note = TRANSITION_NOTES[(application.status, new_status)]
        source = HistorySource.BOT_CRON if invocation_is_automated else HistorySource.BOT_MANUAL

        updated = application.model_copy(deep=True)
        updated.record_transition(
            new_status,
            updated_by=BOT_NAME,
            source=source,
            note=note,
            timestamp=now,
        )
        updated.add_comment(note, by=BOT_NAME, role=ParticipantRole.BOT, date=now)
        return updated

    def run_batch(
        self,
        applications: Optional[Iterable[Application]] = None,
        invocation_is_automated: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> BatchResult:
        """
        Evaluate every application once and commit at most one transition each.

        Args:
            applications: Applications to evaluate; pending technical
                applications from the store when omitted
            invocation_is_automated: True when the call carries the internal
                automation credential (tags history as bot-cron)
            cancel_event: Checked between applications; setting it stops the
                batch before the next item

        Returns:
            Batch result with the committed transitions in processing order
        """
        if applications is None:
            applications = self.store.list_pending_technical()
        batch = list(applications)
        now = self.clock()
        result = BatchResult(timestamp=now)

        self.logger.info(
            "Bot automation started",
            **log_batch_context(invocation_is_automated, len(batch)),
        )

        for application in batch:
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                processed = result.updated_count + result.skipped + result.failed
                self.logger.warning(
                    "Bot automation cancelled",
                    processed=processed,
                    remaining=len(batch) - processed,
                )
                break

            prev_status = application.status
            try:
                updated = self.advance(application, invocation_is_automated, now)
                if updated is None:
                    result.skipped += 1
                    continue
                self.store.save(updated, expected_status=prev_status)
            except Exception as e:
                result.failed += 1
                self.logger.error(
                    "Failed to update application",
                    application_id=application.id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            result.transitions.append(
                TransitionRecord(id=updated.id, prev_status=prev_status, new_status=updated.status)
            )
            self.logger.info(
                "Updated application",
                application_id=updated.id,
                prev_status=prev_status.value,
                new_status=updated.status.value,
            )

        self.logger.info(
            "Bot automation completed",
            updated_count=result.updated_count,
            skipped=result.skipped,
            failed=result.failed,
            cancelled=result.cancelled,
        )
        return result


def run_progression_batch(
    applications: Optional[Iterable[Application]],
    invocation_is_automated: bool,
    *,
    store,
    policy: Optional[ProgressionPolicy] = None,
    seed_fn: Optional[SeedFn] = None,
    clock: Optional[Callable[[], datetime]] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BatchResult:
    """Run one progression batch against ``store``."""
    engine = ProgressionEngine(store, policy=policy, seed_fn=seed_fn, clock=clock)
    return engine.run_batch(
        applications,
        invocation_is_automated=invocation_is_automated,
        cancel_event=cancel_event,
    )
