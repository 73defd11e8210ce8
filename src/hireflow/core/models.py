"""Core data models for hireflow."""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from hireflow.core.exceptions import InvalidStatusError


INITIAL_PREV_STATUS = "N/A"

NOTE_MAX_LENGTH = 200
COMMENT_MAX_LENGTH = 500


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


class ApplicationStatus(str, Enum):
    """Pipeline status of an application."""
    APPLIED = "Applied"
    REVIEWED = "Reviewed"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    SHORTLISTED = "Shortlisted"

    @classmethod
    def parse(cls, value: Any) -> "ApplicationStatus":
        """Coerce a raw value into a status, raising for anything outside the set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value) from None


# The bot never moves applications out of these states.
BOT_TERMINAL_STATUSES = frozenset({
    ApplicationStatus.OFFER,
    ApplicationStatus.REJECTED,
    ApplicationStatus.SHORTLISTED,
})

# Statuses that end the pipeline for everyone, used by processing counts.
FINAL_STATUSES = frozenset({ApplicationStatus.OFFER, ApplicationStatus.REJECTED})


class RoleType(str, Enum):
    """Whether an application follows the automated technical pipeline."""
    TECHNICAL = "technical"
    NON_TECHNICAL = "non-technical"


class HistorySource(str, Enum):
    """Origin of a status transition."""
    MANUAL = "manual"
    BOT_CRON = "bot-cron"
    BOT_MANUAL = "bot-manual"


class ParticipantRole(str, Enum):
    """Role of whoever authored a comment or transition."""
    APPLICANT = "applicant"
    ADMIN = "admin"
    BOT = "bot"


class JobStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    CLOSED = "closed"


def coerce_score(value: Any) -> float:
    """Return a usable match score; absent or non-numeric values become 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round .5 upwards, unlike Python's round-half-even."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round to an integer score in [0, 100]."""
    return max(0, min(100, round_half_up(value)))


class JobPosting(BaseModel):
    """Job posting as seen by the matching engine."""
    id: str = Field(default_factory=new_id, description="Job posting identifier")
    title: str = Field(..., description="Job title")
    description: str = Field("", description="Free-text job description")
    required_skills: List[str] = Field(default_factory=list, description="Ordered required skills")
    required_keywords: List[str] = Field(
        default_factory=list, description="Legacy keyword list, used when required_skills is empty"
    )
    is_technical: bool = Field(False, description="Technical roles are handled by the bot")
    status: JobStatus = Field(JobStatus.ACTIVE, description="Posting status")

    @property
    def scoring_skills(self) -> List[str]:
        return list(self.required_skills or self.required_keywords)

    @property
    def role_type(self) -> RoleType:
        return RoleType.TECHNICAL if self.is_technical else RoleType.NON_TECHNICAL


class HistoryEntry(BaseModel):
    """One immutable status transition record."""
    prev_status: str = Field(..., description="Status before the transition, or N/A")
    new_status: ApplicationStatus = Field(..., description="Status after the transition")
    updated_by: str = Field(..., description="Display name of the actor")
    source: HistorySource = Field(..., description="Where the transition came from")
    note: str = Field("", max_length=NOTE_MAX_LENGTH, description="Free-text note")
    timestamp: datetime = Field(default_factory=utc_now, description="Transition time")

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from older records are UTC.
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class Comment(BaseModel):
    """Comment attached to an application."""
    text: str = Field(..., min_length=1, max_length=COMMENT_MAX_LENGTH, description="Comment body")
    by: str = Field(..., description="Author display name")
    role: ParticipantRole = Field(..., description="Author role")
    date: datetime = Field(default_factory=utc_now, description="Comment time")


class Application(BaseModel):
    """Application aggregate; hireflow reads and appends a narrow slice of it."""
    id: str = Field(default_factory=new_id, description="Opaque application identifier")
    job_id: str = Field(..., description="Referenced job posting")
    job_title: str = Field("", description="Denormalized job title")
    applicant_id: str = Field(..., description="Applicant identifier")
    applicant_name: str = Field("", description="Applicant display name")
    role_type: RoleType = Field(..., description="Fixed at creation from the job")
    status: ApplicationStatus = Field(ApplicationStatus.APPLIED, description="Current status")
    match_score: int = Field(0, ge=0, le=100, description="Résumé/job compatibility score, 0-100")
    extracted_text: str = Field("", description="Text the match score was computed from")
    extracted_skills: List[str] = Field(default_factory=list, description="Catalog skills found in the text")
    history: List[HistoryEntry] = Field(default_factory=list, description="Append-only transitions")
    comments: List[Comment] = Field(default_factory=list, description="Append-only comments")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("match_score", mode="before")
    @classmethod
    def _coerce_match_score(cls, value: Any) -> int:
        return clamp_score(coerce_score(value))

    @property
    def is_technical(self) -> bool:
        return self.role_type == RoleType.TECHNICAL

    @property
    def is_terminal_for_bot(self) -> bool:
        return self.status in BOT_TERMINAL_STATUSES

    def record_transition(
        self,
        new_status: ApplicationStatus,
        *,
        updated_by: str,
        source: HistorySource,
        note: str,
        timestamp: Optional[datetime] = None,
    ) -> HistoryEntry:
        """Append a history entry and move to ``new_status``."""
        entry = HistoryEntry(
            prev_status=self.status.value,
            new_status=new_status,
            updated_by=updated_by,
            source=source,
            note=note,
            timestamp=timestamp or utc_now(),
        )
        self.history.append(entry)
        self.status = new_status
        self.updated_at = entry.timestamp
        return entry

    def add_comment(
        self,
        text: str,
        *,
        by: str,
        role: ParticipantRole,
        date: Optional[datetime] = None,
    ) -> Comment:
        comment = Comment(text=text, by=by, role=role, date=date or utc_now())
        self.comments.append(comment)
        return comment

    def history_is_consistent(self) -> bool:
        """Check that history forms a contiguous chain ending at the current status."""
        if not self.history:
            return False
        if self.history[0].prev_status != INITIAL_PREV_STATUS:
            return False
        for previous, current in zip(self.history, self.history[1:]):
            if current.prev_status != previous.new_status.value:
                return False
        return self.history[-1].new_status == self.status
