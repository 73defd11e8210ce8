"""Core models, errors and visibility rules."""

from .exceptions import (
    HireflowError,
    InvalidStatusError,
    UnknownScorerError,
    TransitionNotAllowedError,
    JobNotOpenError,
    DuplicateApplicationError,
    StaleApplicationError,
    ApplicationNotFoundError,
)
from .models import (
    Application,
    ApplicationStatus,
    Comment,
    HistoryEntry,
    HistorySource,
    JobPosting,
    JobStatus,
    ParticipantRole,
    RoleType,
)
from .visibility import application_view, can_view_match_score

__all__ = [
    "HireflowError",
    "InvalidStatusError",
    "UnknownScorerError",
    "TransitionNotAllowedError",
    "JobNotOpenError",
    "DuplicateApplicationError",
    "StaleApplicationError",
    "ApplicationNotFoundError",
    "Application",
    "ApplicationStatus",
    "Comment",
    "HistoryEntry",
    "HistorySource",
    "JobPosting",
    "JobStatus",
    "ParticipantRole",
    "RoleType",
    "application_view",
    "can_view_match_score",
]
