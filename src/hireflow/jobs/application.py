"""Application intake and manual review workflow."""

from datetime import datetime
from typing import Callable, Optional, Sequence, Union

from hireflow.core.exceptions import JobNotOpenError, TransitionNotAllowedError
from hireflow.core.models import (
    INITIAL_PREV_STATUS,
    NOTE_MAX_LENGTH,
    Application,
    ApplicationStatus,
    Comment,
    HistoryEntry,
    HistorySource,
    JobPosting,
    JobStatus,
    ParticipantRole,
    new_id,
    utc_now,
)
from hireflow.jobs.extractor import extract_skills
from hireflow.jobs.matcher import MatchScorer, TfidfMatchScorer, resolve_scoring_text
from hireflow.utils.logging import get_logger

logger = get_logger(__name__)

ResumeParser = Callable[[bytes], str]

SUBMITTED_COMMENT = "Application submitted"
SUBMITTED_NOTE = "Application submitted by applicant"


def decode_plain_text(data: bytes) -> str:
    """Default résumé parser: strict UTF-8 text."""
    return data.decode("utf-8")


class ApplicationWorkflow:
    """Creates applications and applies manual status changes and comments."""

    def __init__(
        self,
        scorer: Optional[MatchScorer] = None,
        resume_parser: Optional[ResumeParser] = None,
        clock: Optional[Callable[[], datetime]] = None,
        store=None,
    ):
        self.logger = logger.bind(component="application_workflow")
        self.scorer = scorer or TfidfMatchScorer()
        self.resume_parser = resume_parser or decode_plain_text
        self.clock = clock or utc_now
        self.store = store

    def _read_resume(self, resume_text: Optional[str], resume_bytes: Optional[bytes]) -> str:
        if resume_text and resume_text.strip():
            return resume_text
        if not resume_bytes:
            return ""
        try:
            return self.resume_parser(resume_bytes) or ""
        except Exception as e:
            # A broken upload degrades the score; it never blocks the submission.
            self.logger.warning(
                "Failed to parse resume, falling back to provided skills",
                error=str(e),
                error_type=type(e).__name__,
            )
            return ""

    def create_application(
        self,
        job: JobPosting,
        applicant_id: str,
        applicant_name: str,
        *,
        resume_text: Optional[str] = None,
        resume_bytes: Optional[bytes] = None,
        skills: Optional[Sequence[str]] = None,
        application_id: Optional[str] = None,
    ) -> Application:
        """
        Create a new application for a job posting.

        Args:
            job: Job being applied to; must be active
            applicant_id: Applicant identifier
            applicant_name: Applicant display name, recorded as the first actor
            resume_text: Already extracted résumé text
            resume_bytes: Raw résumé content handed to the résumé parser
            skills: Free-text skills used when no résumé text is available
            application_id: Explicit id, generated when omitted

        Returns:
            The new application, added to the store when one is configured
        """
        if job.status != JobStatus.ACTIVE:
            raise JobNotOpenError(f"Cannot apply to {job.status.value} job posting {job.id}")

        resume = self._read_resume(resume_text, resume_bytes)
        text = resolve_scoring_text(resume, skills)
        match_score = self.scorer.score(text, job.description, job.scoring_skills) if text else 0
        now = self.clock()

        application = Application(
            id=application_id or new_id(),
            job_id=job.id,
            job_title=job.title,
            applicant_id=applicant_id,
            applicant_name=applicant_name,
            role_type=job.role_type,
            status=ApplicationStatus.APPLIED,
            match_score=match_score,
            extracted_text=text,
            extracted_skills=extract_skills(text),
            history=[
                HistoryEntry(
                    prev_status=INITIAL_PREV_STATUS,
                    new_status=ApplicationStatus.APPLIED,
                    updated_by=applicant_name,
                    source=HistorySource.MANUAL,
                    note=SUBMITTED_NOTE,
                    timestamp=now,
                )
            ],
            comments=[
                Comment(
                    text=SUBMITTED_COMMENT,
                    by=applicant_name,
                    role=ParticipantRole.APPLICANT,
                    date=now,
                )
            ],
            created_at=now,
            updated_at=now,
        )

        if self.store is not None:
            self.store.add_application(application)

        self.logger.info(
            "Application created",
            application_id=application.id,
            job_id=job.id,
            role_type=application.role_type.value,
            scorer=self.scorer.name,
            skills_fallback=bool(text) and not resume.strip(),
        )
        return application

    def update_status(
        self,
        application: Application,
        new_status: Union[ApplicationStatus, str],
        *,
        actor_name: str,
        actor_role: Union[ParticipantRole, str],
        comment: Optional[str] = None,
    ) -> Application:
        """
        Apply a status change made by a person (or the bot acting on request).

        The caller's application is left untouched; the updated copy is
        returned once it has been validated and saved.

        Raises:
            InvalidStatusError: ``new_status`` is not a known status
            TransitionNotAllowedError: The actor's role may not change this application
            StaleApplicationError: The stored status changed since ``application`` was read
        """
        status = ApplicationStatus.parse(new_status)
        role = ParticipantRole(actor_role)

        if role == ParticipantRole.APPLICANT:
            raise TransitionNotAllowedError("Applicants cannot change application status")
        if role == ParticipantRole.ADMIN and application.is_technical:
            raise TransitionNotAllowedError(
                "Admin cannot manually update technical applications. Use bot automation."
            )
        if role == ParticipantRole.BOT and not application.is_technical:
            raise TransitionNotAllowedError("Bot can only update technical applications")

        now = self.clock()
        prev_status = application.status
        source = HistorySource.BOT_MANUAL if role == ParticipantRole.BOT else HistorySource.MANUAL
        updated = application.model_copy(deep=True)
        updated.record_transition(
            status,
            updated_by=actor_name,
            source=source,
            note=(comment or f"Status changed from {prev_status.value} to {status.value}")[:NOTE_MAX_LENGTH],
            timestamp=now,
        )
        if comment:
            updated.add_comment(comment, by=actor_name, role=role, date=now)

        if self.store is not None:
            self.store.save(updated, expected_status=prev_status)

        self.logger.info(
            "Application status updated",
            application_id=application.id,
            prev_status=prev_status.value,
            new_status=status.value,
            source=source.value,
        )
        return updated

    def add_comment(
        self,
        application: Application,
        text: str,
        *,
        by: str,
        role: Union[ParticipantRole, str],
    ) -> Comment:
        if not text or not text.strip():
            raise ValueError("Comment text cannot be empty")
        return application.add_comment(
            text.strip(), by=by, role=ParticipantRole(role), date=self.clock()
        )
