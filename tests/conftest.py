"""Shared fixtures for hireflow tests."""

from datetime import datetime, timezone

import pytest

from hireflow.core.models import (
    Application,
    ApplicationStatus,
    Comment,
    HistoryEntry,
    HistorySource,
    JobPosting,
    ParticipantRole,
)
from hireflow.storage.store import ApplicationStore

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_job(job_id="job-tech", is_technical=True, **overrides) -> JobPosting:
    data = dict(
        id=job_id,
        title="Backend Engineer" if is_technical else "Office Manager",
        description="Python developer with SQL and Docker experience",
        required_skills=["Python", "SQL"],
        is_technical=is_technical,
    )
    data.update(overrides)
    return JobPosting(**data)


def make_application(
    app_id="app-1",
    match_score=50,
    job_id="job-tech",
    applicant_id=None,
    technical=True,
) -> Application:
    """An Applied application with the initial history entry and comment."""
    return Application(
        id=app_id,
        job_id=job_id,
        job_title="Backend Engineer",
        applicant_id=applicant_id or f"user-{app_id}",
        applicant_name="Sam Applicant",
        role_type="technical" if technical else "non-technical",
        status=ApplicationStatus.APPLIED,
        match_score=match_score,
        history=[
            HistoryEntry(
                prev_status="N/A",
                new_status=ApplicationStatus.APPLIED,
                updated_by="Sam Applicant",
                source=HistorySource.MANUAL,
                note="Application submitted by applicant",
                timestamp=FIXED_NOW,
            )
        ],
        comments=[
            Comment(
                text="Application submitted",
                by="Sam Applicant",
                role=ParticipantRole.APPLICANT,
                date=FIXED_NOW,
            )
        ],
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def technical_job():
    return make_job()


@pytest.fixture
def non_technical_job():
    return make_job(job_id="job-ops", is_technical=False)


@pytest.fixture
def store(technical_job, non_technical_job):
    return ApplicationStore(jobs=[technical_job, non_technical_job])
