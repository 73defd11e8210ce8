"""In-process application store with optimistic status checks."""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from hireflow.core.exceptions import (
    ApplicationNotFoundError,
    DuplicateApplicationError,
    StaleApplicationError,
)
from hireflow.core.models import (
    FINAL_STATUSES,
    Application,
    ApplicationStatus,
    JobPosting,
    RoleType,
)
from hireflow.utils.logging import get_logger

logger = get_logger(__name__)


class StoreSnapshot(BaseModel):
    """Serialized form of the store, used for JSON files."""
    jobs: List[JobPosting] = Field(default_factory=list)
    applications: List[Application] = Field(default_factory=list)


class ApplicationStore:
    """
    Thread-safe store for jobs and applications.

    Records are copied on the way in and on the way out, so a caller holding
    an application never shares state with the store or with other callers.
    ``save`` only commits when the stored status still equals the status the
    caller read, which keeps overlapping bot runs from double-advancing an
    application.
    """

    def __init__(
        self,
        jobs: Optional[Iterable[JobPosting]] = None,
        applications: Optional[Iterable[Application]] = None,
    ):
        self.logger = logger.bind(component="application_store")
        self._lock = threading.RLock()
        self._jobs: Dict[str, JobPosting] = {}
        self._applications: Dict[str, Application] = {}
        self._pairs: Dict[Tuple[str, str], str] = {}

        for job in jobs or []:
            self.add_job(job)
        for application in applications or []:
            self.add_application(application)

    # Jobs

    def add_job(self, job: JobPosting) -> JobPosting:
        with self._lock:
            self._jobs[job.id] = job.model_copy(deep=True)
        return job

    def get_job(self, job_id: str) -> Optional[JobPosting]:
        with self._lock:
            job = self._jobs.get(job_id)
            return job.model_copy(deep=True) if job else None

    def list_jobs(self) -> List[JobPosting]:
        with self._lock:
            return [job.model_copy(deep=True) for job in self._jobs.values()]

    # Applications

    def add_application(self, application: Application) -> Application:
        """Insert a new application; one per (job, applicant) pair."""
        pair = (application.job_id, application.applicant_id)
        with self._lock:
            if pair in self._pairs:
                raise DuplicateApplicationError(
                    f"Applicant {application.applicant_id} already applied to job {application.job_id}"
                )
            if application.id in self._applications:
                raise DuplicateApplicationError(f"Application {application.id} already exists")
            self._applications[application.id] = application.model_copy(deep=True)
            self._pairs[pair] = application.id
        return application

    def get_application(self, application_id: str) -> Application:
        with self._lock:
            try:
                return self._applications[application_id].model_copy(deep=True)
            except KeyError:
                raise ApplicationNotFoundError(application_id) from None

    def list_applications(
        self,
        role_type: Optional[RoleType] = None,
        status: Optional[ApplicationStatus] = None,
    ) -> List[Application]:
        with self._lock:
            return [
                application.model_copy(deep=True)
                for application in self._applications.values()
                if (role_type is None or application.role_type == role_type)
                and (status is None or application.status == status)
            ]

    def list_pending_technical(self) -> List[Application]:
        """Technical applications the bot may still move."""
        with self._lock:
            return [
                application.model_copy(deep=True)
                for application in self._applications.values()
                if application.role_type == RoleType.TECHNICAL
                and application.status not in FINAL_STATUSES
            ]

    def save(
        self,
        application: Application,
        expected_status: Union[ApplicationStatus, str],
    ) -> Application:
        """
        Replace a stored application if its status is still ``expected_status``.

        Raises:
            ApplicationNotFoundError: Nothing stored under the application's id
            StaleApplicationError: Another writer changed the status first
        """
        expected = ApplicationStatus.parse(expected_status)
        with self._lock:
            current = self._applications.get(application.id)
            if current is None:
                raise ApplicationNotFoundError(application.id)
            if current.status != expected:
                raise StaleApplicationError(application.id, expected.value, current.status.value)
            self._applications[application.id] = application.model_copy(deep=True)
        return application

    def __len__(self) -> int:
        with self._lock:
            return len(self._applications)

    # Serialization

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                jobs=[job.model_copy(deep=True) for job in self._jobs.values()],
                applications=[app.model_copy(deep=True) for app in self._applications.values()],
            )

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> "ApplicationStore":
        return cls(jobs=snapshot.jobs, applications=snapshot.applications)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ApplicationStore":
        """Load a store from a JSON document with ``jobs`` and ``applications`` arrays."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        store = cls.from_snapshot(StoreSnapshot.model_validate(data))
        store.logger.info(
            "Loaded application store",
            path=str(path),
            jobs=len(store._jobs),
            applications=len(store),
        )
        return store

    def dump(self, path: Union[str, Path]) -> None:
        """Write the store to ``path``, replacing any existing file in one step."""
        path = Path(path)
        payload = self.snapshot().model_dump(mode="json")
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            tmp_path.replace(path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
        self.logger.info("Saved application store", path=str(path), applications=len(self))
