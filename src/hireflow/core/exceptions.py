"""Exception hierarchy for hireflow.

Data-quality problems (empty résumés, malformed scores, missing jobs) are not
errors here; they degrade to documented defaults. These exceptions cover
programmer errors and conflicts the caller has to act on.
"""


class HireflowError(Exception):
    """Base class for all hireflow errors."""


class InvalidStatusError(HireflowError, ValueError):
    """A value outside the closed set of application statuses."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid application status: {value!r}")


class UnknownScorerError(HireflowError, ValueError):
    """Requested match scorer strategy does not exist."""


class TransitionNotAllowedError(HireflowError):
    """The actor's role may not change this application's status."""


class JobNotOpenError(HireflowError):
    """Applications can only be created against active job postings."""


class DuplicateApplicationError(HireflowError):
    """An applicant already applied to this job."""


class StaleApplicationError(HireflowError):
    """Stored status changed between read and save."""

    def __init__(self, application_id: str, expected: str, actual: str):
        self.application_id = application_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Application {application_id} is {actual!r}, expected {expected!r}"
        )


class ApplicationNotFoundError(HireflowError, KeyError):
    """No application stored under the given id."""
