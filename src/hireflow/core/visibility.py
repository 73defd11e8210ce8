"""Field-level visibility rules for application records."""

from typing import Any, Dict, Union

from hireflow.core.models import Application, ParticipantRole

# Only these roles may read the numeric match score.
MATCH_SCORE_READERS = frozenset({ParticipantRole.ADMIN, ParticipantRole.BOT})

_PRIVILEGED_FIELDS = {"match_score"}


def can_view_match_score(role: Union[ParticipantRole, str]) -> bool:
    try:
        return ParticipantRole(role) in MATCH_SCORE_READERS
    except ValueError:
        return False


def application_view(
    application: Application,
    viewer_role: Union[ParticipantRole, str],
) -> Dict[str, Any]:
    """Serialize an application for a viewer, dropping fields the role may not read."""
    exclude = set() if can_view_match_score(viewer_role) else set(_PRIVILEGED_FIELDS)
    return application.model_dump(mode="json", exclude=exclude)
