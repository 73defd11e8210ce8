"""Résumé matching and application intake."""

from .matcher import (
    MatchScorer,
    TfidfMatchScorer,
    KeywordOverlapScorer,
    compute_match_score,
    compute_legacy_keyword_score,
    get_scorer,
    resolve_scoring_text,
    score_with_fallback,
)
from .extractor import (
    SKILL_CATALOG,
    extract_skills
)
from .application import (
    ApplicationWorkflow,
    decode_plain_text
)

__all__ = [
    "MatchScorer",
    "TfidfMatchScorer",
    "KeywordOverlapScorer",
    "compute_match_score",
    "compute_legacy_keyword_score",
    "get_scorer",
    "resolve_scoring_text",
    "score_with_fallback",
    "SKILL_CATALOG",
    "extract_skills",
    "ApplicationWorkflow",
    "decode_plain_text"
]
