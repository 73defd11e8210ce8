"""Résumé to job matching scorers.

Two independent strategies are provided and callers pick one explicitly:

- ``TfidfMatchScorer``: TF-IDF cosine similarity between the résumé and the
  job description plus required skills, over a two-document corpus.
- ``KeywordOverlapScorer``: share of required keywords found verbatim in the
  résumé. Kept for callers that predate text similarity.

Neither scorer raises for empty or malformed text; both return an integer
in [0, 100].
"""

from typing import Iterable, List, Optional, Protocol, Sequence

from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from hireflow.core.exceptions import UnknownScorerError
from hireflow.core.models import clamp_score
from hireflow.jobs.text import expand_tokens, tokenize
from hireflow.utils.logging import get_logger

logger = get_logger(__name__)


def _clean_skills(skills: Optional[Iterable[object]]) -> List[str]:
    if not skills:
        return []
    if isinstance(skills, str):
        return [skills]
    return [str(skill) for skill in skills if skill is not None]


def _term_vectorizer() -> TfidfVectorizer:
    # Documents are expanded term sets, so every term counts once.
    # Smoothed idf: ln((1 + n) / (1 + df)) + 1.
    return TfidfVectorizer(analyzer=sorted, smooth_idf=True, norm=None)


def resolve_scoring_text(
    resume_text: Optional[str],
    skills: Optional[Sequence[object]] = None,
) -> str:
    """Pick the text to score: résumé text, else the joined skills, else empty."""
    if resume_text and resume_text.strip():
        return resume_text
    cleaned = _clean_skills(skills)
    if cleaned:
        return " ".join(cleaned)
    return ""


class MatchScorer(Protocol):
    """Strategy interface for résumé/job scoring."""

    name: str

    def score(
        self,
        resume_text: Optional[str],
        job_description: Optional[str],
        required_skills: Optional[Sequence[object]] = None,
    ) -> int:
        ...


class TfidfMatchScorer:
    """TF-IDF cosine similarity scorer."""

    name = "tfidf"

    def score(
        self,
        resume_text: Optional[str],
        job_description: Optional[str],
        required_skills: Optional[Sequence[object]] = None,
    ) -> int:
        """
        Score a résumé against a job description and its required skills.

        Args:
            resume_text: Plain résumé text (may be empty)
            job_description: Free-text job description
            required_skills: Ordered required skill names

        Returns:
            Integer compatibility score between 0 and 100
        """
        skills = " ".join(skill.lower() for skill in _clean_skills(required_skills))
        resume_terms = expand_tokens(tokenize(resume_text))
        job_terms = expand_tokens(tokenize(f"{job_description or ''} {skills}"))

        if not resume_terms and not job_terms:
            return 0

        matrix = _term_vectorizer().fit_transform([resume_terms, job_terms])
        similarity = float(cosine_similarity(matrix[0], matrix[1])[0][0])
        return clamp_score(similarity * 100)


class KeywordOverlapScorer:
    """Percentage of required keywords present in the résumé text."""

    name = "keyword"

    def score(
        self,
        resume_text: Optional[str],
        job_description: Optional[str] = None,
        required_skills: Optional[Sequence[object]] = None,
    ) -> int:
        keywords = _clean_skills(required_skills)
        if not keywords:
            return 0
        text = (resume_text or "").lower()
        matched = [keyword for keyword in keywords if keyword.lower() in text]
        return clamp_score(len(matched) / len(keywords) * 100)


_SCORERS = {
    TfidfMatchScorer.name: TfidfMatchScorer,
    KeywordOverlapScorer.name: KeywordOverlapScorer,
}


def get_scorer(name: str) -> MatchScorer:
    """Resolve a scorer strategy by name."""
    try:
        return _SCORERS[name.lower()]()
    except KeyError:
        raise UnknownScorerError(
            f"Unknown scorer {name!r}; expected one of {sorted(_SCORERS)}"
        ) from None


def compute_match_score(
    resume_text: Optional[str],
    job_description: Optional[str],
    required_skills: Optional[Sequence[object]] = None,
) -> int:
    """TF-IDF compatibility score in [0, 100]."""
    return TfidfMatchScorer().score(resume_text, job_description, required_skills)


def compute_legacy_keyword_score(
    resume_text: Optional[str],
    required_keywords: Optional[Sequence[object]] = None,
) -> int:
    """Keyword-overlap score in [0, 100]; 0 when no keywords are required."""
    return KeywordOverlapScorer().score(resume_text, None, required_keywords)


def score_with_fallback(
    resume_text: Optional[str],
    job_description: Optional[str],
    required_skills: Optional[Sequence[object]] = None,
    provided_skills: Optional[Sequence[object]] = None,
    scorer: Optional[MatchScorer] = None,
) -> int:
    """Score using the résumé text, or the applicant's skills when no text is available."""
    scorer = scorer or TfidfMatchScorer()
    text = resolve_scoring_text(resume_text, provided_skills)
    if not text:
        logger.debug("No résumé text or skills to score", scorer=scorer.name)
        return 0
    return scorer.score(text, job_description, required_skills)
