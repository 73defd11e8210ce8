"""
Property-based tests for résumé match scoring.

Covers determinism, the [0, 100] range, empty-input handling, alias
equivalence and the legacy keyword-overlap scorer.
"""

from unittest.mock import patch

import pytest
from hypothesis import given, strategies as st, settings

from hireflow.core.exceptions import UnknownScorerError
from hireflow.jobs.matcher import (
    KeywordOverlapScorer,
    TfidfMatchScorer,
    compute_legacy_keyword_score,
    compute_match_score,
    get_scorer,
    resolve_scoring_text,
    score_with_fallback,
)


VOCABULARY = [
    "python", "django", "react.js", "reactjs", "node.js", "js", "typescript",
    "sql", "c++", "c#", "docker", "aws", "the", "and", "of", "engineer",
    "senior", "mongo", "-", ".", "...", "Résumé", "!!!",
]


@st.composite
def document_strategy(draw):
    """Generate résumé-like text mixing known terms with arbitrary unicode."""
    parts = draw(st.lists(
        st.one_of(st.sampled_from(VOCABULARY), st.text(max_size=12)),
        max_size=40,
    ))
    return " ".join(parts)


skills_strategy = st.lists(st.sampled_from(VOCABULARY + ["Python", "SQL"]), max_size=6)


class TestMatchScoreProperties:
    """Property tests for the TF-IDF scorer."""

    @given(document_strategy(), document_strategy(), skills_strategy)
    @settings(max_examples=100)
    def test_score_is_bounded_integer(self, resume, description, skills):
        """Property 1: the score is always an integer in [0, 100]."""
        score = compute_match_score(resume, description, skills)
        assert isinstance(score, int)
        assert 0 <= score <= 100

    @given(document_strategy(), document_strategy(), skills_strategy)
    @settings(max_examples=50)
    def test_score_is_deterministic(self, resume, description, skills):
        """Property 2: identical inputs produce identical scores."""
        assert compute_match_score(resume, description, skills) == compute_match_score(
            resume, description, list(skills)
        )

    @given(document_strategy(), document_strategy())
    @settings(max_examples=50)
    def test_score_is_symmetric_without_skills(self, a, b):
        """Property 3: cosine similarity does not depend on argument order."""
        assert compute_match_score(a, b, []) == compute_match_score(b, a, [])

    @given(document_strategy())
    @settings(max_examples=50)
    def test_empty_resume_scores_zero(self, description):
        """Property 4: an empty résumé never matches anything."""
        assert compute_match_score("", description, []) == 0

    def test_both_empty(self):
        assert compute_match_score("", "", []) == 0
        assert compute_match_score(None, None, None) == 0

    def test_empty_resume_against_description(self):
        assert compute_match_score("", "anything", []) == 0

    def test_stop_words_only(self):
        assert compute_match_score("the and of", "the it", ["a"]) == 0

    def test_identical_documents_score_full(self):
        assert compute_match_score("python django", "python django", []) == 100

    def test_disjoint_documents_score_zero(self):
        assert compute_match_score("python", "java", []) == 0

    def test_very_long_resume(self):
        resume = "python developer " * 5000
        score = compute_match_score(resume, "python developer wanted", ["Python"])
        assert 0 < score <= 100

    def test_alias_spellings_score_identically(self):
        description = "needs react"
        assert compute_match_score("I know reactjs", description, []) == compute_match_score(
            "I know react.js", description, []
        )
        assert compute_match_score("I know reactjs", description, []) > 0

    def test_required_skills_raise_overlap(self):
        resume = "python sql docker"
        without = compute_match_score(resume, "backend role", [])
        with_skills = compute_match_score(resume, "backend role", ["Python", "SQL", "Docker"])
        assert with_skills > without

    def test_malformed_skills_are_tolerated(self):
        assert compute_match_score("python", "role", "python") > 0
        assert compute_match_score("python", "role", [None, 3, "Python"]) > 0


class TestTfidfValues:
    """Exact scores, worked by hand with idf = ln(3 / (df + 1)) + 1.

    Shared terms weigh 1 and unshared terms weigh w = 1 + ln(1.5), so with
    k shared terms and a, b unshared terms per side the similarity is
    k / sqrt((k + a*w^2) * (k + b*w^2)).
    """

    def test_one_shared_one_unshared_each(self):
        # 1 / (1 + w^2) = 0.3361
        assert compute_match_score("python sql", "python java", []) == 34

    def test_repeated_words_count_once(self):
        assert compute_match_score("python python sql", "python java", []) == 34

    def test_two_shared_one_extra(self):
        # 2 / sqrt((2 + w^2) * 2) = 0.7093
        assert compute_match_score("python sql docker", "python sql", []) == 71

    def test_required_skills_join_the_job_document(self):
        # 1 / sqrt(1 + w^2) = 0.5797
        assert compute_match_score("python", "developer", ["Python"]) == 58

    @pytest.mark.parametrize("similarity,expected", [(0.125, 13), (0.625, 63), (0.124, 12)])
    def test_similarity_rounds_half_up(self, similarity, expected):
        with patch("hireflow.jobs.matcher.cosine_similarity", return_value=[[similarity]]):
            assert compute_match_score("python sql", "python java", []) == expected


class TestLegacyKeywordScore:
    """Keyword-overlap scoring."""

    def test_partial_overlap_rounds(self):
        assert compute_legacy_keyword_score("python and sql", ["Python", "SQL", "Java"]) == 67

    def test_no_keywords(self):
        assert compute_legacy_keyword_score("python", []) == 0
        assert compute_legacy_keyword_score("python", None) == 0

    def test_full_overlap(self):
        assert compute_legacy_keyword_score("Python, SQL", ["python", "sql"]) == 100

    def test_empty_resume(self):
        assert compute_legacy_keyword_score("", ["python"]) == 0

    def test_half_rounds_up(self):
        assert compute_legacy_keyword_score("python", ["python", "go"]) == 50
        assert compute_legacy_keyword_score("a", ["a", "b", "c", "d", "e", "f", "g", "h"]) == 13

    @given(document_strategy(), skills_strategy)
    @settings(max_examples=50)
    def test_bounded(self, resume, keywords):
        assert 0 <= compute_legacy_keyword_score(resume, keywords) <= 100


class TestScorerSelection:

    def test_get_scorer_by_name(self):
        assert isinstance(get_scorer("tfidf"), TfidfMatchScorer)
        assert isinstance(get_scorer("KEYWORD"), KeywordOverlapScorer)

    def test_unknown_scorer(self):
        with pytest.raises(UnknownScorerError):
            get_scorer("bm25")

    def test_unknown_scorer_is_value_error(self):
        with pytest.raises(ValueError):
            get_scorer("")


class TestFallback:
    """Skills stand in for the résumé when no text is available."""

    def test_resolve_prefers_resume_text(self):
        assert resolve_scoring_text("python dev", ["Go"]) == "python dev"

    def test_resolve_falls_back_to_skills(self):
        assert resolve_scoring_text("   ", ["Python", "Django"]) == "Python Django"

    def test_resolve_nothing(self):
        assert resolve_scoring_text(None, None) == ""
        assert resolve_scoring_text("", []) == ""

    def test_score_with_skills_only(self):
        score = score_with_fallback("", "python developer", ["Python"], provided_skills=["Python", "Django"])
        assert score == compute_match_score("Python Django", "python developer", ["Python"])
        assert score > 0

    def test_score_with_nothing(self):
        assert score_with_fallback("", "python developer", ["Python"], provided_skills=[]) == 0

    def test_score_with_keyword_strategy(self):
        score = score_with_fallback(
            "python and sql", "", ["Python", "SQL", "Java"], scorer=KeywordOverlapScorer()
        )
        assert score == 67
