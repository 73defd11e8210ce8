"""
hireflow: résumé matching and automated status progression for an applicant tracker.

This package scores résumés against job postings with a lightweight TF-IDF
similarity (or a legacy keyword-overlap scorer), and runs the bot that advances
technical applications through Applied, Reviewed and Interview to Offer or
Rejected while keeping an append-only audit trail.
"""

__version__ = "0.1.0"

from hireflow.jobs.matcher import compute_match_score, compute_legacy_keyword_score
from hireflow.jobs.extractor import extract_skills
from hireflow.jobs.application import ApplicationWorkflow
from hireflow.automation.progression import ProgressionEngine, run_progression_batch
from hireflow.storage.store import ApplicationStore

__all__ = [
    "compute_match_score",
    "compute_legacy_keyword_score",
    "extract_skills",
    "ApplicationWorkflow",
    "ProgressionEngine",
    "run_progression_batch",
    "ApplicationStore",
]
