"""Skill extraction from résumé text against a fixed catalog."""

from typing import List, Optional, Tuple

# Catalog order is the output order of extract_skills.
SKILL_CATALOG: Tuple[str, ...] = (
    "javascript", "python", "java", "react", "node.js", "mongodb", "sql",
    "html", "css", "git", "docker", "kubernetes", "aws", "azure",
    "machine learning", "artificial intelligence", "data analysis",
    "project management", "agile", "scrum", "leadership", "communication",
)


def extract_skills(text: Optional[str], catalog: Tuple[str, ...] = SKILL_CATALOG) -> List[str]:
    """Return catalog skills that occur in ``text`` (case-insensitive substring match).

    Matching is by substring, so "javascript" also reports "java".
    """
    if not text:
        return []
    lowered = text.lower()
    found: List[str] = []
    for skill in catalog:
        if skill.lower() in lowered and skill not in found:
            found.append(skill)
    return found
