"""Tokenization and term expansion shared by the match scorers."""

import re
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "and", "or", "but", "if", "then", "else", "for", "on", "in", "at",
    "to", "of", "a", "an", "with", "by", "from", "as", "is", "are", "was",
    "were", "be", "been", "this", "that", "these", "those", "it", "its", "we",
    "you", "they", "i", "my", "our", "your", "their",
})

# Ecosystem spellings collapsed onto one canonical term.
ALIASES: Dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "react.js": "react",
    "reactjs": "react",
    "node.js": "node",
    "nodejs": "node",
    "next.js": "nextjs",
    "express.js": "express",
    "mongo": "mongodb",
}


def _build_sibling_table(aliases: Dict[str, str]) -> Dict[str, FrozenSet[str]]:
    groups: Dict[str, Set[str]] = {}
    for spelling, canonical in aliases.items():
        groups.setdefault(canonical, set()).add(spelling)
    return {
        spelling: frozenset(groups[canonical] - {spelling})
        for spelling, canonical in aliases.items()
    }


# Other spellings sharing an alias target, e.g. reactjs -> {react.js}.
ALIAS_SIBLINGS: Dict[str, FrozenSet[str]] = _build_sibling_table(ALIASES)

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9+#.\-\s]")


def tokenize(text: Optional[str]) -> List[str]:
    """Lowercase, strip punctuation and drop stop words."""
    if not text:
        return []
    cleaned = _DISALLOWED_CHARS.sub(" ", text.lower())
    return [token for token in cleaned.split() if token not in STOP_WORDS]


def _variants(token: str) -> Set[str]:
    found = set()
    if "." in token:
        found.update(part for part in token.split(".") if part)
        stripped = token.replace(".", "")
        if stripped:
            found.add(stripped)
    alias = ALIASES.get(token)
    if alias:
        found.add(alias)
        found.update(ALIAS_SIBLINGS[token])
    return found


def expand_tokens(tokens: Iterable[str]) -> Set[str]:
    """Expand tokens with dot variants and aliases until nothing new appears.

    Input spellings are kept, so "react.js" still matches literally
    while also contributing "react", "js", "reactjs" and "javascript".
    """
    expanded: Set[str] = set()
    pending = [token for token in tokens if token]
    while pending:
        token = pending.pop()
        if token in expanded:
            continue
        expanded.add(token)
        pending.extend(_variants(token) - expanded)
    return expanded

