"""
Relevance rules for Focus Firewall.

Turns the user's focus goal into a keyword set and decides whether a
content title is relevant to it. English-only support (EN).

Matching is plain substring containment, not whole-word matching: the
keyword "art" matches "smart contract". Callers that need word boundaries
must not rely on this module for it.
"""

from typing import FrozenSet, Iterable, List
from dataclasses import dataclass, field
import re


@dataclass
class ClassificationResult:
    """Result of classifying a title against a keyword set."""
    is_relevant: bool
    matched_keywords: List[str] = field(default_factory=list)


# Common English function words that never count as keywords
STOP_WORDS = frozenset([
    # Articles & conjunctions
    "the", "a", "an", "and", "or", "but", "so", "if", "than", "then",
    # Prepositions
    "in", "on", "at", "to", "for", "of", "with", "by", "from", "as",
    "into", "over", "after", "up", "down", "out", "off", "about",
    # Pronouns & determiners
    "i", "my", "me", "we", "our", "you", "your", "it", "its",
    "this", "that", "all", "each", "some",
    # Auxiliary verbs
    "is", "be", "was", "are", "am", "do", "does", "did",
    "will", "would", "could", "should", "can",
    # Negation & question words
    "not", "no", "just", "how", "what", "when", "where", "why", "which", "who",
])

MIN_KEYWORD_LENGTH = 3

_NON_WORD = re.compile(r"[^a-z0-9\s]")


def extract_keywords(text: str) -> FrozenSet[str]:
    """
    Extract the keyword set from a goal text.

    Lower-cases the text, replaces everything outside [a-z0-9] and
    whitespace with a space, splits on whitespace and drops short tokens
    and stop words.

    Args:
        text: Goal text (may be empty or None)

    Returns:
        Frozen set of keywords (empty when nothing usable remains)
    """
    if not text:
        return frozenset()

    tokens = _NON_WORD.sub(" ", text.lower()).split()

    return frozenset(
        token
        for token in tokens
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS
    )


def classify(keywords: Iterable[str], title: str) -> ClassificationResult:
    """
    Classify a title against a keyword set.

    An empty keyword set makes every title relevant (fail-open). Otherwise
    the title is relevant when at least one keyword is a case-insensitive
    substring of it.

    Args:
        keywords: Keywords from extract_keywords()
        title: Display title of a content item

    Returns:
        ClassificationResult with the verdict and the keywords that matched
    """
    keywords = list(keywords)
    if not keywords:
        return ClassificationResult(is_relevant=True)

    title_lower = (title or "").lower()
    matched = sorted(k for k in keywords if k.lower() in title_lower)

    return ClassificationResult(is_relevant=bool(matched), matched_keywords=matched)


def is_relevant(keywords: Iterable[str], title: str) -> bool:
    """Return True if the title is relevant to the keyword set."""
    return classify(keywords, title).is_relevant


def get_stop_words() -> FrozenSet[str]:
    """Get the stop-word list for reference/tuning."""
    return STOP_WORDS
