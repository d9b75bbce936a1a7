"""
Classification module for Focus Firewall.

Handles keyword extraction from the focus goal and relevance
classification of content item titles.
"""

from .rules import (
    classify,
    extract_keywords,
    is_relevant,
    ClassificationResult,
    STOP_WORDS,
    get_stop_words,
)
from .run import ScanCoordinator

__all__ = [
    "classify",
    "extract_keywords",
    "is_relevant",
    "ClassificationResult",
    "STOP_WORDS",
    "get_stop_words",
    "ScanCoordinator",
]
