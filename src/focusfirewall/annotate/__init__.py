"""
Annotation module for Focus Firewall.

Applies and removes the visual "irrelevant to current goal" mark on
content items.
"""

from .marker import (
    AnnotationController,
    is_marked,
    BLURRED_CLASS,
    OVERLAY_CLASS,
    BADGE_CLASS,
    STYLESHEET_ID,
    POSITIONED_ATTR,
)

__all__ = [
    "AnnotationController",
    "is_marked",
    "BLURRED_CLASS",
    "OVERLAY_CLASS",
    "BADGE_CLASS",
    "STYLESHEET_ID",
    "POSITIONED_ATTR",
]
